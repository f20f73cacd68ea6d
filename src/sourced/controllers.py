"""Controllers for sourced CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sourced.compose import ComposeRunner, OrchestrationRunner
from sourced.config import Settings
from sourced.web import UIOpener

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WebCommand:
    """CLI input for opening the UI."""

    workdir: Path | None = None


@dataclass(slots=True)
class StartCommand:
    """CLI input for starting the containers."""

    workdir: Path | None = None


@dataclass(slots=True)
class StopCommand:
    """CLI input for stopping the containers."""

    workdir: Path | None = None


@dataclass(slots=True)
class PruneCommand:
    """CLI input for removing containers and resources."""

    workdir: Path | None = None
    images: bool = False


class ComposeCliController:
    """Translates CLI commands into docker-compose invocations."""

    def web(self, command: WebCommand) -> None:
        settings = _settings(command.workdir)
        opener = UIOpener(self._runner(settings))
        opener.open_ui(settings.web.web_timeout_seconds)

    def start(self, command: StartCommand) -> None:
        settings = _settings(command.workdir)
        runner = self._runner(settings)
        runner.run("start")
        logger.info("Containers started, waiting for the UI")
        UIOpener(runner).open_ui(settings.web.start_timeout_seconds)

    def stop(self, command: StopCommand) -> None:
        settings = _settings(command.workdir)
        self._runner(settings).run("stop")

    def prune(self, command: PruneCommand) -> None:
        settings = _settings(command.workdir)
        self._runner(settings).run(*prune_args(images=command.images))

    def _runner(self, settings: Settings) -> OrchestrationRunner:
        return ComposeRunner(command=settings.compose.command, workdir=settings.compose.workdir)


def prune_args(*, images: bool) -> list[str]:
    args = ["down", "--volumes"]
    if images:
        args.extend(["--rmi", "all"])
    return args


def _settings(workdir: Path | None) -> Settings:
    settings = Settings.from_env(workdir=workdir)
    settings.validate()
    return settings
