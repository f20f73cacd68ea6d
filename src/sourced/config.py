"""Runtime configuration for the sourced CLI."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

# Service name used in docker-compose.yml for the srcd/sourced-ui image
UI_SERVICE_NAME: Final = "sourced-ui"
UI_CONTAINER_PORT: Final = 8088
UI_DEFAULT_USER: Final = "admin"
UI_DEFAULT_PASSWORD: Final = "admin"

DEFAULT_WORKDIR = Path.home() / ".sourced" / "workdir"


class ConfigError(ValueError):
    """Configuration value from the environment is unusable."""


@dataclass(slots=True)
class ComposeSettings:
    """External orchestration tool settings."""

    command: tuple[str, ...] = ("docker-compose",)
    workdir: Path = DEFAULT_WORKDIR


@dataclass(slots=True)
class WebSettings:
    """UI opening settings."""

    web_timeout_seconds: float = 2.0
    start_timeout_seconds: float = 60.0


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    compose: ComposeSettings = field(default_factory=ComposeSettings)
    web: WebSettings = field(default_factory=WebSettings)

    @classmethod
    def from_env(cls, workdir: Path | None = None) -> Settings:
        """Load settings from environment with defaults for a local install."""

        return cls(
            compose=ComposeSettings(
                command=_command_from_env("SOURCED_COMPOSE_COMMAND", "docker-compose"),
                workdir=workdir
                or Path(os.getenv("SOURCED_WORKDIR", str(DEFAULT_WORKDIR))).expanduser(),
            ),
            web=WebSettings(
                web_timeout_seconds=_env_float("SOURCED_WEB_TIMEOUT_SECONDS", 2.0),
                start_timeout_seconds=_env_float("SOURCED_START_TIMEOUT_SECONDS", 60.0),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error if any value is unusable."""

        if not self.compose.command:
            raise ConfigError("SOURCED_COMPOSE_COMMAND must not be empty.")
        if self.web.web_timeout_seconds <= 0:
            raise ConfigError("SOURCED_WEB_TIMEOUT_SECONDS must be > 0.")
        if self.web.start_timeout_seconds <= 0:
            raise ConfigError("SOURCED_START_TIMEOUT_SECONDS must be > 0.")


def _command_from_env(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    try:
        return tuple(shlex.split(raw))
    except ValueError as error:
        raise ConfigError(f"Invalid command for {name}: {raw!r}") from error


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as error:
        raise ConfigError(f"Invalid number for {name}: {raw!r}") from error
