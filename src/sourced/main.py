"""CLI entrypoint for sourced."""

import logging
from collections.abc import Callable
from functools import wraps
from pathlib import Path

import rich_click as click

from sourced import __version__
from sourced.compose import ComposeError, WorkdirError
from sourced.config import ConfigError
from sourced.controllers import (
    ComposeCliController,
    PruneCommand,
    StartCommand,
    StopCommand,
    WebCommand,
)
from sourced.web import UIError

click.rich_click.USE_MARKDOWN = True
CONTROLLER = ComposeCliController()


@click.group()
@click.option(
    "--workdir",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory with docker-compose.yml. Defaults to SOURCED_WORKDIR.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="sourced")
@click.pass_context
def sourced(ctx: click.Context, workdir: Path | None, verbose: bool) -> None:
    """source{d} Community Edition command-line interface."""

    ctx.obj = workdir
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _reported(func: Callable[..., None]) -> Callable[..., None]:
    @wraps(func)
    def wrapper(*args, **kwargs) -> None:
        try:
            func(*args, **kwargs)
        except (ComposeError, ConfigError, UIError, WorkdirError) as error:
            raise click.ClickException(str(error)) from error

    return wrapper


@sourced.command("web")
@_reported
@click.pass_obj
def web(workdir: Path | None) -> None:
    """Open the web interface in your browser.

    By default at: http://127.0.0.1:8088 user:admin pass:admin
    """

    CONTROLLER.web(WebCommand(workdir=workdir))


@sourced.command("start")
@_reported
@click.pass_obj
def start(workdir: Path | None) -> None:
    """Start stopped containers and open the web interface."""

    CONTROLLER.start(StartCommand(workdir=workdir))


@sourced.command("stop")
@_reported
@click.pass_obj
def stop(workdir: Path | None) -> None:
    """Stop running containers without removing them."""

    CONTROLLER.stop(StopCommand(workdir=workdir))


@sourced.command("prune")
@click.option("--images", is_flag=True, default=False, help="Remove docker images.")
@_reported
@click.pass_obj
def prune(workdir: Path | None, images: bool) -> None:
    """Stop and remove containers and resources.

    Stops containers and removes containers, networks, and volumes created by
    `init`. Images are not deleted unless you specify the `--images` flag.
    """

    CONTROLLER.prune(PruneCommand(workdir=workdir, images=images))


if __name__ == "__main__":  # pragma: no cover
    sourced()
