"""Working directory resolution for docker-compose invocations."""

from __future__ import annotations

from pathlib import Path

COMPOSE_FILE_NAME = "docker-compose.yml"


class WorkdirError(RuntimeError):
    """Working directory cannot be used; retrying will not help."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class WorkdirNotFoundError(WorkdirError):
    """Working directory does not exist."""


class InvalidWorkdirError(WorkdirError):
    """Working directory path is not a directory."""


class MalformedWorkdirError(WorkdirError):
    """Working directory lacks the compose file."""


def resolve_workdir(path: Path) -> Path:
    """Return the absolute working directory or raise a ``WorkdirError``."""

    resolved = path.expanduser().absolute()
    if not resolved.exists():
        raise WorkdirNotFoundError(
            f"working directory does not exist: {resolved}. Run 'sourced init' first.",
            path=resolved,
        )
    if not resolved.is_dir():
        raise InvalidWorkdirError(
            f"working directory is not a directory: {resolved}",
            path=resolved,
        )
    if not (resolved / COMPOSE_FILE_NAME).is_file():
        raise MalformedWorkdirError(
            f"working directory is malformed, missing {COMPOSE_FILE_NAME}: {resolved}",
            path=resolved,
        )
    return resolved
