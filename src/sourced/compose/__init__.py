"""docker-compose invocation and working directory handling."""

from sourced.compose.runner import (
    ComposeCommandError,
    ComposeError,
    ComposeNotFoundError,
    ComposeRunner,
    OrchestrationRunner,
)
from sourced.compose.workdir import (
    InvalidWorkdirError,
    MalformedWorkdirError,
    WorkdirError,
    WorkdirNotFoundError,
    resolve_workdir,
)

__all__ = [
    "ComposeCommandError",
    "ComposeError",
    "ComposeNotFoundError",
    "ComposeRunner",
    "InvalidWorkdirError",
    "MalformedWorkdirError",
    "OrchestrationRunner",
    "WorkdirError",
    "WorkdirNotFoundError",
    "resolve_workdir",
]
