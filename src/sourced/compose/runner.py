"""Subprocess-based runner for the docker-compose CLI."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import IO, Protocol

from sourced.compose.workdir import resolve_workdir

logger = logging.getLogger(__name__)


class ComposeError(RuntimeError):
    """docker-compose invocation failed."""


class ComposeNotFoundError(ComposeError):
    """docker-compose executable is not installed or not in PATH."""


class ComposeCommandError(ComposeError):
    """docker-compose exited with a non-zero code."""

    def __init__(self, message: str, *, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class OrchestrationRunner(Protocol):
    """Protocol implemented by docker-compose runners."""

    def run(self, *args: str) -> None:
        """Run a subcommand with the terminal attached."""

    def run_with_io(
        self,
        *args: str,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        """Run a subcommand, sending its output to the given streams."""


class ComposeRunner:
    """Run docker-compose subcommands inside the sourced working directory."""

    def __init__(self, *, command: tuple[str, ...], workdir: Path) -> None:
        self.command = command
        self.workdir = workdir

    def run(self, *args: str) -> None:
        """Run a subcommand with the terminal attached."""

        self.run_with_io(*args)

    def run_with_io(
        self,
        *args: str,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        """Run a subcommand, sending its output to the given streams.

        ``None`` inherits the parent's stream. In-memory streams such as
        ``io.StringIO`` receive the captured text once the process exits.
        """

        workdir = resolve_workdir(self.workdir)
        argv = [*self.command, *args]
        logger.debug("Running %s in %s", argv, workdir)

        stdout_target = _stream_target(stdout)
        stderr_target = _stream_target(stderr)
        try:
            process = subprocess.Popen(  # noqa: S603
                argv,
                cwd=workdir,
                stdout=stdout_target,
                stderr=stderr_target,
                text=True,
            )
        except FileNotFoundError as error:
            raise ComposeNotFoundError(
                f"docker-compose command not found: {self.command[0]}",
            ) from error
        except OSError as error:
            raise ComposeError(f"docker-compose failed to start: {error}") from error

        captured_stdout, captured_stderr = process.communicate()
        if stdout_target == subprocess.PIPE and stdout is not None:
            stdout.write(captured_stdout)
        if stderr_target == subprocess.PIPE and stderr is not None:
            stderr.write(captured_stderr)

        if process.returncode != 0:
            raise ComposeCommandError(
                f"docker-compose {' '.join(args)} failed with exit code={process.returncode}",
                exit_code=process.returncode,
            )


def _stream_target(stream: IO[str] | None) -> IO[str] | int | None:
    if stream is None:
        return None
    try:
        stream.fileno()
    except (AttributeError, OSError):
        return subprocess.PIPE
    return stream
