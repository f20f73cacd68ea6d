"""Shared test fixtures."""

from __future__ import annotations

import io
import json
import shlex
import sys
import threading
from pathlib import Path

import pytest

from sourced.compose import ComposeCommandError

_FAKE_COMPOSE_SCRIPT = """
import json
import os
import sys

log_path = os.environ.get("FAKE_COMPOSE_LOG")
if log_path:
    with open(log_path, "a", encoding="utf-8") as handle:
        handle.write(json.dumps({"args": sys.argv[1:], "cwd": os.getcwd()}) + "\\n")

if sys.argv[1:2] == ["port"]:
    output = os.environ.get("FAKE_COMPOSE_PORT_OUTPUT")
    if output is None:
        print("No container found for sourced-ui_1", file=sys.stderr)
        raise SystemExit(1)
    print(output)

raise SystemExit(int(os.environ.get("FAKE_COMPOSE_EXIT_CODE", "0")))
"""


@pytest.fixture()
def compose_workdir(tmp_path: Path) -> Path:
    """Working directory with a docker-compose.yml in it."""
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    (workdir / "docker-compose.yml").write_text("version: '3.4'\nservices: {}\n", "utf-8")
    return workdir


@pytest.fixture()
def fake_compose(tmp_path: Path) -> tuple[str, ...]:
    """Command line of a python script standing in for docker-compose."""
    script = tmp_path / "fake_compose.py"
    script.write_text(_FAKE_COMPOSE_SCRIPT.strip() + "\n", "utf-8")
    return (sys.executable, str(script))


@pytest.fixture()
def compose_env(monkeypatch, tmp_path: Path, fake_compose, compose_workdir) -> Path:
    """Point the CLI at the fake docker-compose; returns the invocation log path."""
    log_path = tmp_path / "compose.log"
    monkeypatch.setenv("SOURCED_COMPOSE_COMMAND", shlex.join(fake_compose))
    monkeypatch.setenv("SOURCED_WORKDIR", str(compose_workdir))
    monkeypatch.setenv("FAKE_COMPOSE_LOG", str(log_path))
    monkeypatch.delenv("FAKE_COMPOSE_PORT_OUTPUT", raising=False)
    monkeypatch.delenv("FAKE_COMPOSE_EXIT_CODE", raising=False)
    return log_path


def read_compose_log(log_path: Path) -> list[dict]:
    if not log_path.exists():
        return []
    return [json.loads(line) for line in log_path.read_text("utf-8").splitlines()]


class FakeRunner:
    """Scripted docker-compose runner.

    Each call consumes one response: an exception is raised, a string is
    written to stdout. Once the script runs out ``default`` is used.
    """

    def __init__(self, responses=(), default: object = None) -> None:
        self._responses = list(responses)
        self._default = (
            default if default is not None else ComposeCommandError("not running", exit_code=1)
        )
        self._lock = threading.Lock()
        self.calls: list[tuple[str, ...]] = []

    def run(self, *args: str) -> None:
        self.run_with_io(*args)

    def run_with_io(self, *args: str, stdout=None, stderr=None) -> None:
        with self._lock:
            self.calls.append(args)
            response = self._responses.pop(0) if self._responses else self._default
        if isinstance(response, BaseException):
            raise response
        if stdout is not None:
            stdout.write(response)


class SpinnerRecorder:
    """Spinner factory that counts starts and stops instead of drawing."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.stops = 0

    def __call__(self, message: str):
        self.messages.append(message)

        def _stop() -> None:
            self.stops += 1

        return _stop


@pytest.fixture()
def spinner_recorder() -> SpinnerRecorder:
    return SpinnerRecorder()


@pytest.fixture()
def echo_buffer() -> io.StringIO:
    return io.StringIO()
