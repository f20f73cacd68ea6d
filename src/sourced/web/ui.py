"""Open the sourced UI in the browser once its container is reachable."""

from __future__ import annotations

import io
import logging
import queue
import threading
from collections.abc import Callable
from contextlib import ExitStack
from dataclasses import dataclass
from enum import StrEnum

import httpx
import rich_click as click

from sourced.compose import OrchestrationRunner, WorkdirError
from sourced.config import (
    UI_CONTAINER_PORT,
    UI_DEFAULT_PASSWORD,
    UI_DEFAULT_USER,
    UI_SERVICE_NAME,
)
from sourced.web.browser import open_url
from sourced.web.spinner import start_spinner

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 1.0
SPINNER_THRESHOLD_SECONDS = 5.0
SPINNER_MESSAGE = "Initializing source{d}..."

WILDCARD_HOST = "0.0.0.0"  # noqa: S104
LOOPBACK_HOST = "127.0.0.1"

BANNER = f"""
Once source{{d}} is fully initialized, the UI will be available, by default at:
  http://{LOOPBACK_HOST}:{UI_CONTAINER_PORT}
  user:{UI_DEFAULT_USER}
  pass:{UI_DEFAULT_PASSWORD}
"""


class UIError(RuntimeError):
    """UI could not be opened."""


class PortNotFoundError(UIError):
    """The UI service reported no published port."""


class BrowserOpenError(UIError):
    """The browser launcher failed."""


class UITimeoutError(UIError):
    """The UI did not become available in time."""


class Readiness(StrEnum):
    FAIL_FAST = "fail_fast"
    READY = "ready"
    NOT_READY = "not_ready"


@dataclass(slots=True)
class ReadinessResult:
    """Outcome of one ``docker-compose port`` probe."""

    state: Readiness
    address: str = ""
    error: Exception | None = None


def connect_url(address: str) -> str:
    """Build the URL to open for an address reported by docker-compose.

    docker-compose reports ``0.0.0.0``, which is right as a bind address
    but not as a connect address.
    """

    return f"http://{address.replace(WILDCARD_HOST, LOOPBACK_HOST, 1)}"


def is_reachable(url: str) -> bool:
    # Loopback addresses are never sent through a proxy from the environment.
    try:
        httpx.get(url, timeout=1.0, trust_env=False)
    except httpx.HTTPError:
        return False
    return True


def format_duration(seconds: float) -> str:
    return f"{seconds:g}s"


class UIOpener:
    """Resolve the published UI address and open it in the browser."""

    def __init__(
        self,
        runner: OrchestrationRunner,
        *,
        browser: Callable[[str], None] | None = None,
        reachable: Callable[[str], bool] | None = None,
        echo: Callable[[str], None] | None = None,
        spinner_factory: Callable[[str], Callable[[], None]] | None = None,
        poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        self._runner = runner
        self._browser = browser or open_url
        self._reachable = reachable or is_reachable
        self._echo = echo or click.echo
        self._spinner_factory = spinner_factory or start_spinner
        self._poll_interval = poll_interval_seconds

    def check_readiness(self, stdout: io.StringIO) -> ReadinessResult:
        """Ask docker-compose for the UI port, writing the answer to ``stdout``."""

        stdout.seek(0)
        stdout.truncate()
        try:
            self._runner.run_with_io(
                "port",
                UI_SERVICE_NAME,
                str(UI_CONTAINER_PORT),
                stdout=stdout,
                stderr=io.StringIO(),
            )
        except WorkdirError as error:
            return ReadinessResult(state=Readiness.FAIL_FAST, error=error)
        except Exception as error:  # noqa: BLE001
            return ReadinessResult(state=Readiness.NOT_READY, error=error)
        return ReadinessResult(state=Readiness.READY, address=stdout.getvalue())

    def open_ui(self, timeout_seconds: float) -> None:
        """Open the UI, waiting at most ``timeout_seconds`` for it to come up.

        Raises the working directory error unchanged when the environment is
        broken. Every other failure is raised as a ``UIError``.
        """

        stdout = io.StringIO()
        first = self.check_readiness(stdout)
        if first.state is Readiness.FAIL_FAST and first.error is not None:
            raise first.error

        done: queue.Queue[Exception | None] = queue.Queue(maxsize=1)
        cancelled = threading.Event()
        worker = threading.Thread(
            target=self._wait_and_open,
            args=(first, stdout, done, cancelled),
            name="ui-opener",
            daemon=True,
        )
        worker.start()

        self._echo(BANNER)

        with ExitStack() as stack:
            if timeout_seconds > SPINNER_THRESHOLD_SECONDS:
                stack.callback(self._spinner_factory(SPINNER_MESSAGE))

            try:
                error = done.get(timeout=timeout_seconds)
            except queue.Empty:
                cancelled.set()
                raise UITimeoutError(
                    "error opening the UI, the container is not running after "
                    f"{format_duration(timeout_seconds)}",
                ) from None

        if error is not None:
            raise error

    def _wait_and_open(
        self,
        first: ReadinessResult,
        stdout: io.StringIO,
        done: queue.Queue[Exception | None],
        cancelled: threading.Event,
    ) -> None:
        try:
            outcome = self._poll_and_open(first, stdout, cancelled)
        except Exception as error:  # noqa: BLE001
            logger.debug("UI opener failed", exc_info=True)
            outcome = UIError(f"error opening the UI: {error}")
            outcome.__cause__ = error
        if not cancelled.is_set():
            done.put(outcome)

    def _poll_and_open(
        self,
        first: ReadinessResult,
        stdout: io.StringIO,
        cancelled: threading.Event,
    ) -> Exception | None:
        result = first
        while result.state is not Readiness.READY:
            logger.debug("UI service not ready yet: %s", result.error)
            if cancelled.wait(self._poll_interval):
                return None
            result = self.check_readiness(stdout)

        # docker-compose prints one line per address family
        lines = result.address.strip().splitlines()
        address = lines[0].strip() if lines else ""
        if not address:
            return PortNotFoundError(f"could not find the public port of {UI_SERVICE_NAME}")

        url = connect_url(address)
        while not self._reachable(url):
            logger.debug("UI at %s is not answering yet", url)
            if cancelled.wait(self._poll_interval):
                return None

        try:
            self._browser(url)
        except Exception as error:  # noqa: BLE001
            wrapped = BrowserOpenError(f"could not open the browser: {error}")
            wrapped.__cause__ = error
            return wrapped
        return None
