"""Terminal spinner drawn from a background thread."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Callable, Sequence
from typing import TextIO

import rich_click as click

# Decided once: Windows consoles do not honour the cursor-up escape sequence.
SUPPORTS_CURSOR_REPOSITION = os.name != "nt"

BRAILLE_CHARSET = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
ASCII_CHARSET = ("|", "/", "-", "\\")
DEFAULT_INTERVAL_SECONDS = 0.2

_CURSOR_UP = "\033[A"


class Spinner:
    """Looping animation that runs until ``stop`` is called once."""

    def __init__(
        self,
        message: str,
        *,
        charset: Sequence[str] | None = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        cursor_reposition: bool = SUPPORTS_CURSOR_REPOSITION,
        stream: TextIO | None = None,
    ) -> None:
        if charset is None:
            charset = BRAILLE_CHARSET if cursor_reposition else ASCII_CHARSET
        if not charset:
            raise ValueError("Spinner charset must not be empty.")
        self.message = message
        self.charset = tuple(charset)
        self.interval_seconds = interval_seconds
        self.cursor_reposition = cursor_reposition
        self._stream = stream
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._stopped = False

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Spinner already started.")
        self._thread = threading.Thread(target=self._print_loop, name="spinner", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the animation and wait until the final message is printed."""

        if self._thread is None:
            raise RuntimeError("Spinner was not started.")
        if self._stopped:
            raise RuntimeError("Spinner already stopped.")
        self._stopped = True
        self._stop.set()
        self._thread.join()

    def render_frame(self, index: int) -> str:
        char = self.charset[index % len(self.charset)]
        if self.cursor_reposition:
            return f"{self.message} {char}\n{_CURSOR_UP}"
        return f"\r{self.message} {char}"

    def _print_loop(self) -> None:
        index = 0
        while not self._stop.is_set():
            self._write(self.render_frame(index))
            index = (index + 1) % len(self.charset)
            self._stop.wait(self.interval_seconds)
        prefix = "" if self.cursor_reposition else "\r"
        self._write(f"{prefix}{self.message}\n")

    def _write(self, text: str) -> None:
        click.echo(text, file=self._stream or sys.stdout, nl=False)


def start_spinner(message: str, **kwargs) -> Callable[[], None]:
    """Start a spinner and return the callable that stops it."""

    spinner = Spinner(message, **kwargs)
    spinner.start()
    return spinner.stop
