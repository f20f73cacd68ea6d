"""Default browser launcher."""

from __future__ import annotations

import logging
import webbrowser

logger = logging.getLogger(__name__)


class BrowserError(RuntimeError):
    """No browser could be launched for the URL."""


def open_url(url: str) -> None:
    """Open ``url`` in a new tab of the user's default browser."""

    try:
        opened = webbrowser.open(url, new=2)
    except webbrowser.Error as error:
        raise BrowserError(str(error)) from error
    if not opened:
        raise BrowserError(f"no runnable browser found to open {url}")
    logger.info("Opened %s in browser", url)
