"""Web UI opening: readiness polling, browser launch and terminal spinner."""

from sourced.web.ui import (
    BrowserOpenError,
    PortNotFoundError,
    UIError,
    UIOpener,
    UITimeoutError,
)

__all__ = [
    "BrowserOpenError",
    "PortNotFoundError",
    "UIError",
    "UIOpener",
    "UITimeoutError",
]
