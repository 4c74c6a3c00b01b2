"""Logging setup for command line use."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    """Configure process-wide logging once.

    Library code only emits records through module loggers; the handler is
    installed by the CLI so that embedding applications keep their own setup.
    """
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        logging.getLogger("bookingwindow").setLevel((level or "WARNING").upper())
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))

    package_logger = logging.getLogger("bookingwindow")
    package_logger.addHandler(handler)
    package_logger.setLevel((level or "WARNING").upper())
    _LOGGER_INITIALIZED = True
