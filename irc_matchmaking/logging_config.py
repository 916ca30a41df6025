"""
Console logging for the IRC matchmaking client.

``LoggerConfigurator`` installs a colorlog handler on the root logger;
``log_structured_error`` is the single place failures are reported from.
"""

import logging
import os
import sys
from typing import Any, TextIO

import colorlog

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def debug_enabled() -> bool:
    """Whether ``DEBUG`` is set to a truthy value (``1``, ``true``, ``yes``)."""
    return os.environ.get("DEBUG", "").lower() in ("1", "true", "yes")


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``[CATEGORY] message | Exception: ... | Context: k=v | ...``."""
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))


class LoggerConfigurator:
    """Route all records to a colored stream handler.

    The level is DEBUG when ``debug_enabled()``, INFO otherwise.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stderr

    def configure(self) -> int:
        level = logging.DEBUG if debug_enabled() else logging.INFO
        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(
            colorlog.ColoredFormatter(
                LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS
            )
        )
        root = logging.getLogger()
        root.handlers[:] = [handler]
        root.setLevel(level)
        # asyncio debug chatter is noise for a single-connection client
        logging.getLogger("asyncio").setLevel(logging.WARNING)
        return level
