"""
Logging utilities for depspec.

Loggers live under the ``depspec`` namespace. Library use stays silent
through a ``NullHandler`` until :func:`setup_logging` is called, which the
CLI does once per invocation with the level from :func:`level_for_verbosity`.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from depspec.constants import (
    LOGGER_NAMESPACE,
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_setup_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI colors on a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None or not (self.use_color and self._should_use_color()):
            return super().format(record)

        # The same record reaches every handler; put the plain name back
        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain

    @staticmethod
    def _should_use_color() -> bool:
        if os.environ.get("NO_COLOR") or os.environ.get("CI"):
            return False
        try:
            return sys.stderr.isatty()
        except (AttributeError, OSError):
            return False


def level_for_verbosity(verbose: int) -> int:
    """Map a ``-v`` count to a logging level (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbose >= 2:
        return logging.DEBUG
    return logging.INFO if verbose == 1 else logging.WARNING


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send ``depspec`` log records to ``stream`` (``sys.stderr`` by default).

    Calling it again replaces the previous handler, so repeated CLI
    invocations in one process never duplicate output.

    Args:
        level: Minimum level to emit.
        verbose: Add timestamps and logger names to each line.
        stream: Output stream.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            use_color=not os.environ.get("NO_COLOR"),
        )
    )

    with _setup_lock:
        package_logger = logging.getLogger(LOGGER_NAMESPACE)
        package_logger.handlers[:] = [handler]
        package_logger.setLevel(level)
        package_logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the ``depspec`` namespace.

    Args:
        name: Logger name, either relative (``"parser"``) or fully
            qualified (``"depspec.core.parser"``).
    """
    if not name or name == LOGGER_NAMESPACE:
        qualified = LOGGER_NAMESPACE
    elif name.startswith(f"{LOGGER_NAMESPACE}."):
        qualified = name
    else:
        qualified = f"{LOGGER_NAMESPACE}.{name}"

    logger = logging.getLogger(qualified)
    if not logger.handlers and not (logger.parent and logger.parent.handlers):
        logger.addHandler(logging.NullHandler())
    return logger
