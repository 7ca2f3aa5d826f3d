"""
Diagnostic logging for phpmatrix.

Every module logs through a child of the ``phpmatrix`` logger obtained
with :func:`get_logger`. Until the CLI calls :func:`setup_logging` those
loggers carry a ``NullHandler``, so importing phpmatrix as a library never
prints anything. User-facing messages go through
:mod:`phpmatrix.utils.console` instead.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from phpmatrix.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_ROOT_LOGGER_NAME = "phpmatrix"

# ANSI sequences per level name
_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"

_state_lock = threading.Lock()
_logging_configured: bool = False


def _stream_supports_color(stream: IO[str]) -> bool:
    """Return True when ANSI colors may be written to ``stream``."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color.

    Args:
        fmt: Log record format.
        datefmt: ``asctime`` format.
        use_color: Master switch; colors are emitted only when this is
            set and the handler's stream is a terminal.
    """

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color
        self.stream: Optional[IO[str]] = None

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelname)
        if color and self.use_color and _stream_supports_color(self.stream or sys.stderr):
            # Other handlers must still see the plain level name
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(record)


def verbosity_to_level(verbose: int) -> int:
    """Map the CLI's ``-v`` count to a logging level.

    No flag shows warnings only, ``-v`` adds progress (INFO) and ``-vv``
    or more enables DEBUG.
    """
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send phpmatrix log records to ``stream`` (``sys.stderr`` by default).

    Any handler installed by an earlier call is replaced, so this can be
    called once per CLI invocation.

    Args:
        level: Minimum level emitted.
        verbose: Use the timestamped format that includes logger names.
        stream: Destination stream.
    """
    global _logging_configured

    target = stream or sys.stderr
    formatter = ColoredFormatter(
        LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    formatter.stream = target

    handler = logging.StreamHandler(target)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    with _state_lock:
        root = logging.getLogger(_ROOT_LOGGER_NAME)
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        root.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the phpmatrix logger for ``name``.

    ``name`` may be relative (``"core.catalog"``) or already qualified
    (``"phpmatrix.core.catalog"``); an empty name returns the root
    ``phpmatrix`` logger.
    """
    if not name or name == _ROOT_LOGGER_NAME:
        qualified = _ROOT_LOGGER_NAME
    elif name.startswith(_ROOT_LOGGER_NAME + "."):
        qualified = name
    else:
        qualified = f"{_ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(qualified)
    parent_handlers = logger.parent.handlers if logger.parent else []
    if not logger.handlers and not parent_handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def is_logging_configured() -> bool:
    """Return True between :func:`setup_logging` and :func:`disable_logging`."""
    return _logging_configured


def disable_logging() -> None:
    """Drop the installed handler and silence phpmatrix logging."""
    global _logging_configured

    with _state_lock:
        root = logging.getLogger(_ROOT_LOGGER_NAME)
        root.handlers.clear()
        root.addHandler(logging.NullHandler())
        root.setLevel(logging.NOTSET)
        _logging_configured = False
