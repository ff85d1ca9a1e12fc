"""structlog configuration for portkill."""

import atexit
import logging
import sys
from typing import TextIO

import structlog

_log_stream: TextIO | None = None


def configure_logging(level: str = "warning", log_file: str | None = None) -> None:
    """
    Configure structlog once for the whole process.

    Args:
        level: Minimum level name ("debug", "info", "warning", ...).
        log_file: Append log lines to this file instead of stderr.
    """
    global _log_stream

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    close_log_stream()
    _log_stream = open(log_file, "a", encoding="utf-8") if log_file else sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=_log_stream),
        cache_logger_on_first_use=False,
    )


def close_log_stream() -> None:
    """Close the log file opened by configure_logging, if any. stderr is left open."""
    global _log_stream

    if _log_stream is not None and _log_stream is not sys.stderr:
        _log_stream.close()
    _log_stream = None


atexit.register(close_log_stream)
