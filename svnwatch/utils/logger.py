"""
svnwatch Structured Logging Module.

Provides consistent, structured logging throughout the application.
Requires Python 3.11+.
"""

import atexit
import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import Processor

from svnwatch.utils.config import get_settings


def _add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add application context to all log entries."""
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["version"] = settings.app_version
    return event_dict


def _open_log_stream() -> TextIO:
    settings = get_settings()
    if settings.logging.file_path is not None:
        settings.logging.file_path.parent.mkdir(parents=True, exist_ok=True)
        stream = settings.logging.file_path.open("a", encoding="utf-8", errors="backslashreplace")
        atexit.register(stream.close)
        return stream
    return sys.stderr


def configure_logging() -> None:
    """
    Configure structured logging for the application.

    Call this once at application startup. Log output goes to stderr
    unless LOG_FILE_PATH is set.
    """
    settings = get_settings()
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    # Common processors for all output formats
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_app_context,
    ]

    if settings.logging.format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    stream = _open_log_stream()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging to share the stream
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=level,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


# Pre-configured logger for quick imports
logger = get_logger("svnwatch")


class LoggerMixin:
    """
    Mixin class to add logging capability to any class.

    Usage:
        class MyClass(LoggerMixin):
            def my_method(self):
                self.log.info("doing something", key="value")
    """

    @property
    def log(self) -> structlog.stdlib.BoundLogger:
        """Get logger bound to this class name."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
