"""Structured logging for Horseman sessions."""

import logging
import os
import sys
from enum import IntEnum
from typing import Any, Dict, List

import structlog

LOGGER_NAME = "horseman"


class LogLevel(IntEnum):
    """Verbosity levels; a session logs every level up to its ``verbose``."""
    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3

    @property
    def method(self) -> str:
        """Name of the structlog method for this level."""
        return "warning" if self is LogLevel.WARN else self.name.lower()


_STDLIB_LEVELS: Dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}

_configured = False


def _renderer() -> Any:
    """
    Console output on a terminal, JSON lines otherwise.

    HORSEMAN_LOG_FORMAT=json or =console forces one of them; NO_COLOR
    turns colors off.
    """
    forced = os.getenv("HORSEMAN_LOG_FORMAT", "").lower()
    colors = os.getenv("NO_COLOR") is None
    if forced == "json":
        return structlog.processors.JSONRenderer()
    if forced == "console" or (sys.stderr.isatty() and colors):
        return structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.processors.JSONRenderer()


def configure_logging(verbose: int = 0, **bindings: Any) -> structlog.BoundLogger:
    """
    Configure structlog for Horseman and return the package logger.

    structlog is configured once per process. The stdlib threshold of the
    ``horseman`` logger follows the most verbose session created so far;
    each session filters its own records by ``verbose``.

    Args:
        verbose: Verbosity level (0-3)
        **bindings: Context bound to every record of the returned logger

    Returns:
        Configured logger instance
    """
    global _configured
    if not _configured:
        processors: List[Any] = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(),
        ]
        structlog.configure(
            processors=processors,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stderr)
        _configured = True

    level = _STDLIB_LEVELS[LogLevel(max(0, min(verbose, LogLevel.DEBUG)))]
    stdlib_logger = logging.getLogger(LOGGER_NAME)
    if stdlib_logger.level == logging.NOTSET or level < stdlib_logger.level:
        stdlib_logger.setLevel(level)

    return structlog.get_logger(LOGGER_NAME).bind(verbose=verbose, **bindings)


class HorsemanLogger:
    """
    Category-aware wrapper around a structlog logger.

    Every record carries a ``category`` such as ``horseman:navigate``.
    Records above the session's ``verbose`` level are dropped here.
    """

    def __init__(self, logger: structlog.BoundLogger, verbose: int = 0):
        self.logger = logger
        self.verbose = verbose

    def enabled(self, level: LogLevel) -> bool:
        return level <= self.verbose

    def _emit(self, level: LogLevel, category: str, message: str, fields: Dict[str, Any]) -> None:
        if not self.enabled(level):
            return
        getattr(self.logger, level.method)(message, category=category, **fields)

    def error(self, category: str, message: str, **kwargs: Any) -> None:
        self._emit(LogLevel.ERROR, category, message, kwargs)

    def warn(self, category: str, message: str, **kwargs: Any) -> None:
        self._emit(LogLevel.WARN, category, message, kwargs)

    def info(self, category: str, message: str, **kwargs: Any) -> None:
        self._emit(LogLevel.INFO, category, message, kwargs)

    def debug(self, category: str, message: str, **kwargs: Any) -> None:
        self._emit(LogLevel.DEBUG, category, message, kwargs)

    def child(self, **bindings: Any) -> 'HorsemanLogger':
        """Create a child logger with additional context."""
        return HorsemanLogger(self.logger.bind(**bindings), self.verbose)
