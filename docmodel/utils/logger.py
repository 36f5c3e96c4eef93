"""
Logger - Injected warning sink for model building and deserialization

A thin layer over the standard library logging module. Every
deserialization session receives one of these explicitly; nothing in the
model writes to a global sink.

Counts what it has seen so callers can decide whether a load that
completed still deserves to fail the surrounding build step.

Usage:
    logger = Logger(level=LogLevel.WARN)
    logger.warn("Serialized project referenced reflection 12, ...")

    if logger.has_warnings():
        print(f"{logger.warning_count} warning(s)")
"""

import logging
from enum import IntEnum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import LoggingConfig


LOGGER_NAME = "docmodel"


class LogLevel(IntEnum):
    """Severity levels, lowest first."""
    VERBOSE = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    NONE = 4


# Level names as written in config files
LEVEL_NAMES = {
    "verbose": LogLevel.VERBOSE,
    "info": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "error": LogLevel.ERROR,
    "none": LogLevel.NONE,
}

_STDLIB_LEVELS = {
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class Logger:
    """
    Level-filtered, counting logger.

    Messages below `level` are dropped before they reach the standard
    library logger. Warnings and errors are counted whether or not they
    are displayed.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        treat_warnings_as_errors: bool = False,
        name: str = LOGGER_NAME
    ):
        self.level = level
        self.treat_warnings_as_errors = treat_warnings_as_errors
        self.warning_count = 0
        self.error_count = 0
        self._logger = logging.getLogger(name)

    @classmethod
    def from_config(cls, config: 'LoggingConfig') -> 'Logger':
        """Build a logger from the `logging` config section."""
        return cls(
            level=LEVEL_NAMES.get(config.level, LogLevel.INFO),
            treat_warnings_as_errors=config.treat_warnings_as_errors
        )

    def verbose(self, message: str):
        self.log(message, LogLevel.VERBOSE)

    def info(self, message: str):
        self.log(message, LogLevel.INFO)

    def warn(self, message: str):
        if self.treat_warnings_as_errors:
            self.log(message, LogLevel.ERROR)
        else:
            self.log(message, LogLevel.WARN)

    def error(self, message: str):
        self.log(message, LogLevel.ERROR)

    def log(self, message: str, level: LogLevel):
        """
        Record a message at the given level.

        Args:
            message: Human-readable message
            level: Severity; counted for WARN and ERROR
        """
        if level == LogLevel.WARN:
            self.warning_count += 1
        elif level == LogLevel.ERROR:
            self.error_count += 1

        if level < self.level or level == LogLevel.NONE:
            return
        self.emit(message, level)

    def emit(self, message: str, level: LogLevel):
        """Forward a message that passed the level filter."""
        self._logger.log(_STDLIB_LEVELS[level], message)

    def has_warnings(self) -> bool:
        return self.warning_count > 0

    def has_errors(self) -> bool:
        return self.error_count > 0

    def reset(self):
        """Clear warning and error counts."""
        self.warning_count = 0
        self.error_count = 0


def level_from_name(name: str) -> Optional[LogLevel]:
    """Look up a level by its config name (case-insensitive)."""
    return LEVEL_NAMES.get(name.lower()) if name else None
