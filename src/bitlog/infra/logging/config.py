from __future__ import annotations

"""
Internal Logging Configuration Models.

Settings for the package's own diagnostic logging (the standard ``logging``
records emitted under the 'bitlog' namespace) and the level mappings used
when bridging standard logging records into bitlog severities.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from bitlog.domain.levels import LogLevel

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Standard logging thresholds mapped onto bitlog severities, highest first
_BRIDGE_LEVELS = (
    (logging.CRITICAL, LogLevel.FATAL),
    (logging.ERROR, LogLevel.ERROR),
    (logging.WARNING, LogLevel.WARN),
    (logging.INFO, LogLevel.INFO),
    (logging.DEBUG, LogLevel.DEBUG),
)

INTERNAL_LOGGER_NAME = "bitlog"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for the package's own stderr diagnostics.

    Attributes:
        level: Minimum severity level to capture.
        fmt: Structural format for terminal output.
        datefmt: Chronological format for timestamp generation.
    """
    level: str = "WARNING"
    fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


def to_bitlog_level(levelno: int) -> LogLevel:
    """
    Translate a standard logging level number into a bitlog severity.

    Anything below DEBUG (custom low levels, NOTSET) becomes TRACE.
    """
    for threshold, level in _BRIDGE_LEVELS:
        if levelno >= threshold:
            return level
    return LogLevel.TRACE
