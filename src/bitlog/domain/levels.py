from __future__ import annotations

"""
Severity Level Definitions.

Defines the bitmask severities used to filter log statements. Every discrete
severity occupies exactly one bit, so any subset of severities can be enabled
by OR-ing the flags together.
"""

import enum
from typing import Any, Dict, Union


class LogLevel(enum.IntFlag):
    """
    Bitmask of log severities.

    A record at a single-bit level is emitted iff ``enabled_mask & level``.
    """
    NONE = 0
    TRACE = 1
    DEBUG = 2
    INFO = 4
    WARN = 8
    ERROR = 16
    FATAL = 32
    ALL = 63


# Discrete severities in ascending order (aggregates excluded)
SEVERITIES = (
    LogLevel.TRACE,
    LogLevel.DEBUG,
    LogLevel.INFO,
    LogLevel.WARN,
    LogLevel.ERROR,
    LogLevel.FATAL,
)

_LEVEL_FLAGS: Dict[int, str] = {
    int(LogLevel.TRACE): "T",
    int(LogLevel.DEBUG): "D",
    int(LogLevel.INFO): "I",
    int(LogLevel.WARN): "W",
    int(LogLevel.ERROR): "E",
    int(LogLevel.FATAL): "F",
}

UNKNOWN_FLAG = "U"

# Accepted textual names, including common aliases
_LEVEL_NAMES: Dict[str, LogLevel] = {
    "NONE": LogLevel.NONE,
    "TRACE": LogLevel.TRACE,
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARN": LogLevel.WARN,
    "WARNING": LogLevel.WARN,
    "ERROR": LogLevel.ERROR,
    "FATAL": LogLevel.FATAL,
    "CRITICAL": LogLevel.FATAL,
    "ALL": LogLevel.ALL,
}


def level_flag(level: Any) -> str:
    """
    Map a single severity to its one-character tag.

    Combined masks, zero, out-of-range values and non-integers map to 'U'.

    Args:
        level: Severity value to translate.

    Returns:
        str: One of 'T', 'D', 'I', 'W', 'E', 'F' or 'U'.
    """
    if isinstance(level, bool) or not isinstance(level, int):
        return UNKNOWN_FLAG
    return _LEVEL_FLAGS.get(int(level), UNKNOWN_FLAG)


def is_enabled(mask: int, level: int) -> bool:
    """Return True if ``level`` has at least one bit set in ``mask``."""
    return (int(mask) & int(level)) != 0


def parse_level_mask(value: Union[int, str]) -> int:
    """
    Convert a textual or numeric mask expression into an integer mask.

    Accepts integers, digit strings ("20") and severity names joined by
    '|' or ',' ("INFO|ERROR", "warn, error"). Names are case-insensitive.

    Args:
        value: Raw mask expression.

    Returns:
        int: The combined bitmask.

    Raises:
        ValueError: If a name is not a known severity or the mask is negative.
        TypeError: If the value is neither an int nor a string.
    """
    if isinstance(value, bool):
        raise TypeError("Level mask must be an int or a string, not bool.")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Level mask must be non-negative, got {value}.")
        return int(value)

    if not isinstance(value, str):
        raise TypeError(f"Level mask must be an int or a string, not {type(value).__name__}.")

    text = value.strip()
    if not text:
        raise ValueError("Level mask expression is empty.")

    if text.isdigit():
        return int(text)

    mask = 0
    for part in text.replace(",", "|").split("|"):
        name = part.strip().upper()
        if not name:
            continue
        if name not in _LEVEL_NAMES:
            raise ValueError(f"Unknown log level name: '{part.strip()}'.")
        mask |= int(_LEVEL_NAMES[name])
    return mask


def describe_mask(mask: int) -> str:
    """
    Render a mask as a '|'-joined list of enabled severity names.

    Args:
        mask: Integer bitmask.

    Returns:
        str: For example "INFO|ERROR", or "NONE" when no severity is enabled.
    """
    names = [lvl.name for lvl in SEVERITIES if int(mask) & int(lvl)]
    return "|".join(names) if names else "NONE"
