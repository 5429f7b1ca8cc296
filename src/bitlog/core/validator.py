from __future__ import annotations

"""
Configuration Validation Service.

Converts untrusted configuration values (CLI arguments, JSON files,
environment variables) into a strictly typed LoggerConfig. Invalid values
either raise (strict mode) or are replaced by the defaults with a warning.
"""

import logging
import os
import re
from typing import Any, List, Tuple

from bitlog.domain.config import (
    DEFAULT_FILEPATH,
    DEFAULT_LEVEL,
    DEFAULT_MAX_SIZE,
    LoggerConfig,
)
from bitlog.domain.levels import parse_level_mask

logger = logging.getLogger(__name__)

_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*([kmg]i?b?|b)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {
    "": 1,
    "b": 1,
    "k": 1024,
    "m": 1024 ** 2,
    "g": 1024 ** 3,
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[LoggerConfig, List[str]]:
    """
    Validate a raw configuration mapping and build a LoggerConfig.

    Args:
        config: Raw mapping with optional 'filepath', 'level' and 'max_size'.
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[LoggerConfig, List[str]]: The typed configuration and the
                                        warnings produced while coercing.
    """
    warnings: List[str] = []

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return LoggerConfig(), warnings

    filepath = _as_filepath(config.get("filepath"), warnings, strict)
    level = _as_level(config.get("level"), warnings, strict)
    max_size = _as_size(config.get("max_size"), warnings, strict)

    return LoggerConfig(
        destination_path=filepath,
        enabled_mask=level,
        max_file_size=max_size,
    ), warnings


def parse_size(value: Any) -> int:
    """
    Parse a byte count with an optional binary unit suffix.

    Accepts integers and strings such as "1024", "512K", "10MiB" or "1g".

    Args:
        value: Raw size value.

    Returns:
        int: Number of bytes.

    Raises:
        ValueError: If the string is malformed or the value is negative.
        TypeError: If the value is neither an int nor a string.
    """
    if isinstance(value, bool):
        raise TypeError("Size must be an int or a string, not bool.")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Size must be non-negative, got {value}.")
        return value
    if not isinstance(value, str):
        raise TypeError(f"Size must be an int or a string, not {type(value).__name__}.")

    match = _SIZE_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid size expression: '{value}'.")

    number, unit = match.groups()
    unit_key = (unit or "")[:1].lower()
    return int(number) * _SIZE_UNITS[unit_key]


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_filepath(value: Any, warnings: List[str], strict: bool) -> str:
    """Normalize the destination path; empty means stdout."""
    if value is None:
        return DEFAULT_FILEPATH
    if isinstance(value, (str, os.PathLike)):
        p = os.fspath(value).strip()
        if not p:
            return ""
        return os.path.expandvars(os.path.expanduser(p))

    msg = f"Invalid field 'filepath': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return DEFAULT_FILEPATH


def _as_level(value: Any, warnings: List[str], strict: bool) -> int:
    """Coerce a mask expression into an integer bitmask."""
    if value is None:
        return DEFAULT_LEVEL
    try:
        return parse_level_mask(value)
    except (TypeError, ValueError) as e:
        if strict:
            raise
        warnings.append(f"Invalid field 'level': {e} Using fallback.")
        return DEFAULT_LEVEL


def _as_size(value: Any, warnings: List[str], strict: bool) -> int:
    """Coerce a byte count, supporting unit suffixes."""
    if value is None:
        return DEFAULT_MAX_SIZE
    try:
        return parse_size(value)
    except (TypeError, ValueError) as e:
        if strict:
            raise
        warnings.append(f"Invalid field 'max_size': {e} Using fallback.")
        return DEFAULT_MAX_SIZE
