from __future__ import annotations

"""
Process-Wide Logging API.

Wraps one default Logger, built on first use under a lock (or explicitly
via ``init``), so any thread can log without carrying a Logger around.
Code that prefers dependency injection can construct its own
``Logger(LoggerState())`` and ignore this module.
"""

import logging
import threading
from typing import Any, Mapping, Optional

from bitlog.core.emitter import Logger
from bitlog.core.state import LoggerState
from bitlog.core.validator import validate_config
from bitlog.domain.config import LoggerConfig, load_config
from bitlog.domain.levels import LogLevel

logger = logging.getLogger(__name__)

_default_logger: Optional[Logger] = None
_default_lock = threading.Lock()


# -----------------------------------------------------------------------------
# INITIALIZATION
# -----------------------------------------------------------------------------

def get_logger() -> Logger:
    """
    Return the process-wide Logger, creating it with defaults on first use.

    Returns:
        Logger: The shared instance.
    """
    global _default_logger
    if _default_logger is None:
        with _default_lock:
            if _default_logger is None:
                _default_logger = Logger(LoggerState())
    return _default_logger


def init(config: Optional[LoggerConfig] = None) -> Logger:
    """
    Apply a configuration to the process-wide Logger in one step.

    Intended to be called once at startup, before worker threads start.

    Args:
        config: Configuration to apply; the defaults when None.

    Returns:
        Logger: The shared instance.
    """
    target = get_logger()
    target.state.apply(config if config is not None else LoggerConfig())
    return target


def init_from_env(
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
) -> Logger:
    """
    Configure the process-wide Logger from a JSON file and BITLOG_* variables.

    Invalid values are logged and replaced by the defaults.

    Args:
        path: Optional JSON configuration file.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Logger: The shared instance.
    """
    raw = load_config(path, environ)
    config, warnings = validate_config(raw, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    return init(config)


def reset() -> None:
    """Drop the process-wide Logger; the next call builds a fresh one."""
    global _default_logger
    with _default_lock:
        _default_logger = None


# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------

def set_level(mask: int) -> None:
    get_logger().state.set_level(mask)


def set_filepath(path: str) -> None:
    get_logger().state.set_filepath(path)


def set_max_size(nbytes: int) -> None:
    get_logger().state.set_max_size(nbytes)


def dump() -> None:
    """Print the current configuration to standard output."""
    get_logger().dump()


# -----------------------------------------------------------------------------
# LOG STATEMENTS
# -----------------------------------------------------------------------------

def log(level: int, msg: Any = "", *args: Any) -> bool:
    return get_logger().log(level, msg, *args, stacklevel=2)


def trace(msg: Any = "", *args: Any) -> bool:
    return get_logger().log(LogLevel.TRACE, msg, *args, stacklevel=2)


def debug(msg: Any = "", *args: Any) -> bool:
    return get_logger().log(LogLevel.DEBUG, msg, *args, stacklevel=2)


def info(msg: Any = "", *args: Any) -> bool:
    return get_logger().log(LogLevel.INFO, msg, *args, stacklevel=2)


def warn(msg: Any = "", *args: Any) -> bool:
    return get_logger().log(LogLevel.WARN, msg, *args, stacklevel=2)


def error(msg: Any = "", *args: Any) -> bool:
    return get_logger().log(LogLevel.ERROR, msg, *args, stacklevel=2)


def fatal(msg: Any = "", *args: Any) -> bool:
    """Log at FATAL. Callers that want to exit must do so themselves."""
    return get_logger().log(LogLevel.FATAL, msg, *args, stacklevel=2)
