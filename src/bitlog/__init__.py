from __future__ import annotations

"""
bitlog: leveled logging to stdout or a single size-bounded file.

    import bitlog

    bitlog.set_level(bitlog.LogLevel.INFO | bitlog.LogLevel.ERROR)
    bitlog.set_filepath("/tmp/app.log")
    bitlog.set_max_size(1024 * 1024)
    bitlog.info("started worker %d", 3)
"""

from bitlog.api import (
    debug,
    dump,
    error,
    fatal,
    get_logger,
    info,
    init,
    init_from_env,
    log,
    reset,
    set_filepath,
    set_level,
    set_max_size,
    trace,
    warn,
)
from bitlog.core.emitter import Logger
from bitlog.core.record import LogRecord, SourceLocation
from bitlog.core.state import LoggerState
from bitlog.domain.config import DEFAULT_MAX_SIZE, LoggerConfig
from bitlog.domain.levels import LogLevel, level_flag

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MAX_SIZE",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LoggerConfig",
    "LoggerState",
    "SourceLocation",
    "debug",
    "dump",
    "error",
    "fatal",
    "get_logger",
    "info",
    "init",
    "init_from_env",
    "level_flag",
    "log",
    "reset",
    "set_filepath",
    "set_level",
    "set_max_size",
    "trace",
    "warn",
]
