from __future__ import annotations

from .config import LoggingConfig, to_bitlog_level
from .core import configure_logging, get_logger, reset_logging
from .handlers import BitlogHandler, install_bridge, uninstall_bridge

__all__ = [
    "LoggingConfig",
    "BitlogHandler",
    "configure_logging",
    "get_logger",
    "install_bridge",
    "reset_logging",
    "to_bitlog_level",
    "uninstall_bridge",
]
