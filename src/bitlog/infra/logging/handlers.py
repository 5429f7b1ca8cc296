from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides the bridge from the standard ``logging`` module into a bitlog
Logger, and the tagging mechanism that lets the package tell its own
handlers apart from handlers installed by the host application.
"""

import logging
from typing import Optional

from bitlog.core.emitter import Logger
from bitlog.core.record import SourceLocation, display_path
from bitlog.infra.logging.config import INTERNAL_LOGGER_NAME, to_bitlog_level

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_bitlog_handler"


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as an internally-managed handler.

    Args:
        handler: The logging handler instance to tag.
    """
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was installed by this package.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# BRIDGE HANDLER
# ==============================================================================

class BitlogHandler(logging.Handler):
    """
    Forward standard logging records into a bitlog Logger.

    The original record's file, function and line are kept as the source
    location. Records from the package's own namespace are ignored so the
    pipeline's debug messages never loop back into it.
    """

    def __init__(self, target: Logger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target = target
        self.addFilter(_exclude_internal)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.exc_info:
                message = f"{message}\n{self._exception_text(record)}"
            location = SourceLocation(
                file=display_path(record.pathname),
                function=record.funcName or "<module>",
                line=record.lineno,
            )
            self.target.log_at(to_bitlog_level(record.levelno), message, location)
        except Exception:
            self.handleError(record)

    def _exception_text(self, record: logging.LogRecord) -> str:
        formatter = self.formatter or logging.Formatter()
        return formatter.formatException(record.exc_info)


def _exclude_internal(record: logging.LogRecord) -> bool:
    name = record.name
    return not (name == INTERNAL_LOGGER_NAME or name.startswith(INTERNAL_LOGGER_NAME + "."))


def install_bridge(
        target: Logger,
        logger_name: Optional[str] = None,
        level: int = logging.NOTSET,
) -> BitlogHandler:
    """
    Attach a BitlogHandler to a standard logger, idempotently.

    Args:
        target: Logger that receives the forwarded records.
        logger_name: Standard logger to hook; the root logger when None.
        level: Minimum standard logging level to forward.

    Returns:
        BitlogHandler: The installed (or already present) handler.
    """
    std_logger = logging.getLogger(logger_name)
    for h in std_logger.handlers:
        if isinstance(h, BitlogHandler) and _is_our_handler(h) and h.target is target:
            return h

    handler = BitlogHandler(target, level)
    _tag_handler(handler)
    std_logger.addHandler(handler)
    return handler


def uninstall_bridge(logger_name: Optional[str] = None) -> int:
    """
    Detach every bridge handler installed by this package.

    Args:
        logger_name: Standard logger to clean; the root logger when None.

    Returns:
        int: Number of handlers removed.
    """
    std_logger = logging.getLogger(logger_name)
    removed = 0
    for h in list(std_logger.handlers):
        if isinstance(h, BitlogHandler) and _is_our_handler(h):
            std_logger.removeHandler(h)
            h.close()
            removed += 1
    return removed
