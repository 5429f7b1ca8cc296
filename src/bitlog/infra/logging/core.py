from __future__ import annotations

"""
Internal Diagnostics Orchestrator.

Maintains the idempotent lifecycle of the stderr handler attached to the
package's own 'bitlog' logger. Host applications that already configure the
standard logging module do not need this; it exists for the command line
driver and for debugging the library in isolation.
"""

import logging
import sys

from bitlog.infra.logging.config import _LEVEL_MAP, INTERNAL_LOGGER_NAME, LoggingConfig
from bitlog.infra.logging.handlers import BitlogHandler, _is_our_handler, _tag_handler

# Internal state flag for idempotency tracking
_CONFIGURED_FLAG_ATTR: str = "_bitlog_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package logger, once.

    Args:
        cfg: Structural configuration for the diagnostics.
        force: If True, replace the existing handler and level.

    Returns:
        logging.Logger: The package logger.
    """
    pkg_logger = logging.getLogger(INTERNAL_LOGGER_NAME)

    already_configured = bool(getattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False))
    if already_configured and not force:
        return pkg_logger

    level_int = _parse_level(cfg.level)
    pkg_logger.setLevel(level_int)
    _remove_our_handlers(pkg_logger)

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(logging.Formatter(cfg.fmt, datefmt=cfg.datefmt))
    _tag_handler(sh)
    pkg_logger.addHandler(sh)

    setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, True)
    return pkg_logger


def reset_logging() -> None:
    """Detach the package's stderr handler and clear the configured flag."""
    pkg_logger = logging.getLogger(INTERNAL_LOGGER_NAME)
    _remove_our_handlers(pkg_logger)
    pkg_logger.setLevel(logging.NOTSET)
    setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named standard logger.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(pkg_logger: logging.Logger) -> None:
    """Detach all internally-managed stream handlers."""
    for h in list(pkg_logger.handlers):
        if _is_our_handler(h) and not isinstance(h, BitlogHandler):
            pkg_logger.removeHandler(h)
            h.close()
