from __future__ import annotations

"""
Unit tests for the standard logging bridge and internal diagnostics setup.

Verifies:
1. Level translation from the logging module to bitlog severities.
2. Forwarding with the original call site preserved.
3. Idempotent install/uninstall and exclusion of the 'bitlog' namespace.
"""

import io
import logging
from typing import Generator

import pytest

from bitlog.core.emitter import Logger
from bitlog.domain.levels import LogLevel
from bitlog.infra.logging import (
    BitlogHandler,
    LoggingConfig,
    configure_logging,
    install_bridge,
    reset_logging,
    to_bitlog_level,
    uninstall_bridge,
)

BRIDGE_LOGGER = "bitlog_tests.bridge"


@pytest.fixture(autouse=True)
def clean_bridge() -> Generator[None, None, None]:
    """Remove bridge handlers and package diagnostics around each test."""
    uninstall_bridge(BRIDGE_LOGGER)
    reset_logging()
    std = logging.getLogger(BRIDGE_LOGGER)
    std.setLevel(logging.DEBUG)
    std.propagate = False
    yield
    uninstall_bridge(BRIDGE_LOGGER)
    reset_logging()


@pytest.mark.parametrize("levelno,expected", [
    (logging.CRITICAL, LogLevel.FATAL),
    (logging.ERROR, LogLevel.ERROR),
    (logging.WARNING, LogLevel.WARN),
    (logging.INFO, LogLevel.INFO),
    (logging.DEBUG, LogLevel.DEBUG),
    (5, LogLevel.TRACE),
    (logging.NOTSET, LogLevel.TRACE),
    (25, LogLevel.INFO),
])
def test_to_bitlog_level(levelno, expected):
    assert to_bitlog_level(levelno) == expected


def test_forwards_records_with_original_location(bound_logger: Logger, out: io.StringIO):
    install_bridge(bound_logger, BRIDGE_LOGGER)

    logging.getLogger(BRIDGE_LOGGER).warning("disk at %d%%", 91)

    line = out.getvalue()
    assert line.startswith("[W] ")
    assert "/test_forwards_records_with_original_location:" in line
    assert line.endswith("]: disk at 91%\n")


def test_bridge_respects_bitlog_mask(bound_logger: Logger, out: io.StringIO):
    bound_logger.state.set_level(LogLevel.ERROR)
    install_bridge(bound_logger, BRIDGE_LOGGER)

    std = logging.getLogger(BRIDGE_LOGGER)
    std.info("filtered")
    std.error("kept")

    assert "filtered" not in out.getvalue()
    assert "kept" in out.getvalue()


def test_exception_text_is_appended(bound_logger: Logger, out: io.StringIO):
    install_bridge(bound_logger, BRIDGE_LOGGER)
    try:
        raise KeyError("missing")
    except KeyError:
        logging.getLogger(BRIDGE_LOGGER).exception("lookup failed")

    text = out.getvalue()
    assert text.startswith("[E] ")
    assert "Traceback" in text
    assert "KeyError: 'missing'" in text


def test_install_is_idempotent(bound_logger: Logger):
    first = install_bridge(bound_logger, BRIDGE_LOGGER)
    second = install_bridge(bound_logger, BRIDGE_LOGGER)

    assert first is second
    handlers = [h for h in logging.getLogger(BRIDGE_LOGGER).handlers if isinstance(h, BitlogHandler)]
    assert len(handlers) == 1


def test_uninstall_leaves_foreign_handlers(bound_logger: Logger):
    std = logging.getLogger(BRIDGE_LOGGER)
    foreign = logging.NullHandler()
    std.addHandler(foreign)
    install_bridge(bound_logger, BRIDGE_LOGGER)

    assert uninstall_bridge(BRIDGE_LOGGER) == 1
    assert foreign in std.handlers
    std.removeHandler(foreign)


def test_internal_namespace_is_not_forwarded(bound_logger: Logger, out: io.StringIO):
    handler = BitlogHandler(bound_logger)
    record = logging.LogRecord("bitlog.core.state", logging.ERROR, __file__, 1, "internal", None, None)

    handler.handle(record)

    assert out.getvalue() == ""


def test_configure_logging_is_idempotent():
    pkg = configure_logging(LoggingConfig(level="DEBUG"))
    count = len(pkg.handlers)

    configure_logging(LoggingConfig(level="DEBUG"))

    assert len(pkg.handlers) == count
    assert pkg.level == logging.DEBUG


def test_configure_logging_force_replaces_level():
    configure_logging(LoggingConfig(level="DEBUG"))
    pkg = configure_logging(LoggingConfig(level="error"), force=True)
    assert pkg.level == logging.ERROR
    assert len(pkg.handlers) == 1


def test_unknown_level_name_defaults_to_warning():
    pkg = configure_logging(LoggingConfig(level="chatty"), force=True)
    assert pkg.level == logging.WARNING
