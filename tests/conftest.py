from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures providing isolated logger state, so tests never leak
   configuration into each other through the process-wide logger.
"""

import io
import os
import sys
from typing import Generator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from bitlog import api  # noqa: E402
from bitlog.core.emitter import Logger  # noqa: E402
from bitlog.core.state import LoggerState  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def state() -> LoggerState:
    """Return a LoggerState holding the defaults."""
    return LoggerState()


@pytest.fixture
def out() -> io.StringIO:
    """In-memory replacement for stdout."""
    return io.StringIO()


@pytest.fixture
def bound_logger(state: LoggerState, out: io.StringIO) -> Logger:
    """Return a Logger writing stdout records and diagnostics into ``out``."""
    return Logger(state, stream=out)


@pytest.fixture(autouse=True)
def reset_default_logger() -> Generator[None, None, None]:
    """Discard the process-wide logger before and after each test."""
    api.reset()
    yield
    api.reset()
