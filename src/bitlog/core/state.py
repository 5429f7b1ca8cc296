from __future__ import annotations

"""
Shared Logger State.

Holds the single configuration record read by every log call and mutated
by the explicit setters. One lock guards the whole record; it is held only
while a field is replaced or the snapshot is copied, never across I/O.
"""

import logging
import sys
import threading
from dataclasses import replace
from typing import Optional, TextIO

from bitlog.domain.config import LoggerConfig, get_default_config
from bitlog.domain.levels import describe_mask, is_enabled

logger = logging.getLogger(__name__)


class LoggerState:
    """
    Lock-guarded holder of the current LoggerConfig.

    The stored config is immutable; setters swap in a modified copy so a
    snapshot taken by a reader is never observed half-updated.
    """

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        self._lock = threading.Lock()
        self._config = config if config is not None else get_default_config()

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def set_level(self, mask: int) -> None:
        """
        Replace the enabled mask.

        No validation is performed; bits outside the six severities are
        stored as-is and simply never match a record.
        """
        with self._lock:
            self._config = replace(self._config, enabled_mask=int(mask))
        logger.debug(f"LoggerState: level mask set to {int(mask)} ({describe_mask(int(mask))})")

    def set_filepath(self, path: str) -> None:
        """Replace the destination path; an empty string routes to stdout."""
        with self._lock:
            self._config = replace(self._config, destination_path=path or "")
        logger.debug(f"LoggerState: destination set to {path or '<stdout>'}")

    def set_max_size(self, nbytes: int) -> None:
        """Replace the truncation threshold, in bytes."""
        with self._lock:
            self._config = replace(self._config, max_file_size=int(nbytes))
        logger.debug(f"LoggerState: max file size set to {int(nbytes)} bytes")

    def apply(self, config: LoggerConfig) -> None:
        """Replace the whole configuration in one step."""
        with self._lock:
            self._config = config
        logger.debug(f"LoggerState: configuration replaced with {config}")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def snapshot(self) -> LoggerConfig:
        """Return a consistent copy of all configuration fields."""
        with self._lock:
            return self._config

    def is_enabled(self, level: int) -> bool:
        return is_enabled(self.snapshot().enabled_mask, level)

    def is_stdout_target(self) -> bool:
        return self.snapshot().is_stdout

    def dump(self, stream: Optional[TextIO] = None) -> None:
        """
        Print the current configuration for diagnostics.

        Args:
            stream: Output stream; defaults to the current ``sys.stdout``.
        """
        cfg = self.snapshot()
        out = stream if stream is not None else sys.stdout
        if out is None:
            return
        print(
            "Logger {\n"
            f"    filepath: {cfg.destination_path!r},\n"
            f"    level: {cfg.enabled_mask} ({describe_mask(cfg.enabled_mask)}),\n"
            f"    size: {cfg.max_file_size},\n"
            "}",
            file=out,
        )
        out.flush()
