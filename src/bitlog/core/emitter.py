from __future__ import annotations

"""
Log Emission Pipeline.

Decides for each log call whether to emit, where to emit, and prepares the
destination file before every append. Runs synchronously on the calling
thread and never raises: every failure degrades to a diagnostic line on
standard output and the record is dropped.
"""

import logging
import sys
from collections.abc import Mapping
from typing import Any, Optional, TextIO, Tuple

from bitlog.core.record import LogRecord, SourceLocation, capture_location
from bitlog.core.state import LoggerState
from bitlog.domain.config import LoggerConfig
from bitlog.domain.levels import LogLevel, is_enabled
from bitlog.infra.fs import append_line, prepare_log_file

logger = logging.getLogger(__name__)


class Logger:
    """
    Leveled logger bound to a LoggerState.

    Several Logger instances may share one state; the state is the only
    shared resource and its lock is held just long enough to take a snapshot.
    """

    def __init__(self, state: Optional[LoggerState] = None, stream: Optional[TextIO] = None) -> None:
        """
        Args:
            state: Shared configuration holder. A private one is created if omitted.
            stream: Stdout replacement used for records and diagnostics.
                    Resolved to ``sys.stdout`` at call time when None.
        """
        self.state = state if state is not None else LoggerState()
        self._stream = stream

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def log(self, level: int, msg: Any = "", *args: Any, stacklevel: int = 1) -> bool:
        """
        Emit a record at ``level`` if that severity is enabled.

        The template is interpolated with ``msg % args`` only after the level
        check passes; without args ``msg`` is used verbatim.

        Args:
            level: Single-bit severity.
            msg: Message or %-style template.
            *args: Template arguments.
            stacklevel: 1 attributes the record to the caller of this method;
                        wrappers pass higher values to skip their own frames.

        Returns:
            bool: True if the record was written, False if filtered or dropped.
        """
        try:
            cfg = self.state.snapshot()
            if not is_enabled(cfg.enabled_mask, level):
                return False

            try:
                message = format_message(msg, args)
            except (TypeError, ValueError, KeyError) as e:
                self._report(f"format error: {e}")
                return False

            location = capture_location(stacklevel + 1)
            return self._emit(cfg, LogRecord(level=level, location=location, message=message))
        except Exception as e:
            self._report(f"log error: {e!r}")
            return False

    def log_at(self, level: int, message: str, location: SourceLocation) -> bool:
        """
        Emit an already formatted message with an explicit source location.

        Used by adapters that carry their own call-site information.
        """
        try:
            cfg = self.state.snapshot()
            if not is_enabled(cfg.enabled_mask, level):
                return False
            return self._emit(cfg, LogRecord(level=level, location=location, message=message))
        except Exception as e:
            self._report(f"log error: {e!r}")
            return False

    def trace(self, msg: Any = "", *args: Any, stacklevel: int = 1) -> bool:
        return self.log(LogLevel.TRACE, msg, *args, stacklevel=stacklevel + 1)

    def debug(self, msg: Any = "", *args: Any, stacklevel: int = 1) -> bool:
        return self.log(LogLevel.DEBUG, msg, *args, stacklevel=stacklevel + 1)

    def info(self, msg: Any = "", *args: Any, stacklevel: int = 1) -> bool:
        return self.log(LogLevel.INFO, msg, *args, stacklevel=stacklevel + 1)

    def warn(self, msg: Any = "", *args: Any, stacklevel: int = 1) -> bool:
        return self.log(LogLevel.WARN, msg, *args, stacklevel=stacklevel + 1)

    def error(self, msg: Any = "", *args: Any, stacklevel: int = 1) -> bool:
        return self.log(LogLevel.ERROR, msg, *args, stacklevel=stacklevel + 1)

    def fatal(self, msg: Any = "", *args: Any, stacklevel: int = 1) -> bool:
        """Log at FATAL. This is only a label; the process keeps running."""
        return self.log(LogLevel.FATAL, msg, *args, stacklevel=stacklevel + 1)

    def dump(self) -> None:
        self.state.dump(self._out())

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def _emit(self, cfg: LoggerConfig, record: LogRecord) -> bool:
        line = record.render()
        if cfg.is_stdout:
            return self._write_stdout(line)
        return self._write_file(cfg, line)

    def _write_stdout(self, line: str) -> bool:
        out = self._out()
        if out is None:
            return False
        try:
            out.write(line)
            out.flush()
        except (OSError, ValueError) as e:
            self._report(f"stdout flush error: {e}")
            return False
        return True

    def _write_file(self, cfg: LoggerConfig, line: str) -> bool:
        path = cfg.destination_path
        try:
            if prepare_log_file(path, cfg.max_file_size):
                logger.debug(f"Logger: {path} exceeded {cfg.max_file_size} bytes and was truncated")
        except (ValueError, OSError) as e:
            self._report(f"before_log set filepath: {path}, error: {e}")
            return False

        try:
            append_line(path, line)
        except OSError as e:
            self._report(f"write {path} error: {e}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def _out(self) -> Optional[TextIO]:
        # sys.stdout is None under pythonw and in detached services
        return self._stream if self._stream is not None else sys.stdout

    def _report(self, text: str) -> None:
        """Best-effort diagnostic on stdout; a broken stdout is ignored."""
        out = self._out()
        if out is None:
            return
        try:
            out.write(text + "\n")
            out.flush()
        except (OSError, ValueError):
            pass


def format_message(msg: Any, args: Tuple[Any, ...]) -> str:
    """
    Interpolate a %-style template.

    Args:
        msg: Template or plain message; non-strings are converted with str().
        args: Interpolation arguments. A single mapping argument enables
              named placeholders, as in the standard logging module.

    Returns:
        str: The final message text.

    Raises:
        TypeError: If arguments do not match the template.
        ValueError: If the template is malformed.
        KeyError: If a named placeholder is missing from the mapping.
    """
    text = str(msg)
    if not args:
        return text
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        return text % args[0]
    return text % args
