from __future__ import annotations

"""
Log Record Construction.

Captures the caller's source location from the interpreter stack and renders
a single record into its one-line text form:

    [I] [2024-01-15-10:30:00] [src/app/module.py/caller_fn:42]: message
"""

import os
import sys
import time
from dataclasses import dataclass, field
from typing import Optional

from bitlog.domain.levels import level_flag

TIMESTAMP_FORMAT = "%Y-%m-%d-%H:%M:%S"

_UNKNOWN_LOCATION_FILE = "<unknown>"


@dataclass(frozen=True)
class SourceLocation:
    """Opaque call-site value threaded into the record formatter."""
    file: str
    function: str
    line: int

    def render(self) -> str:
        return f"{self.file}/{self.function}:{self.line}"


@dataclass(frozen=True)
class LogRecord:
    """A single emitted log statement. Built fresh on every call."""
    level: int
    location: SourceLocation
    message: str
    timestamp: float = field(default_factory=time.time)

    def prefix(self) -> str:
        """Return the bracketed header preceding the message."""
        stamp = time.strftime(TIMESTAMP_FORMAT, time.localtime(self.timestamp))
        return f"[{level_flag(self.level)}] [{stamp}] [{self.location.render()}]: "

    def render(self) -> str:
        """Return the complete line, newline included."""
        return f"{self.prefix()}{self.message}\n"


# -----------------------------------------------------------------------------
# CALL-SITE CAPTURE
# -----------------------------------------------------------------------------

def capture_location(stacklevel: int = 1) -> SourceLocation:
    """
    Resolve the source location of a caller on the current stack.

    Args:
        stacklevel: Frame depth relative to this function. 1 selects the
                    function calling capture_location, 2 its caller.

    Returns:
        SourceLocation: File, function and line of the selected frame.
    """
    try:
        frame = sys._getframe(stacklevel)
    except ValueError:
        return SourceLocation(_UNKNOWN_LOCATION_FILE, "<unknown>", 0)

    code = frame.f_code
    return SourceLocation(
        file=display_path(code.co_filename),
        function=code.co_name,
        line=frame.f_lineno,
    )


def display_path(filename: str, base: Optional[str] = None) -> str:
    """
    Shorten a source file path for display.

    Paths under ``base`` (the working directory by default) are shown
    relative to it with forward slashes; anything else is reduced to its
    base name.

    Args:
        filename: Absolute or relative source path.
        base: Reference directory.

    Returns:
        str: Display form of the path.
    """
    if not filename or filename.startswith("<"):
        return filename or _UNKNOWN_LOCATION_FILE

    try:
        root = os.path.abspath(base or os.getcwd())
        full = os.path.abspath(filename)
        if os.path.commonpath([root, full]) == root:
            return os.path.relpath(full, root).replace(os.sep, "/")
    except (ValueError, OSError):
        # Different drives on Windows, or a deleted working directory
        pass
    return os.path.basename(filename)
