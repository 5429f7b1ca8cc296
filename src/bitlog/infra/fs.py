from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Prepares the log destination before each file write: creates the parent
directory hierarchy, creates the file when missing, and truncates it to zero
length once it has grown past the configured threshold. There is a single
file and no archival of the discarded content.
"""

import os


def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory hierarchy of a file path if it is missing.

    A bare file name resolves to the working directory, which always exists.

    Args:
        path: Target file path.

    Raises:
        ValueError: If the path has no file component ("/", "logs/").
        OSError: If the directories cannot be created.
    """
    parent, name = os.path.split(path)
    if not name:
        raise ValueError(f"filepath: {path} is invalid")
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)


def prepare_log_file(path: str, max_size: int) -> bool:
    """
    Get the log file ready for an append.

    Args:
        path: Target file path.
        max_size: Size in bytes above which the file is reset to empty.

    Returns:
        bool: True if the file was truncated.

    Raises:
        ValueError: If the path is not a valid file path.
        OSError: On any filesystem failure.
    """
    ensure_parent_dir(path)

    if not os.path.isfile(path):
        # Creates the file, or raises if the path is a directory
        open(path, "ab").close()
        return False

    if os.path.getsize(path) > max_size:
        with open(path, "r+b") as f:
            f.truncate(0)
        return True

    return False


def append_line(path: str, line: str) -> None:
    """
    Append one rendered record to the file.

    The whole line is written in a single call on a handle opened in append
    mode so concurrent writers never split a record.

    Args:
        path: Target file path.
        line: Complete record including the trailing newline.
    """
    data = line.encode("utf-8")
    with open(path, "ab") as f:
        f.write(data)
        f.flush()
