from __future__ import annotations

"""
Integration tests for file routing and truncate-on-overflow.

Verifies:
1. Records reach the configured file, intermediate directories included.
2. Crossing the threshold resets the file on the next call.
3. Invalid destinations degrade to a diagnostic and a dropped record.
"""

import io
import re
from pathlib import Path

from bitlog.core.emitter import Logger
from bitlog.core.state import LoggerState
from bitlog.domain.config import LoggerConfig
from bitlog.domain.levels import LogLevel

LINE_RE = re.compile(r"^\[[TDIWEF]\] \[\d{4}-\d{2}-\d{2}-\d{2}:\d{2}:\d{2}\] \[.+/.+:\d+\]: .*$")


def make_logger(path: Path, max_size: int = 10 * 1024 * 1024) -> Logger:
    state = LoggerState(LoggerConfig(destination_path=str(path), max_file_size=max_size))
    return Logger(state, stream=io.StringIO())


def test_records_go_to_file_not_stdout(tmp_path: Path, capsys):
    target = tmp_path / "nested" / "dir" / "app.log"
    lg = make_logger(target)

    assert lg.info("first %d", 1) is True
    assert lg.error("second") is True

    lines = target.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(LINE_RE.match(line) for line in lines)
    assert lines[0].endswith("]: first 1")
    assert lines[1].startswith("[E] ")
    assert capsys.readouterr().out == ""


def test_switching_back_to_stdout(tmp_path: Path):
    target = tmp_path / "app.log"
    out = io.StringIO()
    lg = Logger(LoggerState(LoggerConfig(destination_path=str(target))), stream=out)

    lg.info("to file")
    lg.state.set_filepath("")
    lg.info("to stdout")

    assert "to file" in target.read_text(encoding="utf-8")
    assert "to stdout" not in target.read_text(encoding="utf-8")
    assert "to stdout" in out.getvalue()


def test_file_is_truncated_after_crossing_threshold(tmp_path: Path):
    target = tmp_path / "test.log"
    lg = make_logger(target)

    def emit(i: int) -> int:
        lg.info("record %d", i)
        return target.stat().st_size

    record_len = emit(0)
    lg.state.set_max_size(2 * record_len + record_len // 2)

    sizes = [record_len] + [emit(i) for i in range(1, 5)]

    # Three records exceed the threshold, so the fourth call empties the file first
    assert sizes == [record_len, 2 * record_len, 3 * record_len, record_len, 2 * record_len]


def test_small_threshold_drops_below_running_total(tmp_path: Path):
    target = tmp_path / "test.log"
    lg = make_logger(target, max_size=100)
    lg.state.set_level(LogLevel.ALL)

    # Every rendered line is longer than 100 bytes, so each call resets the file
    written = 0
    for i in range(4):
        lg.info("record %d", i)
        content = target.read_text(encoding="utf-8")
        written += len(content.encode("utf-8"))

        assert content.count("\n") == 1
        assert content.endswith(f"]: record {i}\n")
        if i > 0:
            assert target.stat().st_size < written


def test_truncated_file_holds_only_new_records(tmp_path: Path):
    target = tmp_path / "app.log"
    target.write_text("x" * 500)
    lg = make_logger(target, max_size=100)

    lg.warn("fresh")

    content = target.read_text(encoding="utf-8")
    assert "x" not in content
    assert content.startswith("[W] ")
    assert content.endswith("]: fresh\n")


def test_invalid_destination_is_reported(tmp_path: Path):
    out = io.StringIO()
    lg = Logger(LoggerState(LoggerConfig(destination_path=str(tmp_path) + "/")), stream=out)

    assert lg.info("lost") is False
    assert out.getvalue().startswith("before_log set filepath: ")
    assert "is invalid" in out.getvalue()


def test_unwritable_destination_is_reported(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    out = io.StringIO()
    lg = Logger(LoggerState(LoggerConfig(destination_path=str(blocker / "app.log"))), stream=out)

    assert lg.error("lost") is False
    assert "before_log set filepath" in out.getvalue()

    # The logger keeps working once the destination is fixed
    lg.state.set_filepath(str(tmp_path / "ok.log"))
    assert lg.error("kept") is True


def test_write_failure_is_reported(tmp_path: Path, monkeypatch):
    target = tmp_path / "app.log"
    out = io.StringIO()
    lg = Logger(LoggerState(LoggerConfig(destination_path=str(target))), stream=out)

    def fail(path, line):
        raise OSError("disk quota exceeded")

    monkeypatch.setattr("bitlog.core.emitter.append_line", fail)

    assert lg.info("lost") is False
    assert f"write {target} error: disk quota exceeded" in out.getvalue()


def test_logging_continues_after_cwd_is_removed(tmp_path: Path, monkeypatch):
    target = tmp_path / "app.log"
    gone = tmp_path / "gone"
    gone.mkdir()
    monkeypatch.chdir(gone)
    gone.rmdir()

    out = io.StringIO()
    lg = Logger(LoggerState(LoggerConfig(destination_path=str(target))), stream=out)

    assert lg.info("survives") is True
    line = target.read_text(encoding="utf-8")
    assert LINE_RE.match(line.rstrip("\n"))
    assert "[test_file_truncation.py/test_logging_continues_after_cwd_is_removed:" in line
    assert out.getvalue() == ""
