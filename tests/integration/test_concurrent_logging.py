from __future__ import annotations

"""
Integration tests for concurrent logging to one file.

Threads share a single Logger. Interleaving order across threads is not
guaranteed (no sequence numbers); only line integrity is asserted.
"""

import io
import re
import threading
from pathlib import Path

from bitlog.core.emitter import Logger
from bitlog.core.state import LoggerState
from bitlog.domain.config import LoggerConfig

THREADS = 8
PER_THREAD = 200

LINE_RE = re.compile(
    r"^\[[TDIWEF]\] \[\d{4}-\d{2}-\d{2}-\d{2}:\d{2}:\d{2}\] \[.+/worker:\d+\]: "
    r"thread-(\d+) msg-(\d+) [a-z]{40}$"
)


def _run_workers(lg: Logger) -> None:
    def worker(n: int) -> None:
        for i in range(PER_THREAD):
            lg.log(1 << (i % 6), "thread-%d msg-%d %s", n, i, "abcdefghij" * 4)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(THREADS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_concurrent_lines_are_complete(tmp_path: Path):
    target = tmp_path / "shared.log"
    diag = io.StringIO()
    lg = Logger(LoggerState(LoggerConfig(destination_path=str(target))), stream=diag)

    _run_workers(lg)

    lines = target.read_text(encoding="utf-8").split("\n")
    assert lines[-1] == ""
    lines = lines[:-1]

    assert all(LINE_RE.match(line) for line in lines), [l for l in lines if not LINE_RE.match(l)][:3]
    assert len(lines) + diag.getvalue().count("\n") == THREADS * PER_THREAD

    seen = {(int(m.group(1)), int(m.group(2))) for m in map(LINE_RE.match, lines)}
    assert len(seen) == len(lines)


def test_concurrent_truncation_keeps_lines_whole(tmp_path: Path):
    target = tmp_path / "shared.log"
    lg = Logger(
        LoggerState(LoggerConfig(destination_path=str(target), max_file_size=4096)),
        stream=io.StringIO(),
    )

    _run_workers(lg)

    content = target.read_text(encoding="utf-8")
    # Truncation happens between whole records, so the file still ends on a newline
    assert content.endswith("\n")
    for line in content.splitlines():
        assert LINE_RE.match(line), line


def test_reconfiguration_during_traffic_never_raises(tmp_path: Path):
    state = LoggerState()
    lg = Logger(state, stream=io.StringIO())
    stop = threading.Event()

    def reconfigure() -> None:
        paths = [str(tmp_path / "a.log"), "", str(tmp_path / "b.log")]
        n = 0
        while not stop.is_set():
            state.set_filepath(paths[n % 3])
            state.set_level(63 if n % 2 else 20)
            n += 1

    t = threading.Thread(target=reconfigure)
    t.start()
    try:
        _run_workers(lg)
    finally:
        stop.set()
        t.join()
