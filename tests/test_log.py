"""Tests for the thread-safe diagnostic log."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from annocheck.diagnostics.log import ComparisonLog
from annocheck.diagnostics.models import (
    MISSING_STYLE,
    ORPHANED_FOOTNOTE_REFERENCE,
    RESERVED_CODES,
    ComparisonLogEntry,
)


# ── Entries ──────────────────────────────────────────────────────────


def test_entry_str_with_location_and_details():
    entry = ComparisonLogEntry(
        level="Warning",
        code=ORPHANED_FOOTNOTE_REFERENCE,
        message="Footnote 3 has no definition",
        details="w:id=3",
        location="document.xml/w:p[5]/w:r[2]",
    )
    assert str(entry) == (
        "[Warning] ORPHANED_FOOTNOTE_REFERENCE: Footnote 3 has no definition "
        "at document.xml/w:p[5]/w:r[2] (w:id=3)"
    )


def test_entry_str_minimal():
    entry = ComparisonLogEntry(level="Info", code="X", message="done")
    assert str(entry) == "[Info] X: done"


def test_entry_is_immutable():
    entry = ComparisonLogEntry(level="Info", code="X", message="done")
    with pytest.raises(ValidationError):
        entry.message = "changed"


def test_reserved_codes():
    assert len(RESERVED_CODES) == 8
    assert len(set(RESERVED_CODES)) == 8
    assert "MALFORMED_XML" in RESERVED_CODES
    assert "ORPHANED_BOOKMARK" in RESERVED_CODES


# ── Writing & Reading ────────────────────────────────────────────────


def test_add_by_level():
    log = ComparisonLog()
    log.add_info("STARTED", "Comparison started")
    log.add_warning(MISSING_STYLE, "Style 'Heading9' missing", location="styles.xml")
    log.add_error("MALFORMED_XML", "Unclosed element", details="w:tbl")

    assert log.count == 3
    assert len(log) == 3
    assert [e.level for e in log.entries] == ["Info", "Warning", "Error"]
    assert log.has_warnings
    assert log.has_errors
    assert [e.code for e in log.info_entries] == ["STARTED"]
    assert [e.code for e in log.warnings] == [MISSING_STYLE]
    assert [e.code for e in log.errors] == ["MALFORMED_XML"]
    assert log.warnings[0].location == "styles.xml"
    assert log.errors[0].details == "w:tbl"


def test_empty_log():
    log = ComparisonLog()
    assert log.entries == []
    assert not log.has_warnings
    assert not log.has_errors


def test_info_only_has_no_warnings():
    log = ComparisonLog()
    log.add_info("X", "fine")
    assert not log.has_warnings
    assert not log.has_errors


def test_entries_by_level():
    log = ComparisonLog()
    log.add_warning("A", "one")
    log.add_info("B", "two")
    log.add_warning("C", "three")
    assert [e.code for e in log.entries_by_level("Warning")] == ["A", "C"]


def test_unknown_level_raises():
    log = ComparisonLog()
    with pytest.raises(ValueError):
        log.add("Fatal", "X", "boom")
    with pytest.raises(ValueError):
        log.entries_by_level("Debug")
    assert log.count == 0


def test_snapshot_does_not_alias_live_entries():
    log = ComparisonLog()
    log.add_info("A", "one")
    snapshot = log.entries
    log.add_info("B", "two")
    snapshot.append(snapshot[0])
    assert len(snapshot) == 2
    assert [e.code for e in log.entries] == ["A", "B"]


def test_clear():
    log = ComparisonLog()
    log.add_error("X", "boom")
    log.clear()
    assert log.count == 0
    assert not log.has_errors
    log.add_info("Y", "after clear")
    assert log.count == 1


def test_entries_mirrored_to_stdlib_logging(caplog):
    log = ComparisonLog()
    with caplog.at_level(logging.INFO, logger="annocheck.diagnostics.log"):
        log.add_warning(MISSING_STYLE, "Style missing")
    assert any(
        r.levelno == logging.WARNING and "MISSING_STYLE" in r.getMessage()
        for r in caplog.records
    )


# ── Concurrency ──────────────────────────────────────────────────────


def test_concurrent_writers_lose_nothing():
    log = ComparisonLog()
    writers, per_writer = 16, 250

    def write(worker: int) -> None:
        for i in range(per_writer):
            log.add_warning("W", f"{worker}:{i}")

    with ThreadPoolExecutor(max_workers=writers) as pool:
        list(pool.map(write, range(writers)))

    entries = log.entries
    assert len(entries) == writers * per_writer
    messages = [e.message for e in entries]
    assert len(set(messages)) == len(messages)

    # Per-writer order is preserved
    for worker in range(writers):
        mine = [int(m.split(":")[1]) for m in messages if m.startswith(f"{worker}:")]
        assert mine == list(range(per_writer))


def test_snapshot_reads_during_appends():
    log = ComparisonLog()
    reader_started = threading.Event()
    done = threading.Event()
    snapshot_sizes: list[int] = []
    bad_snapshots: list[list] = []

    def writer() -> None:
        reader_started.wait(timeout=5)
        for i in range(2000):
            log.add_info("W", str(i))
        done.set()

    def reader() -> None:
        reader_started.set()
        while True:
            finished = done.is_set()
            snapshot = log.entries
            if not all(isinstance(e, ComparisonLogEntry) for e in snapshot):
                bad_snapshots.append(snapshot)
            snapshot_sizes.append(len(snapshot))
            if finished:
                break

    threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert log.count == 2000
    assert bad_snapshots == []
    assert snapshot_sizes
    assert snapshot_sizes[-1] == 2000
    assert snapshot_sizes == sorted(snapshot_sizes)
