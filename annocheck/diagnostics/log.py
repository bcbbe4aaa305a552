"""Thread-safe collector for recoverable problems found during a run.

A ``ComparisonLog`` is created by the top-level caller and handed by
reference to every pipeline stage. Stages append entries instead of
raising; the caller inspects ``has_errors`` afterwards and decides whether
the run failed.

Every read returns a copy taken under the lock, so iterating a snapshot is
never affected by concurrent appends.
"""

import logging
import threading
from typing import Optional

from annocheck.diagnostics.models import LEVELS, ComparisonLogEntry, LogLevel

logger = logging.getLogger(__name__)

_STDLIB_LEVELS = {
    "Info": logging.INFO,
    "Warning": logging.WARNING,
    "Error": logging.ERROR,
}


class ComparisonLog:
    """Append-only, lock-guarded sequence of ``ComparisonLogEntry``."""

    def __init__(self) -> None:
        self._entries: list[ComparisonLogEntry] = []
        self._lock = threading.Lock()

    # ── Writing ──────────────────────────────────────────────────

    def add(
        self,
        level: LogLevel,
        code: str,
        message: str,
        details: Optional[str] = None,
        location: Optional[str] = None,
    ) -> ComparisonLogEntry:
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level!r}")

        entry = ComparisonLogEntry(
            level=level, code=code, message=message, details=details, location=location
        )
        with self._lock:
            self._entries.append(entry)

        logger.log(_STDLIB_LEVELS[level], "%s", entry)
        return entry

    def add_info(
        self, code: str, message: str, details: Optional[str] = None, location: Optional[str] = None
    ) -> ComparisonLogEntry:
        return self.add("Info", code, message, details, location)

    def add_warning(
        self, code: str, message: str, details: Optional[str] = None, location: Optional[str] = None
    ) -> ComparisonLogEntry:
        return self.add("Warning", code, message, details, location)

    def add_error(
        self, code: str, message: str, details: Optional[str] = None, location: Optional[str] = None
    ) -> ComparisonLogEntry:
        return self.add("Error", code, message, details, location)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()

    # ── Reading ──────────────────────────────────────────────────

    @property
    def entries(self) -> list[ComparisonLogEntry]:
        """Point-in-time copy of all entries, in append order."""
        with self._lock:
            return list(self._entries)

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.count

    @property
    def has_warnings(self) -> bool:
        with self._lock:
            return any(e.level == "Warning" for e in self._entries)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return any(e.level == "Error" for e in self._entries)

    def entries_by_level(self, level: LogLevel) -> list[ComparisonLogEntry]:
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level!r}")
        with self._lock:
            return [e for e in self._entries if e.level == level]

    @property
    def info_entries(self) -> list[ComparisonLogEntry]:
        return self.entries_by_level("Info")

    @property
    def warnings(self) -> list[ComparisonLogEntry]:
        return self.entries_by_level("Warning")

    @property
    def errors(self) -> list[ComparisonLogEntry]:
        return self.entries_by_level("Error")
