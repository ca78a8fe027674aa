"""Day record store: one persisted ledger document keyed by ISO date.

Every mutation is a full read-modify-write of the document, serialized per
ledger file by an in-process lock. Date and lock checks run before the read,
so a rejected call never writes.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from habitledger.errors import (
    DayLocked,
    FutureDateNotEditable,
    InvalidDateFormat,
    LedgerCorrupt,
)
from habitledger.fileio import read_json, write_json_atomic
from habitledger.models import (
    DayRecord,
    Ledger,
    is_iso_date,
    normalize_counts,
    parse_number,
)

logger = logging.getLogger(__name__)

_STRUCTURED_KEYS = ("counts", "locked", "completedAt")

# One lock per ledger file, shared by every store instance pointing at it.
_LOCKS: dict[str, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def _ledger_lock(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = _LOCKS[key] = threading.Lock()
        return lock


# ── Decoding ──────────────────────────────────────────────────


def is_legacy_counts(raw: Any) -> bool:
    """A flat ``{habitId: number}`` mapping written before lock state existed."""
    if not isinstance(raw, dict):
        return False
    if any(key in raw for key in _STRUCTURED_KEYS):
        return False
    return all(parse_number(value) is not None for value in raw.values())


def decode_day_record(raw: Any) -> DayRecord:
    if is_legacy_counts(raw):
        return DayRecord(counts=normalize_counts(raw))
    return DayRecord.from_dict(raw)


def decode_ledger(doc: Any) -> Ledger:
    """Decode a persisted document into a Ledger.

    Raises LedgerCorrupt if *doc* is not a mapping with an ``entries`` mapping.
    """
    if not isinstance(doc, dict) or not isinstance(doc.get("entries"), dict):
        raise LedgerCorrupt("Ledger document must be an object with an 'entries' object.")
    ledger = Ledger()
    for key, raw in doc["entries"].items():
        if is_iso_date(key):
            ledger.entries[key] = decode_day_record(raw)
        else:
            ledger.extras[key] = raw
    return ledger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ── Store ─────────────────────────────────────────────────────


class DayRecordStore:
    """Persistence and lock transitions for the daily habit ledger.

    *today* returns the current ISO date and *now* the current timestamp;
    both are injectable so callers decide which timezone "today" lives in.
    """

    def __init__(
        self,
        path: Path,
        today: Callable[[], str] | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.path = Path(path)
        self._lock = _ledger_lock(self.path)
        self._now = now or _utc_now
        self._today = today or (lambda: self._now().date().isoformat())

    # -- document I/O --

    def read_ledger(self) -> Ledger:
        """Read and decode the ledger; a corrupt document reads as empty."""
        try:
            return decode_ledger(read_json(self.path) or {"entries": {}})
        except (LedgerCorrupt, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Ledger at %s is corrupt, using an empty ledger: %s", self.path, e)
            return Ledger()

    def write_ledger(self, ledger: Ledger) -> None:
        write_json_atomic(self.path, ledger.to_dict())
        logger.debug("Wrote %d ledger entries to %s", len(ledger.entries), self.path)

    # -- validation --

    def _check_date(self, day: str) -> None:
        if not is_iso_date(day):
            raise InvalidDateFormat(day)

    def _check_editable(self, day: str) -> None:
        self._check_date(day)
        today = self._today()
        if day > today:
            raise FutureDateNotEditable(day, today)

    # -- operations --

    def get_record(self, day: str) -> DayRecord:
        """Return the record for *day*, or an empty unlocked one. Never writes."""
        self._check_date(day)
        return self.read_ledger().entries.get(day) or DayRecord()

    def save_record(self, day: str, counts: dict[str, Any]) -> DayRecord:
        """Replace the counts of an unlocked, non-future day."""
        self._check_editable(day)
        with self._lock:
            ledger = self.read_ledger()
            existing = ledger.entries.get(day) or DayRecord()
            if existing.locked:
                raise DayLocked(day)

            record = DayRecord(
                counts=normalize_counts(counts or {}),
                locked=existing.locked,
                completed_at=existing.completed_at,
            )
            ledger.entries[day] = record
            self.write_ledger(ledger)
        logger.info("Saved %d counts for %s", len(record.counts), day)
        return record

    def complete_record(self, day: str, counts: dict[str, Any] | None = None) -> DayRecord:
        """Lock *day*, optionally replacing its counts. Allowed on locked days."""
        self._check_editable(day)
        with self._lock:
            ledger = self.read_ledger()
            existing = ledger.entries.get(day) or DayRecord()

            record = DayRecord(
                counts=normalize_counts(existing.counts if counts is None else counts),
                locked=True,
                completed_at=self._now().isoformat(timespec="seconds"),
            )
            ledger.entries[day] = record
            self.write_ledger(ledger)
        logger.info("Completed %s", day)
        return record

    def unlock_record(self, day: str) -> DayRecord:
        """Clear the lock on *day*, keeping its counts."""
        self._check_editable(day)
        with self._lock:
            ledger = self.read_ledger()
            existing = ledger.entries.get(day) or DayRecord()

            record = DayRecord(counts=dict(existing.counts), locked=False, completed_at=None)
            ledger.entries[day] = record
            self.write_ledger(ledger)
        logger.info("Unlocked %s", day)
        return record

    def list_records(self) -> dict[str, DayRecord]:
        """All records keyed by ISO date, in date order."""
        entries = self.read_ledger().entries
        return {day: entries[day] for day in sorted(entries)}
