"""Error types raised by the habit ledger."""

from __future__ import annotations


class LedgerError(ValueError):
    """Base class for recoverable ledger errors."""


class InvalidDateFormat(LedgerError):
    def __init__(self, value: object = None) -> None:
        super().__init__("Invalid date format. Expected YYYY-MM-DD.")
        self.value = value


class FutureDateNotEditable(LedgerError):
    def __init__(self, day: str, today: str) -> None:
        super().__init__("Future dates are not editable.")
        self.day = day
        self.today = today


class DayLocked(LedgerError):
    def __init__(self, day: str) -> None:
        super().__init__("Day is locked. Unlock it first to edit.")
        self.day = day


class LedgerCorrupt(LedgerError):
    """The persisted document is not ``{"entries": {...}}``.

    Never surfaces to callers of the store: it is caught at the read
    boundary and replaced by an empty ledger.
    """
