"""Error taxonomy for the Ledgerline domain."""

from __future__ import annotations

from typing import Iterable

__all__ = [
    "LedgerError",
    "DuplicateRecord",
    "InvalidInterval",
    "InvalidProjectName",
    "InvalidRecurrencePeriod",
    "RecordNotFound",
    "TransactionValidationError",
]


class LedgerError(Exception):
    """Base class for errors raised by Ledgerline."""


class InvalidRecurrencePeriod(LedgerError, ValueError):
    """Raised when a recurring transaction has a missing or unknown period."""

    def __init__(self, period: object) -> None:
        self.period = period
        if period is None or period == "":
            message = "Recurring transactions need a recurring period."
        else:
            message = f"Unknown recurring period: {period!r}"
        super().__init__(message)


class InvalidInterval(LedgerError, ValueError):
    """Raised by callers that require a well-formed ``[start, end]`` interval."""


class TransactionValidationError(LedgerError, ValueError):
    """Raised when form input cannot be turned into a transaction."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages) or "Invalid transaction.")


class InvalidProjectName(LedgerError, ValueError):
    """Raised when a project name is blank."""


class DuplicateRecord(LedgerError, ValueError):
    """Raised when a record id is already taken."""

    def __init__(self, kind: str, record_id: object) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} already exists: {record_id}")


class RecordNotFound(LedgerError, LookupError):
    """Raised when a project or transaction id is not in the ledger."""

    def __init__(self, kind: str, record_id: object) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} not found: {record_id}")
