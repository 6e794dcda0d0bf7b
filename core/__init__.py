"""Core domain package for the Ledgerline application."""

from .errors import (
    DuplicateRecord,
    InvalidInterval,
    InvalidProjectName,
    InvalidRecurrencePeriod,
    LedgerError,
    RecordNotFound,
    TransactionValidationError,
)
from .models import (
    DashboardData,
    MonthlyPoint,
    NextOccurrence,
    PeriodTotals,
    Project,
    RecurringPeriod,
    Transaction,
    TransactionKind,
    TransactionRow,
)
from .storage import LedgerStore
from .validation import validate_project_name, validate_transaction

__all__ = [
    "DashboardData",
    "MonthlyPoint",
    "NextOccurrence",
    "PeriodTotals",
    "Project",
    "RecurringPeriod",
    "Transaction",
    "TransactionKind",
    "TransactionRow",
    "DuplicateRecord",
    "InvalidInterval",
    "InvalidProjectName",
    "InvalidRecurrencePeriod",
    "LedgerError",
    "RecordNotFound",
    "TransactionValidationError",
    "LedgerStore",
    "validate_project_name",
    "validate_transaction",
]
