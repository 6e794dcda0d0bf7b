"""Shared data model definitions for the Ledgerline tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, TypedDict

import pandas as pd

from core.errors import InvalidRecurrencePeriod

TransactionKind = Literal["expense", "earning"]
TRANSACTION_KINDS: tuple[TransactionKind, ...] = ("expense", "earning")

OccurrenceUnit = Literal["n/a", "today", "tomorrow", "days", "weeks", "months", "years"]


class RecurringPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: object) -> "RecurringPeriod":
        """Return the period for ``value`` or raise ``InvalidRecurrencePeriod``."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidRecurrencePeriod(value)


@dataclass(frozen=True)
class Project:
    id: str
    name: str


@dataclass(frozen=True)
class Transaction:
    """An expense or an earning.

    ``date`` is always the first occurrence. Later occurrences of a recurring
    transaction are derived from it and never stored.
    """

    id: int
    project_id: str
    name: str
    amount: Decimal
    date: date
    is_recurring: bool = False
    recurring_period: Optional[RecurringPeriod] = field(default=None)

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.is_recurring:
            object.__setattr__(self, "recurring_period", RecurringPeriod.parse(self.recurring_period))
        else:
            object.__setattr__(self, "recurring_period", None)


class MonthlyPoint(TypedDict):
    label: str
    month_start: date
    month_end: date
    expenses: Decimal
    earnings: Decimal
    net: Decimal


class PeriodTotals(TypedDict):
    expenses: Decimal
    earnings: Decimal
    net: Decimal


_UNIT_LABELS: dict[str, str] = {
    "days": "day(s)",
    "weeks": "week(s)",
    "months": "month(s)",
    "years": "year(s)",
}


@dataclass(frozen=True)
class NextOccurrence:
    unit: OccurrenceUnit
    count: int = 0
    next_date: Optional[date] = None
    days_until: Optional[int] = None

    @property
    def is_applicable(self) -> bool:
        return self.unit != "n/a"

    @property
    def label(self) -> str:
        if self.unit == "n/a":
            return "N/A"
        if self.unit == "today":
            return "Today"
        if self.unit == "tomorrow":
            return "Tomorrow"
        return f"{self.count} {_UNIT_LABELS[self.unit]}"


class TransactionRow(TypedDict):
    transaction: Transaction
    kind: TransactionKind
    amount_label: str
    date_label: str
    period_label: str
    next_occurrence: NextOccurrence


class DashboardData(TypedDict):
    project: Project
    totals: PeriodTotals
    monthly_points: list[MonthlyPoint]
    monthly_df: pd.DataFrame
    expense_rows: list[TransactionRow]
    earning_rows: list[TransactionRow]
    range_label: str


__all__ = [
    "TransactionKind",
    "TRANSACTION_KINDS",
    "OccurrenceUnit",
    "RecurringPeriod",
    "Project",
    "Transaction",
    "MonthlyPoint",
    "PeriodTotals",
    "NextOccurrence",
    "TransactionRow",
    "DashboardData",
]
