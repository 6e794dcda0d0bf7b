"""Recurrence-aware aggregation of expenses and earnings over date ranges."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Iterable, Iterator, Optional, Tuple

import pandas as pd

from core.errors import InvalidInterval
from core.models import (
    MonthlyPoint,
    NextOccurrence,
    OccurrenceUnit,
    PeriodTotals,
    RecurringPeriod,
    Transaction,
)

__all__ = [
    "to_date",
    "require_interval",
    "shift_date",
    "step_date",
    "iter_occurrences",
    "amount_in_interval",
    "total_for_period",
    "summarise_period",
    "monthly_series",
    "monthly_series_frame",
    "classify_gap",
    "next_occurrence",
]

DateLike = Any

_ZERO = Decimal("0")

_OFFSET_UNITS: dict[RecurringPeriod, str] = {
    RecurringPeriod.DAILY: "days",
    RecurringPeriod.WEEKLY: "weeks",
    RecurringPeriod.MONTHLY: "months",
    RecurringPeriod.YEARLY: "years",
}

MONTH_LABEL_FORMAT = "%b %Y"
SERIES_COLUMNS = ["Month", "Expenses", "Earnings", "Net"]


def to_date(value: DateLike) -> date:
    """Normalise dates, datetimes, timestamps and ISO strings to a calendar date."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


def require_interval(start: DateLike, end: DateLike) -> Tuple[date, date]:
    """Return ``(start, end)`` as dates, raising ``InvalidInterval`` when degenerate."""

    if start is None or end is None:
        raise InvalidInterval("Both interval bounds are required.")
    start_date, end_date = to_date(start), to_date(end)
    if start_date > end_date:
        raise InvalidInterval(f"Interval start {start_date} is after end {end_date}.")
    return start_date, end_date


def step_date(current: date, period: RecurringPeriod | str) -> date:
    """Return the date one ``period`` after ``current``.

    Monthly and yearly steps follow the calendar: the day is clamped to the
    length of the target month, so Jan 31 plus one month is Feb 29 (or 28).
    """

    period = RecurringPeriod.parse(period)
    if period is RecurringPeriod.DAILY:
        return current + timedelta(days=1)
    if period is RecurringPeriod.WEEKLY:
        return current + timedelta(weeks=1)
    offset = pd.DateOffset(**{_OFFSET_UNITS[period]: 1})
    return (pd.Timestamp(current) + offset).date()


def shift_date(anchor: date, period: RecurringPeriod | str, steps: int) -> date:
    """Step ``anchor`` forward ``steps`` times, one period at a time.

    Each step starts from the previous result, so a clamped day stays clamped:
    Jan 31 monthly gives Feb 29, Mar 29, Apr 29.
    """

    period = RecurringPeriod.parse(period)
    current = anchor
    for _ in range(max(steps, 0)):
        current = step_date(current, period)
    return current


def iter_occurrences(item: Transaction, start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield the simulated occurrences of ``item`` inside the inclusive ``[start, end]`` window.

    Recurring items are simulated from ``max(item.date, start)`` and stepped
    forward one period at a time until the date passes ``end``.
    """

    start_date, end_date = to_date(start), to_date(end)
    if start_date > end_date or item.date > end_date:
        return

    if not item.is_recurring:
        if start_date <= item.date <= end_date:
            yield item.date
        return

    period = RecurringPeriod.parse(item.recurring_period)
    current = max(item.date, start_date)
    while current <= end_date:
        yield current
        current = step_date(current, period)


def amount_in_interval(item: Transaction, start: DateLike, end: DateLike) -> Decimal:
    """Return the amount ``item`` contributes to the inclusive ``[start, end]`` window.

    Parameters
    ----------
    item:
        One-off or recurring expense/earning.
    start, end:
        Inclusive interval bounds. A reversed interval contributes nothing.

    Returns
    -------
    Decimal
        ``item.amount`` times the number of occurrences inside the window.
    """

    occurrences = sum(1 for _ in iter_occurrences(item, start, end))
    if occurrences == 0:
        return _ZERO
    return item.amount * occurrences


def total_for_period(items: Iterable[Transaction], start: DateLike, end: DateLike) -> Decimal:
    """Sum ``amount_in_interval`` over ``items`` using exact decimal arithmetic."""

    return sum((amount_in_interval(item, start, end) for item in items), _ZERO)


def summarise_period(
    expenses: Iterable[Transaction],
    earnings: Iterable[Transaction],
    start: DateLike,
    end: DateLike,
) -> PeriodTotals:
    expense_total = total_for_period(expenses, start, end)
    earning_total = total_for_period(earnings, start, end)
    return {
        "expenses": expense_total,
        "earnings": earning_total,
        "net": earning_total - expense_total,
    }


def monthly_series(
    items_a: Iterable[Transaction],
    items_b: Iterable[Transaction],
    start: Optional[DateLike],
    end: Optional[DateLike],
) -> list[MonthlyPoint]:
    """Return one point per calendar month touched by ``[start, end]``.

    Each month is totalled over its full calendar extent, including the
    first and last months when the outer interval starts or ends mid-month.
    ``items_a`` are treated as expenses and ``items_b`` as earnings, so
    ``net`` is ``earnings - expenses``.
    """

    if start is None or end is None:
        return []
    start_date, end_date = to_date(start), to_date(end)
    if start_date > end_date:
        return []

    expenses = list(items_a)
    earnings = list(items_b)
    months = pd.period_range(
        pd.Period(start_date, freq="M"),
        pd.Period(end_date, freq="M"),
        freq="M",
    )

    points: list[MonthlyPoint] = []
    for month in months:
        month_start = month.start_time.date()
        month_end = month.end_time.date()
        expense_total = total_for_period(expenses, month_start, month_end)
        earning_total = total_for_period(earnings, month_start, month_end)
        points.append(
            {
                "label": month.strftime(MONTH_LABEL_FORMAT),
                "month_start": month_start,
                "month_end": month_end,
                "expenses": expense_total,
                "earnings": earning_total,
                "net": earning_total - expense_total,
            }
        )
    return points


def monthly_series_frame(points: Iterable[MonthlyPoint]) -> pd.DataFrame:
    """Return the monthly series as a float frame ready for charting."""

    records = [
        {
            "Month": point["label"],
            "Expenses": float(point["expenses"]),
            "Earnings": float(point["earnings"]),
            "Net": float(point["net"]),
        }
        for point in points
    ]
    if not records:
        return pd.DataFrame(columns=SERIES_COLUMNS)
    return pd.DataFrame(records, columns=SERIES_COLUMNS)


def classify_gap(days: int) -> Tuple[OccurrenceUnit, int]:
    """Bucket a day count into the coarse unit shown on the dashboard."""

    if days <= 0:
        return "today", 0
    if days == 1:
        return "tomorrow", 1
    if days < 7:
        return "days", days
    if days < 30:
        return "weeks", days // 7
    if days < 365:
        return "months", days // 30
    return "years", days // 365


def next_occurrence(item: Transaction, now: Optional[DateLike] = None) -> NextOccurrence:
    """Describe how far away the next occurrence of a recurring ``item`` is.

    The candidate date keeps advancing while it is on or before ``now``, so an
    occurrence falling on today's date is never reported as pending. ``now``
    keeps its time of day: the gap is measured from ``now`` to midnight of the
    next occurrence and truncated to whole days.
    """

    if not item.is_recurring:
        return NextOccurrence(unit="n/a")

    now_ts = pd.Timestamp.now() if now is None else pd.Timestamp(now)
    if now_ts.tzinfo is not None:
        now_ts = now_ts.tz_localize(None)

    period = RecurringPeriod.parse(item.recurring_period)
    next_date = item.date
    while pd.Timestamp(next_date) <= now_ts:
        next_date = step_date(next_date, period)

    days_until = (pd.Timestamp(next_date) - now_ts).days
    unit, count = classify_gap(days_until)
    return NextOccurrence(unit=unit, count=count, next_date=next_date, days_until=days_until)
