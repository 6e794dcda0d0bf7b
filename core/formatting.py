"""Formatting helpers for Ledgerline dashboards."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from core.models import RecurringPeriod

__all__ = [
    "format_currency",
    "format_date_label",
    "format_period_label",
    "format_range_label",
]

_CENTS = Decimal("0.01")


def format_currency(amount: Decimal | float | int, symbol: str = "$") -> str:
    """Format an amount as e.g. ``$1,234.56`` or ``-$12.00``."""

    value = Decimal(str(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date_label(value: date) -> str:
    return value.strftime("%b %d, %Y")


def format_period_label(period: Optional[RecurringPeriod]) -> str:
    if period is None:
        return "One-off"
    return period.value.capitalize()


def format_range_label(start: date, end: date) -> str:
    if start.year == end.year:
        return f"{start:%d %b} – {end:%d %b %Y}"
    return f"{start:%d %b %Y} – {end:%d %b %Y}"
