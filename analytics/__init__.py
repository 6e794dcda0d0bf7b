"""Recurrence-aware aggregation helpers shared across Ledgerline services."""

from analytics.recurrence import (
    amount_in_interval,
    classify_gap,
    iter_occurrences,
    monthly_series,
    monthly_series_frame,
    next_occurrence,
    require_interval,
    shift_date,
    step_date,
    summarise_period,
    to_date,
    total_for_period,
)

__all__ = [
    "amount_in_interval",
    "classify_gap",
    "iter_occurrences",
    "monthly_series",
    "monthly_series_frame",
    "next_occurrence",
    "require_interval",
    "shift_date",
    "step_date",
    "summarise_period",
    "to_date",
    "total_for_period",
]
