"""Core logic for assembling Ledgerline dashboard data."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Tuple

from analytics.recurrence import (
    DateLike,
    monthly_series,
    monthly_series_frame,
    next_occurrence,
    summarise_period,
    to_date,
)
from core.formatting import format_currency, format_date_label, format_period_label, format_range_label
from core.models import DashboardData, Transaction, TransactionKind, TransactionRow
from core.storage import LedgerStore

__all__ = ["build_transaction_rows", "default_date_range", "prepare_dashboard_data"]

logger = logging.getLogger(__name__)


def default_date_range(today: Optional[date] = None) -> Tuple[date, date]:
    """Return the first and last day of the current calendar year."""

    today = today or date.today()
    return date(today.year, 1, 1), date(today.year, 12, 31)


def build_transaction_rows(
    transactions: Iterable[Transaction],
    kind: TransactionKind,
    *,
    now: Optional[DateLike] = None,
    currency_symbol: str = "$",
) -> list[TransactionRow]:
    rows: list[TransactionRow] = []
    for item in transactions:
        rows.append(
            {
                "transaction": item,
                "kind": kind,
                "amount_label": format_currency(item.amount, currency_symbol),
                "date_label": format_date_label(item.date),
                "period_label": format_period_label(item.recurring_period),
                "next_occurrence": next_occurrence(item, now),
            }
        )
    return rows


def prepare_dashboard_data(
    store: LedgerStore,
    project_id: str,
    start: DateLike,
    end: DateLike,
    *,
    now: Optional[DateLike] = None,
    currency_symbol: str = "$",
) -> DashboardData:
    """Load a project's transactions and aggregate them over ``[start, end]``.

    A reversed interval is not an error: totals come back as zero and the
    monthly series is empty.
    """

    project = store.get_project(project_id)
    expenses = store.list_expenses(project_id)
    earnings = store.list_earnings(project_id)

    start_date, end_date = to_date(start), to_date(end)
    if start_date > end_date:
        logger.warning("Reversed date range %s > %s for project %s", start_date, end_date, project_id)

    totals = summarise_period(expenses, earnings, start_date, end_date)
    points = monthly_series(expenses, earnings, start_date, end_date)

    logger.debug(
        "Aggregated %d expenses and %d earnings for project %s over %d months",
        len(expenses),
        len(earnings),
        project_id,
        len(points),
    )

    return {
        "project": project,
        "totals": totals,
        "monthly_points": points,
        "monthly_df": monthly_series_frame(points),
        "expense_rows": build_transaction_rows(
            expenses, "expense", now=now, currency_symbol=currency_symbol
        ),
        "earning_rows": build_transaction_rows(
            earnings, "earning", now=now, currency_symbol=currency_symbol
        ),
        "range_label": format_range_label(start_date, end_date),
    }
