"""Dashboard page: period totals, monthly chart and transaction lists."""

from __future__ import annotations

import logging
from typing import Sequence

import streamlit as st

from app.layout import card
from core import DashboardData, LedgerError, LedgerStore, Transaction, TransactionKind, TransactionRow
from core.formatting import format_currency
from core.sharing import build_share_link
from visualization import build_monthly_chart

logger = logging.getLogger(__name__)

_KIND_TITLES: dict[TransactionKind, str] = {
    "expense": "Expenses",
    "earning": "Earnings",
}

_ENTRY_PAGES: dict[TransactionKind, str] = {
    "expense": "add-expense",
    "earning": "add-earning",
}


def _render_totals_card(data: DashboardData, currency_symbol: str) -> None:
    totals = data["totals"]
    cols = st.columns(3)
    cols[0].metric("Expenses", format_currency(totals["expenses"], currency_symbol))
    cols[1].metric("Earnings", format_currency(totals["earnings"], currency_symbol))
    cols[2].metric("Net earnings", format_currency(totals["net"], currency_symbol))
    st.caption(f"{data['project'].name} · {data['range_label']}")


def _render_chart_card(data: DashboardData, currency_symbol: str) -> None:
    chart = build_monthly_chart(data["monthly_df"], currency_symbol)
    st.plotly_chart(chart, use_container_width=True, key="monthly-chart")


def _row_markup(row: TransactionRow) -> str:
    item = row["transaction"]
    hint = row["next_occurrence"]
    meta = f"{row['date_label']} · {row['period_label']}"
    if hint.unit in ("today", "tomorrow"):
        meta += f" · next {hint.label.lower()}"
    elif hint.is_applicable:
        meta += f" · next in {hint.label}"
    return (
        f"<strong>{item.name}</strong> · {row['amount_label']}"
        f"<div class='ll-item__meta'>{meta}</div>"
    )


def edit_link_markup(item: Transaction, kind: TransactionKind) -> str:
    """Return an Edit link that opens the entry page in the same tab."""

    href = f"?page={_ENTRY_PAGES[kind]}&project={item.project_id}&id={item.id}"
    return f'<a class="ll-nav__link" href="{href}" target="_self">Edit</a>'


def _delete(store: LedgerStore, kind: TransactionKind, transaction_id: int) -> None:
    try:
        store.delete_transaction(kind, transaction_id)
    except LedgerError as exc:
        logger.warning("Delete failed for %s %s: %s", kind, transaction_id, exc)
        st.error(str(exc))
        return
    st.rerun()


def _render_transaction_list(
    rows: Sequence[TransactionRow],
    kind: TransactionKind,
    store: LedgerStore,
    share_base_url: str,
) -> None:
    if not rows:
        st.info(f"No {_KIND_TITLES[kind].lower()} recorded for this project yet.")
        return

    for row in rows:
        item = row["transaction"]
        text_col, action_col = st.columns((4, 1))
        text_col.markdown(_row_markup(row), unsafe_allow_html=True)
        with action_col:
            st.markdown(edit_link_markup(item, kind), unsafe_allow_html=True)
            if st.button("Delete", key=f"delete-{kind}-{item.id}", use_container_width=True):
                _delete(store, kind, item.id)
        with st.expander("Share link"):
            st.code(build_share_link(share_base_url, kind, item.id), language=None)


def render_page(
    data: DashboardData,
    *,
    store: LedgerStore,
    currency_symbol: str = "$",
    share_base_url: str,
) -> None:
    """Render the project dashboard."""

    st.title("Dashboard")
    st.caption("Recurring items count once for every occurrence in the selected range.")

    totals_col, chart_col = st.columns([1, 2], gap="medium")
    with totals_col:
        with card("Totals", suffix=data["range_label"]):
            _render_totals_card(data, currency_symbol)
    with chart_col:
        with card("Monthly overview", suffix="Per calendar month"):
            _render_chart_card(data, currency_symbol)

    expense_col, earning_col = st.columns(2, gap="medium")
    with expense_col:
        with card("Expenses", suffix=f"{len(data['expense_rows'])} items"):
            _render_transaction_list(data["expense_rows"], "expense", store, share_base_url)
    with earning_col:
        with card("Earnings", suffix=f"{len(data['earning_rows'])} items"):
            _render_transaction_list(data["earning_rows"], "earning", store, share_base_url)
