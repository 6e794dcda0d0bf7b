"""Read-only view of a single shared expense or earning."""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from analytics.recurrence import next_occurrence
from app.layout import card
from core import LedgerStore, RecordNotFound
from core.formatting import format_currency, format_date_label, format_period_label
from core.sharing import ShareTarget

logger = logging.getLogger(__name__)


def render_page(store: LedgerStore, target: Optional[ShareTarget], currency_symbol: str = "$") -> None:
    st.title("Shared item")

    if target is None:
        st.error("This share link is not valid.")
        return

    try:
        item = store.get_transaction(target.kind, target.id)
    except RecordNotFound as exc:
        logger.info("Share link points at a missing record: %s", exc)
        st.error(f"This {target.kind} no longer exists.")
        return

    hint = next_occurrence(item)
    with card(item.name, suffix=target.kind.capitalize()):
        cols = st.columns(3)
        cols[0].metric("Amount", format_currency(item.amount, currency_symbol))
        cols[1].metric("Date", format_date_label(item.date))
        cols[2].metric("Repeats", format_period_label(item.recurring_period))
        if hint.is_applicable and hint.next_date is not None:
            st.caption(f"Next occurrence: {format_date_label(hint.next_date)} ({hint.label})")
