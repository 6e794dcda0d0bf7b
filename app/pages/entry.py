"""Add and edit forms for expenses and earnings."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import streamlit as st

from app.layout import card
from core import (
    LedgerError,
    LedgerStore,
    Project,
    RecordNotFound,
    RecurringPeriod,
    Transaction,
    TransactionKind,
    TransactionValidationError,
    validate_transaction,
)
from core.validation import DEFAULT_RECURRING_PERIOD

logger = logging.getLogger(__name__)

_PERIOD_OPTIONS = [period.value for period in RecurringPeriod]


def _load_existing(store: LedgerStore, kind: TransactionKind, transaction_id: Optional[int]) -> Optional[Transaction]:
    if transaction_id is None:
        return None
    try:
        return store.get_transaction(kind, transaction_id)
    except RecordNotFound as exc:
        st.warning(f"{exc}. Creating a new {kind} instead.")
        return None


def _save(
    store: LedgerStore,
    kind: TransactionKind,
    transaction: Transaction,
    existing: Optional[Transaction],
) -> Optional[Transaction]:
    try:
        if existing is None:
            return store.add_transaction(kind, transaction)
        return store.update_transaction(kind, transaction)
    except LedgerError as exc:
        logger.error("Could not save %s: %s", kind, exc)
        st.error(str(exc))
        return None


def render_page(
    store: LedgerStore,
    project: Project,
    kind: TransactionKind,
    transaction_id: Optional[int] = None,
) -> None:
    """Render the add/edit form for one ``kind`` of transaction."""

    existing = _load_existing(store, kind, transaction_id)
    verb = "Edit" if existing else "New"
    st.title(f"{verb} {kind}")
    st.caption(f"Project: {project.name}")

    period_default = (
        existing.recurring_period.value
        if existing is not None and existing.recurring_period is not None
        else DEFAULT_RECURRING_PERIOD.value
    )

    with card(f"{verb} {kind}", suffix=project.name):
        with st.form(f"{kind}-form", clear_on_submit=existing is None):
            name = st.text_input("Name", value=existing.name if existing else "")
            amount = st.number_input(
                "Amount",
                min_value=0.0,
                value=float(existing.amount) if existing else 0.0,
                step=0.01,
                format="%.2f",
            )
            when = st.date_input("Date", value=existing.date if existing else date.today())
            is_recurring = st.checkbox("Recurring", value=existing.is_recurring if existing else False)
            period = st.selectbox(
                "Repeats",
                _PERIOD_OPTIONS,
                index=_PERIOD_OPTIONS.index(period_default),
                help="Only used for recurring items.",
            )
            submitted = st.form_submit_button("Save")

    if not submitted:
        return

    try:
        transaction = validate_transaction(
            {
                "name": name,
                "amount": f"{amount:.2f}",
                "date": when,
                "is_recurring": is_recurring,
                "recurring_period": period,
            },
            project_id=project.id,
            transaction_id=existing.id if existing else 0,
        )
    except TransactionValidationError as exc:
        for message in exc.messages:
            st.error(message)
        return
    except LedgerError as exc:
        st.error(str(exc))
        return

    saved = _save(store, kind, transaction, existing)
    if saved is not None:
        st.success(f"Saved {saved.name}.")
