"""Form-boundary validation for projects, expenses and earnings."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.errors import InvalidProjectName, TransactionValidationError
from core.models import RecurringPeriod, Transaction

__all__ = [
    "DEFAULT_RECURRING_PERIOD",
    "TransactionForm",
    "validate_project_name",
    "validate_transaction",
]

DEFAULT_RECURRING_PERIOD = RecurringPeriod.MONTHLY


class TransactionForm(BaseModel):
    """Values submitted by the expense and earning entry forms."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(min_length=1)
    amount: Decimal = Field(ge=Decimal("0.01"))
    date: dt.date
    is_recurring: bool = False
    recurring_period: Optional[str] = DEFAULT_RECURRING_PERIOD.value


def _format_errors(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "form"
        messages.append(f"{location}: {error.get('msg', 'invalid value')}")
    return messages


def validate_transaction(
    data: Mapping[str, Any],
    *,
    project_id: str,
    transaction_id: int = 0,
) -> Transaction:
    """Turn raw form values into a ``Transaction``.

    Unknown periods on recurring items raise ``InvalidRecurrencePeriod`` so the
    aggregator only ever sees valid periods. Every other problem is collected
    into a single ``TransactionValidationError``.
    """

    try:
        form = TransactionForm.model_validate(dict(data))
    except ValidationError as exc:
        raise TransactionValidationError(_format_errors(exc)) from exc

    period: Optional[RecurringPeriod] = None
    if form.is_recurring:
        period = RecurringPeriod.parse(form.recurring_period or DEFAULT_RECURRING_PERIOD.value)

    return Transaction(
        id=transaction_id,
        project_id=project_id,
        name=form.name,
        amount=form.amount,
        date=form.date,
        is_recurring=form.is_recurring,
        recurring_period=period,
    )


def validate_project_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidProjectName("Project name is required.")
    return cleaned

