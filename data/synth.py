"""Synthetic demo ledger generator for Ledgerline.

Produces a household project with the usual mix of recurring bills,
subscriptions and salary alongside a handful of one-off purchases, so the
dashboard has something meaningful to aggregate on first launch.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from core.models import Project, RecurringPeriod, Transaction
from core.storage import LedgerStore

T = TypeVar("T")

DEMO_PROJECT_ID = "demo"
DEMO_PROJECT_NAME = "Household"


@dataclass(frozen=True)
class RecurringTemplate:
    """A recurring demo item anchored ``offset_days`` after the ledger start."""

    name: str
    amount: float
    period: RecurringPeriod
    offset_days: int = 0
    jitter_pct: float = 0.0


RECURRING_EXPENSES: Sequence[RecurringTemplate] = (
    RecurringTemplate("Rent", 1450.0, RecurringPeriod.MONTHLY, offset_days=0),
    RecurringTemplate("Electricity", 84.0, RecurringPeriod.MONTHLY, offset_days=14, jitter_pct=0.08),
    RecurringTemplate("Video streaming", 12.99, RecurringPeriod.MONTHLY, offset_days=3),
    RecurringTemplate("Groceries", 95.0, RecurringPeriod.WEEKLY, offset_days=5, jitter_pct=0.1),
    RecurringTemplate("Coffee", 3.2, RecurringPeriod.DAILY, offset_days=30),
    RecurringTemplate("Car insurance", 640.0, RecurringPeriod.YEARLY, offset_days=45),
)

RECURRING_EARNINGS: Sequence[RecurringTemplate] = (
    RecurringTemplate("Salary", 3200.0, RecurringPeriod.MONTHLY, offset_days=24, jitter_pct=0.03),
    RecurringTemplate("Side project", 150.0, RecurringPeriod.WEEKLY, offset_days=10, jitter_pct=0.2),
)

ONE_OFF_EXPENSES: Sequence[Tuple[str, Tuple[float, float]]] = (
    ("New laptop", (900.0, 1600.0)),
    ("Concert tickets", (60.0, 180.0)),
    ("Dentist", (80.0, 250.0)),
    ("Weekend trip", (250.0, 700.0)),
    ("Birthday gift", (25.0, 120.0)),
)

ONE_OFF_EARNINGS: Sequence[Tuple[str, Tuple[float, float]]] = (
    ("Tax refund", (200.0, 900.0)),
    ("Sold bike", (120.0, 400.0)),
)


def generate_demo_ledger(
    start: date | datetime | str | None = None,
    *,
    span_days: int = 365,
    seed: Optional[int] = None,
    project_id: str = DEMO_PROJECT_ID,
    project_name: str = DEMO_PROJECT_NAME,
) -> Tuple[Project, List[Transaction], List[Transaction]]:
    """Generate a demo project with its expenses and earnings.

    ``start`` defaults to January 1st of the current year. One-off items are
    scattered across ``span_days`` days from the start.
    """

    rng = np.random.default_rng(seed)
    start_date = _normalize_date(start) if start is not None else date(date.today().year, 1, 1)
    project = Project(id=project_id, name=project_name)

    expenses = [_recurring_item(template, start_date, project_id, rng) for template in RECURRING_EXPENSES]
    earnings = [_recurring_item(template, start_date, project_id, rng) for template in RECURRING_EARNINGS]

    one_off_count = int(rng.integers(2, len(ONE_OFF_EXPENSES) + 1))
    for index in rng.choice(len(ONE_OFF_EXPENSES), size=one_off_count, replace=False):
        name, bounds = ONE_OFF_EXPENSES[int(index)]
        expenses.append(_one_off_item(name, bounds, start_date, span_days, project_id, rng))

    name, bounds = _rng_choice(ONE_OFF_EARNINGS, rng)
    earnings.append(_one_off_item(name, bounds, start_date, span_days, project_id, rng))

    return project, _number(expenses), _number(earnings)


def write_demo_ledger(store: LedgerStore, **kwargs) -> Project:
    """Generate a demo ledger and persist it through ``store``.

    Keyword arguments are forwarded to :func:`generate_demo_ledger`.
    """

    project, expenses, earnings = generate_demo_ledger(**kwargs)
    stored_project = store.add_project(project.name, project_id=project.id)
    for expense in expenses:
        store.add_expense(expense)
    for earning in earnings:
        store.add_earning(earning)
    return stored_project


def _recurring_item(
    template: RecurringTemplate,
    start: date,
    project_id: str,
    rng: np.random.Generator,
) -> Transaction:
    amount = template.amount * (1 + rng.normal(0, template.jitter_pct)) if template.jitter_pct else template.amount
    return Transaction(
        id=0,
        project_id=project_id,
        name=template.name,
        amount=_to_amount(amount),
        date=start + timedelta(days=template.offset_days),
        is_recurring=True,
        recurring_period=template.period,
    )


def _one_off_item(
    name: str,
    bounds: Tuple[float, float],
    start: date,
    span_days: int,
    project_id: str,
    rng: np.random.Generator,
) -> Transaction:
    return Transaction(
        id=0,
        project_id=project_id,
        name=name,
        amount=_to_amount(rng.uniform(*bounds)),
        date=start + timedelta(days=int(rng.integers(0, max(span_days, 1)))),
    )


def _number(items: List[Transaction]) -> List[Transaction]:
    items.sort(key=lambda item: (item.date, item.name))
    return [dataclasses.replace(item, id=index) for index, item in enumerate(items, start=1)]


def _to_amount(value: float) -> Decimal:
    return Decimal(str(round(max(abs(float(value)), 0.01), 2)))


def _normalize_date(value: date | datetime | str) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value)
        return parsed.date()
    raise TypeError(f"Unsupported date value: {value!r}")


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]
