"""Unit tests for the recurrence-aware aggregation helpers."""

from __future__ import annotations

import random
import sys
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

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
    total_for_period,
)
from core.errors import InvalidInterval, InvalidRecurrencePeriod
from core.models import RecurringPeriod, Transaction


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)


def _item(amount: str, when: date, period: str | None = None, *, item_id: int = 1) -> Transaction:
    return Transaction(
        id=item_id,
        project_id="p1",
        name=f"item-{item_id}",
        amount=Decimal(amount),
        date=when,
        is_recurring=period is not None,
        recurring_period=period,
    )


def test_yearly_item_counts_once_per_year():
    rent_review = _item("1200", date(2024, 1, 1), "yearly")

    assert amount_in_interval(rent_review, date(2024, 1, 1), date(2024, 12, 31)) == Decimal("1200")


def test_yearly_item_anchored_years_before_range():
    bonus = _item("1200", date(2020, 1, 1), "yearly")

    assert amount_in_interval(bonus, date(2023, 1, 1), date(2023, 12, 31)) == Decimal("1200")
    assert list(iter_occurrences(bonus, date(2023, 1, 1), date(2023, 12, 31))) == [date(2023, 1, 1)]


def test_monthly_item_counts_every_month_in_range():
    gym = _item("50", date(2023, 1, 15), "monthly")

    assert amount_in_interval(gym, date(2023, 1, 1), date(2023, 3, 31)) == Decimal("150")
    assert list(iter_occurrences(gym, date(2023, 1, 1), date(2023, 3, 31))) == [
        date(2023, 1, 15),
        date(2023, 2, 15),
        date(2023, 3, 15),
    ]


def test_weekly_and_daily_items_multiply_by_occurrences():
    groceries = _item("10", date(2024, 1, 1), "weekly")
    coffee = _item("1.5", date(2024, 2, 1), "daily")

    assert amount_in_interval(groceries, date(2024, 1, 1), date(2024, 1, 31)) == Decimal("50")
    assert amount_in_interval(coffee, date(2024, 2, 1), date(2024, 2, 29)) == Decimal("43.5")


def test_one_off_item_counts_only_inside_range():
    laptop = _item("999.99", date(2024, 6, 3))

    assert amount_in_interval(laptop, date(2024, 6, 1), date(2024, 6, 30)) == Decimal("999.99")
    assert amount_in_interval(laptop, date(2024, 6, 3), date(2024, 6, 3)) == Decimal("999.99")
    assert amount_in_interval(laptop, date(2024, 7, 1), date(2024, 7, 31)) == Decimal("0")


def test_items_starting_after_range_or_reversed_range_contribute_nothing():
    salary = _item("3000", date(2024, 5, 1), "monthly")

    assert amount_in_interval(salary, date(2024, 1, 1), date(2024, 4, 30)) == Decimal("0")
    assert amount_in_interval(salary, date(2024, 12, 31), date(2024, 1, 1)) == Decimal("0")
    assert total_for_period([salary], date(2024, 12, 31), date(2024, 1, 1)) == Decimal("0")


def test_simulation_restarts_at_window_start():
    bonus = _item("1200", date(2020, 1, 1), "yearly")
    groceries = _item("10", date(2023, 1, 3), "weekly")

    assert amount_in_interval(bonus, date(2023, 6, 1), date(2023, 12, 31)) == Decimal("1200")
    assert list(iter_occurrences(groceries, date(2023, 3, 1), date(2023, 3, 31))) == [
        date(2023, 3, 1),
        date(2023, 3, 8),
        date(2023, 3, 15),
        date(2023, 3, 22),
        date(2023, 3, 29),
    ]


def test_single_day_interval_counts_once_from_the_anchor_on():
    gym = _item("50", date(2024, 1, 15), "monthly")

    assert amount_in_interval(gym, date(2024, 1, 15), date(2024, 1, 15)) == Decimal("50")
    assert amount_in_interval(gym, date(2024, 2, 15), date(2024, 2, 15)) == Decimal("50")
    assert amount_in_interval(gym, date(2024, 2, 16), date(2024, 2, 16)) == Decimal("50")
    assert amount_in_interval(gym, date(2024, 1, 14), date(2024, 1, 14)) == Decimal("0")


def test_month_end_anchor_keeps_clamped_day():
    rent = _item("100", date(2024, 1, 31), "monthly")

    occurrences = list(iter_occurrences(rent, date(2024, 1, 1), date(2024, 4, 30)))

    assert occurrences == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 29), date(2024, 4, 29)]


def test_leap_day_yearly_anchor():
    birthday = _item("20", date(2024, 2, 29), "yearly")

    occurrences = list(iter_occurrences(birthday, date(2024, 1, 1), date(2028, 12, 31)))

    assert occurrences == [
        date(2024, 2, 29),
        date(2025, 2, 28),
        date(2026, 2, 28),
        date(2027, 2, 28),
        date(2028, 2, 28),
    ]


def test_step_and_shift_follow_calendar():
    assert step_date(date(2023, 1, 31), RecurringPeriod.MONTHLY) == date(2023, 2, 28)
    assert step_date(date(2024, 2, 29), "yearly") == date(2025, 2, 28)
    assert shift_date(date(2023, 1, 31), "monthly", 2) == date(2023, 3, 28)
    assert shift_date(date(2024, 1, 1), "weekly", 3) == date(2024, 1, 22)
    assert shift_date(date(2024, 12, 31), "daily", 1) == date(2025, 1, 1)
    assert shift_date(date(2024, 5, 5), "monthly", 0) == date(2024, 5, 5)


def test_total_is_independent_of_item_order():
    items = [
        _item("0.10", date(2024, 1, 1), "daily", item_id=1),
        _item("19.99", date(2024, 1, 5), "weekly", item_id=2),
        _item("1200", date(2023, 3, 1), "yearly", item_id=3),
        _item("45.50", date(2024, 2, 2), item_id=4),
    ]
    shuffled = list(items)
    random.Random(7).shuffle(shuffled)

    start, end = date(2024, 1, 1), date(2024, 6, 30)

    assert total_for_period(items, start, end) == total_for_period(shuffled, start, end)


def test_decimal_totals_are_exact():
    coffee = _item("0.1", date(2024, 1, 1), "daily")

    assert amount_in_interval(coffee, date(2024, 1, 1), date(2024, 1, 3)) == Decimal("0.3")


def test_summarise_period_nets_earnings_against_expenses():
    expenses = [_item("50", date(2024, 1, 15), "monthly")]
    earnings = [_item("1000", date(2024, 1, 1), "monthly", item_id=2)]

    totals = summarise_period(expenses, earnings, date(2024, 1, 1), date(2024, 3, 31))

    assert totals == {
        "expenses": Decimal("150"),
        "earnings": Decimal("3000"),
        "net": Decimal("2850"),
    }


def test_monthly_series_covers_every_touched_month():
    expenses = [_item("50", date(2024, 1, 15), "monthly")]
    earnings = [_item("200", date(2024, 3, 20))]

    points = monthly_series(expenses, earnings, date(2024, 1, 15), date(2024, 3, 10))

    assert [point["label"] for point in points] == ["Jan 2024", "Feb 2024", "Mar 2024"]
    assert [point["expenses"] for point in points] == [Decimal("50")] * 3
    # months are totalled over their full calendar extent
    assert points[-1]["earnings"] == Decimal("200")
    assert points[-1]["net"] == Decimal("150")
    assert points[1]["month_start"] == date(2024, 2, 1)
    assert points[1]["month_end"] == date(2024, 2, 29)


def test_monthly_series_spanning_years():
    points = monthly_series([], [], date(2023, 11, 30), date(2024, 2, 1))

    assert [point["label"] for point in points] == ["Nov 2023", "Dec 2023", "Jan 2024", "Feb 2024"]
    assert all(point["net"] == Decimal("0") for point in points)


def test_monthly_series_empty_for_missing_or_reversed_bounds():
    expenses = [_item("50", date(2024, 1, 15), "monthly")]

    assert monthly_series(expenses, [], None, date(2024, 3, 1)) == []
    assert monthly_series(expenses, [], date(2024, 1, 1), None) == []
    assert monthly_series(expenses, [], date(2024, 3, 1), date(2024, 1, 1)) == []


def test_monthly_series_frame_is_chart_ready():
    points = monthly_series(
        [_item("12.50", date(2024, 1, 1), "monthly")],
        [_item("100", date(2024, 1, 1), "monthly", item_id=2)],
        date(2024, 1, 1),
        date(2024, 2, 28),
    )

    frame = monthly_series_frame(points)

    assert list(frame.columns) == ["Month", "Expenses", "Earnings", "Net"]
    assert frame["Month"].tolist() == ["Jan 2024", "Feb 2024"]
    assert frame["Net"].tolist() == pytest.approx([87.5, 87.5])
    assert monthly_series_frame([]).empty


def test_recurring_item_requires_known_period():
    with pytest.raises(InvalidRecurrencePeriod):
        _item("10", date(2024, 1, 1), "fortnightly")

    with pytest.raises(InvalidRecurrencePeriod):
        Transaction(
            id=1,
            project_id="p1",
            name="mystery",
            amount=Decimal("10"),
            date=date(2024, 1, 1),
            is_recurring=True,
        )


def test_require_interval_rejects_reversed_or_missing_bounds():
    assert require_interval("2024-01-01", date(2024, 1, 31)) == (date(2024, 1, 1), date(2024, 1, 31))

    with pytest.raises(InvalidInterval):
        require_interval(date(2024, 2, 1), date(2024, 1, 1))
    with pytest.raises(InvalidInterval):
        require_interval(None, date(2024, 1, 1))


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        (-3, ("today", 0)),
        (0, ("today", 0)),
        (1, ("tomorrow", 1)),
        (6, ("days", 6)),
        (7, ("weeks", 1)),
        (29, ("weeks", 4)),
        (30, ("months", 1)),
        (364, ("months", 12)),
        (365, ("years", 1)),
        (800, ("years", 2)),
    ],
)
def test_classify_gap_boundaries(days, expected):
    assert classify_gap(days) == expected


def test_next_occurrence_not_applicable_for_one_off_items():
    hint = next_occurrence(_item("10", date(2024, 1, 1)), now=date(2024, 1, 1))

    assert hint.unit == "n/a"
    assert not hint.is_applicable
    assert hint.label == "N/A"


def test_next_occurrence_tomorrow_and_today():
    gym = _item("50", date(2024, 1, 15), "monthly")

    tomorrow = next_occurrence(gym, now=date(2024, 3, 14))
    assert tomorrow.unit == "tomorrow"
    assert tomorrow.next_date == date(2024, 3, 15)
    assert tomorrow.label == "Tomorrow"

    later_today = next_occurrence(gym, now=datetime(2024, 3, 14, 18, 0))
    assert later_today.unit == "today"
    assert later_today.next_date == date(2024, 3, 15)


def test_next_occurrence_skips_an_occurrence_falling_today():
    gym = _item("50", date(2024, 1, 15), "monthly")

    hint = next_occurrence(gym, now=date(2024, 3, 15))

    assert hint.next_date == date(2024, 4, 15)
    assert hint.days_until == 31
    assert (hint.unit, hint.count) == ("months", 1)


def test_next_occurrence_buckets():
    insurance = _item("640", date(2023, 5, 1), "yearly")
    groceries = _item("95", date(2024, 1, 1), "weekly")
    salary = _item("3200", date(2024, 5, 1), "monthly")

    forty_days = next_occurrence(insurance, now=date(2024, 3, 22))
    assert forty_days.days_until == 40
    assert (forty_days.unit, forty_days.count) == ("months", 1)
    assert forty_days.label == "1 month(s)"

    assert (next_occurrence(groceries, now=date(2024, 1, 1)).unit) == "weeks"
    in_days = next_occurrence(groceries, now=date(2024, 1, 3))
    assert (in_days.unit, in_days.count, in_days.label) == ("days", 5, "5 day(s)")

    not_started = next_occurrence(salary, now=date(2024, 3, 1))
    assert not_started.next_date == date(2024, 5, 1)
    assert (not_started.unit, not_started.count) == ("months", 2)

    yearly = next_occurrence(_item("20", date(2024, 6, 1), "yearly"), now=date(2024, 6, 1))
    assert (yearly.unit, yearly.count) == ("years", 1)


def test_monthly_series_restarts_weekly_items_each_month():
    groceries = [_item("10", date(2023, 1, 3), "weekly")]

    points = monthly_series(groceries, [], date(2023, 1, 1), date(2023, 3, 31))

    assert [point["expenses"] for point in points] == [Decimal("50"), Decimal("40"), Decimal("50")]


def test_next_occurrence_steps_from_previous_month_end():
    rent = _item("100", date(2024, 1, 31), "monthly")

    hint = next_occurrence(rent, now=date(2024, 3, 10))

    assert hint.next_date == date(2024, 3, 29)
    assert hint.days_until == 19
    assert (hint.unit, hint.count, hint.label) == ("weeks", 2, "2 week(s)")
