# tests/test_scheduling.py

from __future__ import annotations

import pytest

from college_organizer.records.models import Recurrence
from college_organizer.scheduling.dates import (
    add_days,
    days_in_month,
    first_weekday_of_month,
    iso_date,
    weekday_token,
)
from college_organizer.scheduling.engine import (
    is_due_tomorrow,
    is_overdue,
    occurrence_dates,
    occurs_on,
    occurs_on_date,
    occurs_on_date_expanded,
    range_membership,
)

from .conftest import make_task


def test_multi_day_task_occurs_on_each_day_of_its_window_only() -> None:
    task = make_task(date="2024-03-10", end_date="2024-03-12")

    for day in ("2024-03-10", "2024-03-11", "2024-03-12"):
        assert occurs_on_date(task, day)
    for day in ("2024-03-09", "2024-03-13", "2024-02-11", "2025-03-11"):
        assert not occurs_on_date(task, day)


def test_single_day_task_occurs_on_anchor_only() -> None:
    task = make_task(date="2024-03-10")
    assert occurs_on_date(task, "2024-03-10")
    assert not occurs_on_date(task, "2024-03-11")


def test_recurring_task_is_not_expanded_by_occurs_on_date() -> None:
    task = make_task(date="2024-03-10", recurring=Recurrence.DAILY)
    assert not occurs_on_date(task, "2024-03-11")
    assert not occurs_on(task, "2024-03-11")
    assert occurs_on(task, "2024-03-11", expand_recurring=True)


def test_overdue_uses_anchor_date_and_completion() -> None:
    task = make_task(date="2024-03-10", end_date="2024-03-20")
    assert is_overdue(task, "2024-03-11")
    assert not is_overdue(task, "2024-03-10")

    task.completed = True
    assert not is_overdue(task, "2024-03-11")


def test_due_tomorrow_crosses_month_and_year() -> None:
    assert is_due_tomorrow(make_task(date="2024-03-01"), "2024-02-29")
    assert is_due_tomorrow(make_task(date="2025-01-01"), "2024-12-31")
    assert not is_due_tomorrow(make_task(date="2024-03-11"), "2024-03-11")


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        ("2024-03-01", "2024-03-10", False),  # end is exclusive
        ("2024-03-01", "2024-03-11", True),
        ("2024-03-11", "2024-03-12", True),
        ("2024-03-12", "2024-03-20", True),
        ("2024-03-13", "2024-03-20", False),
    ],
)
def test_range_membership_intersects_half_open_range(start: str, end: str, expected: bool) -> None:
    task = make_task(date="2024-03-10", end_date="2024-03-12")
    assert range_membership(task, start, end) is expected


def test_date_primitives() -> None:
    assert add_days("2024-02-28", 1) == "2024-02-29"
    assert add_days("2024-03-01", -1) == "2024-02-29"
    assert add_days("2023-12-31", 1) == "2024-01-01"

    assert days_in_month(2024, 1) == 29
    assert days_in_month(2023, 1) == 28
    assert days_in_month(2024, 11) == 31
    assert days_in_month(2024, 12) == 31  # folds into January 2025

    # 2024-02-01 was a Thursday; Sunday = 0.
    assert first_weekday_of_month(2024, 1) == 4
    # 2024-09-01 was a Sunday.
    assert first_weekday_of_month(2024, 8) == 0

    assert iso_date(2024, 1, 5) == "2024-02-05"
    assert weekday_token("2024-03-10") == "sun"


def test_daily_expansion_respects_recurring_end_date() -> None:
    task = make_task(date="2024-03-10", recurring=Recurrence.DAILY, recurring_end_date="2024-03-12")
    assert occurrence_dates(task, "2024-03-01", "2024-03-31") == [
        "2024-03-10",
        "2024-03-11",
        "2024-03-12",
    ]


def test_weekly_expansion_defaults_to_anchor_weekday() -> None:
    task = make_task(date="2024-03-04", recurring=Recurrence.WEEKLY)  # a Monday
    assert occurrence_dates(task, "2024-03-01", "2024-03-26") == [
        "2024-03-04",
        "2024-03-11",
        "2024-03-18",
        "2024-03-25",
    ]


def test_weekly_expansion_uses_recurring_days() -> None:
    task = make_task(date="2024-03-04", recurring=Recurrence.WEEKLY, recurring_days=["mon", "wed", "fri"])
    assert occurrence_dates(task, "2024-03-04", "2024-03-11") == [
        "2024-03-04",
        "2024-03-06",
        "2024-03-08",
    ]


def test_monthly_expansion_clamps_to_month_end() -> None:
    task = make_task(date="2024-01-31", recurring=Recurrence.MONTHLY)
    assert occurrence_dates(task, "2024-01-01", "2024-05-01") == [
        "2024-01-31",
        "2024-02-29",
        "2024-03-31",
        "2024-04-30",
    ]


def test_expansion_keeps_multi_day_span() -> None:
    task = make_task(
        date="2024-03-04",
        end_date="2024-03-05",
        recurring=Recurrence.WEEKLY,
        recurring_end_date="2024-03-11",
    )
    assert occurrence_dates(task, "2024-03-01", "2024-03-31") == [
        "2024-03-04",
        "2024-03-05",
        "2024-03-11",
        "2024-03-12",
    ]


def test_expansion_never_goes_before_anchor() -> None:
    task = make_task(date="2024-03-10", recurring=Recurrence.DAILY)
    assert occurrence_dates(task, "2024-03-01", "2024-03-10") == []
    assert not occurs_on_date_expanded(task, "2024-03-09")
    assert occurs_on_date_expanded(task, "2024-06-01")


def test_non_recurring_expansion_is_the_stored_window() -> None:
    task = make_task(date="2024-03-10", end_date="2024-03-12")
    assert occurrence_dates(task, "2024-03-11", "2024-04-01") == ["2024-03-11", "2024-03-12"]
    assert occurrence_dates(task, "2024-03-11", "2024-03-11") == []
