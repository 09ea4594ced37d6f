# src/college_organizer/scheduling/engine.py

"""
Scheduling engine.

Pure predicates over Task records:
- does a task occur on a day / inside a range,
- is it overdue or due tomorrow (anchor date only),
- which concrete dates does its recurrence rule produce.

`occurs_on_date` and `range_membership` look only at the stored
[date, endDate] window. Recurrence is expanded only through
`occurrence_dates` / `occurs_on_date_expanded`; callers opt in.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, timedelta

from ..records.models import Recurrence, Task
from .dates import add_days, days_between, days_in_month, weekday_token


def task_window(task: Task) -> tuple[str, str]:
    return task.date, task.end_date or task.date


def occurs_on_date(task: Task, day: str) -> bool:
    start, end = task_window(task)
    return start <= day <= end


def is_overdue(task: Task, today: str) -> bool:
    return task.date < today and not task.completed


def is_due_tomorrow(task: Task, today: str) -> bool:
    return task.date == add_days(today, 1)


def range_membership(task: Task, start_inclusive: str, end_exclusive: str) -> bool:
    start, end = task_window(task)
    return start < end_exclusive and end >= start_inclusive


def is_timed(task: Task) -> bool:
    return bool(task.start_time or task.end_time)


def _occurrence_starts(task: Task) -> Iterator[date]:
    """Start date of every occurrence, in order, unbounded unless the rule is one-shot."""
    anchor = date.fromisoformat(task.date)

    match task.recurring:
        case Recurrence.NONE:
            yield anchor
        case Recurrence.DAILY:
            d = anchor
            while True:
                yield d
                d += timedelta(days=1)
        case Recurrence.WEEKLY:
            tokens = set(task.recurring_days or ()) or {weekday_token(task.date)}
            d = anchor
            while True:
                if weekday_token(d.isoformat()) in tokens:
                    yield d
                d += timedelta(days=1)
        case Recurrence.MONTHLY:
            k = 0
            while True:
                month0 = anchor.month - 1 + k
                year = anchor.year + month0 // 12
                month = month0 % 12
                day = min(anchor.day, days_in_month(year, month))
                yield date(year, month + 1, day)
                k += 1


def occurrence_dates(task: Task, start_inclusive: str, end_exclusive: str) -> list[str]:
    """
    Every date in [start_inclusive, end_exclusive) on which the task is active.

    Each occurrence spans as many days as the stored [date, endDate] window.
    Occurrences start on or after the anchor date and never after
    recurringEndDate (when set).
    """
    if start_inclusive >= end_exclusive:
        return []

    span = days_between(*task_window(task))
    lo = date.fromisoformat(start_inclusive)
    hi = date.fromisoformat(end_exclusive)
    stop = date.fromisoformat(task.recurring_end_date) if task.recurring_end_date else None

    found: set[date] = set()
    for occ in _occurrence_starts(task):
        if occ >= hi:
            break
        if stop is not None and occ > stop:
            break
        for offset in range(span + 1):
            d = occ + timedelta(days=offset)
            if lo <= d < hi:
                found.add(d)

    return [d.isoformat() for d in sorted(found)]


def occurs_on_date_expanded(task: Task, day: str) -> bool:
    return bool(occurrence_dates(task, day, add_days(day, 1)))


def occurs_on(task: Task, day: str, *, expand_recurring: bool = False) -> bool:
    """Dispatch used by the views: literal window by default, expanded on request."""
    if expand_recurring and task.recurring is not Recurrence.NONE:
        return occurs_on_date_expanded(task, day)
    return occurs_on_date(task, day)
