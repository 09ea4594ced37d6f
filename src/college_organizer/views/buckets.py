# src/college_organizer/views/buckets.py

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..records.models import Task
from ..scheduling.engine import occurs_on

UPCOMING_LIMIT = 10


def search_tasks(tasks: Iterable[Task], query: str) -> list[Task]:
    """Case-insensitive substring match on title or description; empty query keeps all."""
    q = (query or "").strip().lower()
    if not q:
        return list(tasks)
    return [t for t in tasks if q in t.title.lower() or q in (t.description or "").lower()]


def sort_by_priority(tasks: Iterable[Task]) -> list[Task]:
    # sorted() is stable: equal priorities keep their input order.
    return sorted(tasks, key=lambda t: t.priority.rank)


def today_bucket(tasks: Iterable[Task], today: str, *, expand_recurring: bool = False) -> list[Task]:
    """Tasks active today (or multi-day tasks ending today), high priority first."""
    picked = [
        t
        for t in tasks
        if occurs_on(t, today, expand_recurring=expand_recurring) or t.end_date == today
    ]
    return sort_by_priority(picked)


def upcoming_bucket(tasks: Iterable[Task], today: str, *, limit: int = UPCOMING_LIMIT) -> list[Task]:
    """Open tasks anchored after today, soonest first."""
    picked = [t for t in tasks if t.date > today and not t.completed]
    picked.sort(key=lambda t: t.date)
    return picked[: max(0, int(limit))]


def reorder(tasks: Sequence[Task], task_id: str, new_index: int) -> list[tuple[str, int]]:
    """
    Move `task_id` to `new_index` within `tasks` (the list as displayed).

    Returns the (task_id, order) writes that make every task's `order`
    equal its new position; tasks already at the right order are skipped.
    An unknown id yields no writes.
    """
    items = list(tasks)
    old_index = next((i for i, t in enumerate(items) if t.id == task_id), None)
    if old_index is None:
        return []

    new_index = max(0, min(int(new_index), len(items) - 1))
    moved = items.pop(old_index)
    items.insert(new_index, moved)

    return [(t.id, i) for i, t in enumerate(items) if (t.order or 0) != i]
