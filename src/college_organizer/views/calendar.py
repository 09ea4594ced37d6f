# src/college_organizer/views/calendar.py

"""
Calendar-shaped views: time blocks for one day, the month grid and the
two-week horizontal timeline.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..records.models import Task
from ..scheduling.dates import add_days, days_in_month, first_weekday_of_month, iso_date, parse_hhmm
from ..scheduling.engine import occurs_on

PX_PER_HOUR = 60
DAY_CANVAS_HEIGHT = 24 * PX_PER_HOUR
MONTH_CELL_PREVIEW = 3
TIMELINE_DAYS = 14


@dataclass(frozen=True, slots=True)
class TimeBlock:
    task: Task
    top: float
    height: float


def _hours(hhmm: str) -> float:
    h, m = parse_hhmm(hhmm)
    return h + m / 60


def time_block_position(task: Task) -> tuple[float, float] | None:
    if not task.start_time or not task.end_time:
        return None
    start = _hours(task.start_time)
    end = _hours(task.end_time)
    return start * PX_PER_HOUR, (end - start) * PX_PER_HOUR


def time_blocks(tasks: Iterable[Task], day: str) -> list[TimeBlock]:
    """Tasks anchored on `day` with both times set; untimed tasks are left out."""
    blocks: list[TimeBlock] = []
    for t in tasks:
        if t.date != day:
            continue
        pos = time_block_position(t)
        if pos is None:
            continue
        blocks.append(TimeBlock(task=t, top=pos[0], height=pos[1]))
    return blocks


@dataclass(slots=True)
class DayCell:
    """One cell of the month grid; leading blanks have day=None."""

    day: int | None = None
    date: str | None = None
    tasks: list[Task] = field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return self.day is None

    def preview(self, limit: int = MONTH_CELL_PREVIEW) -> tuple[list[Task], int]:
        """First `limit` tasks plus how many more are hidden."""
        return self.tasks[:limit], max(0, len(self.tasks) - limit)


@dataclass(slots=True)
class MonthGrid:
    year: int
    month: int
    cells: list[DayCell]

    @property
    def day_cells(self) -> list[DayCell]:
        return [c for c in self.cells if not c.is_blank]

    @property
    def leading_blanks(self) -> int:
        return len(self.cells) - len(self.day_cells)


def month_grid(
    tasks: Sequence[Task], year: int, month: int, *, expand_recurring: bool = False
) -> MonthGrid:
    """`month` is 0-indexed, like first_weekday_of_month."""
    cells = [DayCell() for _ in range(first_weekday_of_month(year, month))]
    for day in range(1, days_in_month(year, month) + 1):
        ds = iso_date(year, month, day)
        day_tasks = [t for t in tasks if occurs_on(t, ds, expand_recurring=expand_recurring)]
        cells.append(DayCell(day=day, date=ds, tasks=day_tasks))
    y, m = divmod(month, 12)
    return MonthGrid(year=year + y, month=m, cells=cells)


@dataclass(slots=True)
class TimelineDay:
    date: str
    tasks: list[Task]


def timeline(
    tasks: Iterable[Task],
    start: str,
    *,
    track_id: str | None = None,
    days: int = TIMELINE_DAYS,
) -> list[TimelineDay]:
    """
    Horizontal timeline: `days` consecutive days from `start`.

    Tasks are placed on their anchor date only; `track_id` narrows the
    view to one track.
    """
    end = add_days(start, days)
    picked = [
        t
        for t in tasks
        if start <= t.date < end and (track_id is None or t.track_id == track_id)
    ]
    picked.sort(key=lambda t: t.date)

    out: list[TimelineDay] = []
    for i in range(days):
        ds = add_days(start, i)
        out.append(TimelineDay(date=ds, tasks=[t for t in picked if t.date == ds]))
    return out
