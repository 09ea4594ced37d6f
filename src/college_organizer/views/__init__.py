# src/college_organizer/views/__init__.py

from .buckets import reorder, search_tasks, sort_by_priority, today_bucket, upcoming_bucket
from .calendar import DayCell, MonthGrid, TimeBlock, TimelineDay, month_grid, time_blocks, timeline
from .stats import Statistics, TrackRollup, completion_rate, statistics, track_rollups

__all__ = [
    "DayCell",
    "MonthGrid",
    "Statistics",
    "TimeBlock",
    "TimelineDay",
    "TrackRollup",
    "completion_rate",
    "month_grid",
    "reorder",
    "search_tasks",
    "sort_by_priority",
    "statistics",
    "time_blocks",
    "timeline",
    "today_bucket",
    "track_rollups",
    "upcoming_bucket",
]
