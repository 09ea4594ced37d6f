# src/college_organizer/views/stats.py

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..records.models import PomodoroSession, Priority, Project, Task, Track
from ..scheduling.dates import add_days
from ..scheduling.engine import is_due_tomorrow, is_overdue


@dataclass(frozen=True, slots=True)
class ProjectRollup:
    project: Project
    color: str | None
    task_count: int
    completed_count: int


@dataclass(frozen=True, slots=True)
class TrackRollup:
    track: Track
    task_count: int
    completed_count: int
    projects: list[ProjectRollup]

    @property
    def project_count(self) -> int:
        return len(self.projects)


@dataclass(frozen=True, slots=True)
class Statistics:
    total: int
    completed: int
    remaining: int
    completion_rate: int
    high_priority_open: int
    overdue: int
    this_week_total: int
    this_week_completed: int
    pomodoro_count: int
    pomodoro_minutes: int


def completion_rate(tasks: Sequence[Task]) -> int:
    """Completed share in whole percent; 0 for an empty list."""
    if not tasks:
        return 0
    done = sum(1 for t in tasks if t.completed)
    return round(done / len(tasks) * 100)


def overdue_tasks(tasks: Iterable[Task], today: str) -> list[Task]:
    return [t for t in tasks if is_overdue(t, today)]


def high_priority_due_tomorrow(tasks: Iterable[Task], today: str) -> list[Task]:
    return [
        t
        for t in tasks
        if is_due_tomorrow(t, today) and t.priority is Priority.HIGH and not t.completed
    ]


def find_track(tracks: Iterable[Track], track_id: str | None) -> Track | None:
    if not track_id:
        return None
    return next((t for t in tracks if t.id == track_id), None)


def track_name(tracks: Iterable[Track], track_id: str | None) -> str:
    """Display name for a task's track; dangling ids read as "Unknown"."""
    if not track_id:
        return "None"
    track = find_track(tracks, track_id)
    return track.name if track else "Unknown"


def track_rollups(
    tasks: Sequence[Task], tracks: Sequence[Track], projects: Sequence[Project]
) -> list[TrackRollup]:
    out: list[TrackRollup] = []
    for track in tracks:
        track_tasks = [t for t in tasks if t.track_id == track.id]
        project_rollups = []
        for project in (p for p in projects if p.track_id == track.id):
            project_tasks = [t for t in tasks if t.project_id == project.id]
            project_rollups.append(
                ProjectRollup(
                    project=project,
                    color=project.color or track.color,
                    task_count=len(project_tasks),
                    completed_count=sum(1 for t in project_tasks if t.completed),
                )
            )
        out.append(
            TrackRollup(
                track=track,
                task_count=len(track_tasks),
                completed_count=sum(1 for t in track_tasks if t.completed),
                projects=project_rollups,
            )
        )
    return out


def statistics(
    tasks: Sequence[Task], sessions: Sequence[PomodoroSession], today: str
) -> Statistics:
    completed = sum(1 for t in tasks if t.completed)
    week_start = add_days(today, -7)
    this_week = [t for t in tasks if week_start <= t.date <= today]

    return Statistics(
        total=len(tasks),
        completed=completed,
        remaining=len(tasks) - completed,
        completion_rate=completion_rate(tasks),
        high_priority_open=sum(1 for t in tasks if t.priority is Priority.HIGH and not t.completed),
        overdue=len(overdue_tasks(tasks, today)),
        this_week_total=len(this_week),
        this_week_completed=sum(1 for t in this_week if t.completed),
        pomodoro_count=len(sessions),
        pomodoro_minutes=sum(s.duration for s in sessions),
    )
