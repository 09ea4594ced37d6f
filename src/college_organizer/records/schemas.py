# src/college_organizer/records/schemas.py

"""Per-entity wiring shared by every store implementation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .models import PomodoroSession, Project, Subtask, Task, Track
from .validation import (
    validate_pomodoro_session,
    validate_project,
    validate_subtask,
    validate_task,
    validate_track,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RecordSchema(Generic[T]):
    entity: str
    from_dict: Callable[[dict[str, Any]], T]
    validate: Callable[[dict[str, Any]], dict[str, Any]]
    # Which wire field carries the store-assigned timestamp.
    timestamp_field: str = "createdAt"
    sort: Callable[[list[T]], list[T]] | None = None

    def ordered(self, records: list[T]) -> list[T]:
        return self.sort(records) if self.sort else records


TASKS: RecordSchema[Task] = RecordSchema(
    entity="task",
    from_dict=Task.from_dict,
    validate=validate_task,
    sort=lambda rs: sorted(rs, key=lambda t: t.date),
)

TRACKS: RecordSchema[Track] = RecordSchema(
    entity="track",
    from_dict=Track.from_dict,
    validate=validate_track,
    sort=lambda rs: sorted(rs, key=lambda t: t.name.casefold()),
)

PROJECTS: RecordSchema[Project] = RecordSchema(
    entity="project",
    from_dict=Project.from_dict,
    validate=validate_project,
)

SUBTASKS: RecordSchema[Subtask] = RecordSchema(
    entity="subtask",
    from_dict=Subtask.from_dict,
    validate=validate_subtask,
    sort=lambda rs: sorted(rs, key=lambda s: s.order),
)

POMODORO_SESSIONS: RecordSchema[PomodoroSession] = RecordSchema(
    entity="pomodoro session",
    from_dict=PomodoroSession.from_dict,
    validate=validate_pomodoro_session,
    timestamp_field="completedAt",
    sort=lambda rs: sorted(rs, key=lambda s: s.completed_at, reverse=True),
)
