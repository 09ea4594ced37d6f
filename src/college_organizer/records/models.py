# src/college_organizer/records/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class TaskType(StrEnum):
    ASSIGNMENT = "assignment"
    EXAM = "exam"
    EVENT = "event"
    REMINDER = "reminder"
    MEETING = "meeting"
    PROJECT = "project"
    DEADLINE = "deadline"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: high sorts first."""
        match self:
            case Priority.HIGH:
                return 0
            case Priority.MEDIUM:
                return 1
            case Priority.LOW:
                return 2


class Recurrence(StrEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# Weekday tokens as stored in recurringDays (Sunday first, like the calendar grid).
WEEKDAY_TOKENS: tuple[str, ...] = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def utc_now() -> datetime:
    return datetime.now(UTC)


def _ts_to_str(ts: datetime) -> str:
    return ts.isoformat().replace("+00:00", "Z")


def _ts_from_raw(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if not raw:
        return utc_now()
    return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))


@dataclass(slots=True)
class Track:
    id: str
    name: str
    color: str
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "createdAt": _ts_to_str(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Track:
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            color=str(data["color"]),
            created_at=_ts_from_raw(data.get("createdAt")),
        )


@dataclass(slots=True)
class Project:
    id: str
    name: str
    track_id: str
    description: str | None = None
    color: str | None = None
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "trackId": self.track_id,
            "color": self.color,
            "createdAt": _ts_to_str(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            track_id=str(data["trackId"]),
            description=data.get("description"),
            color=data.get("color"),
            created_at=_ts_from_raw(data.get("createdAt")),
        )


@dataclass(slots=True)
class Task:
    """
    A stored task record.

    `date` is the anchor; `end_date` (inclusive) marks a multi-day span.
    Dates are `YYYY-MM-DD` strings and times `HH:MM`; both compare
    chronologically as plain strings.
    """

    id: str
    title: str
    date: str
    type: TaskType = TaskType.ASSIGNMENT
    description: str = ""
    end_date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    track_id: str | None = None
    project_id: str | None = None
    recurring: Recurrence = Recurrence.NONE
    recurring_days: list[str] | None = None
    recurring_end_date: str | None = None
    order: int = 0
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "date": self.date,
            "endDate": self.end_date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "completed": self.completed,
            "priority": self.priority.value,
            "trackId": self.track_id,
            "projectId": self.project_id,
            "recurring": self.recurring.value,
            "recurringDays": list(self.recurring_days) if self.recurring_days is not None else None,
            "recurringEndDate": self.recurring_end_date,
            "order": self.order,
            "createdAt": _ts_to_str(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        days = data.get("recurringDays")
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            date=str(data["date"]),
            type=TaskType(data.get("type") or TaskType.ASSIGNMENT),
            description=str(data.get("description") or ""),
            end_date=data.get("endDate"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
            completed=bool(data.get("completed", False)),
            priority=Priority(data.get("priority") or Priority.MEDIUM),
            track_id=data.get("trackId"),
            project_id=data.get("projectId"),
            recurring=Recurrence(data.get("recurring") or Recurrence.NONE),
            recurring_days=list(days) if days is not None else None,
            recurring_end_date=data.get("recurringEndDate"),
            order=int(data.get("order") or 0),
            created_at=_ts_from_raw(data.get("createdAt")),
        )


@dataclass(slots=True)
class Subtask:
    id: str
    task_id: str
    title: str
    completed: bool = False
    order: int = 0
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "title": self.title,
            "completed": self.completed,
            "order": self.order,
            "createdAt": _ts_to_str(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Subtask:
        return cls(
            id=str(data["id"]),
            task_id=str(data["taskId"]),
            title=str(data["title"]),
            completed=bool(data.get("completed", False)),
            order=int(data.get("order") or 0),
            created_at=_ts_from_raw(data.get("createdAt")),
        )


@dataclass(slots=True)
class PomodoroSession:
    id: str
    duration: int
    task_id: str | None = None
    completed_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "duration": self.duration,
            "completedAt": _ts_to_str(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PomodoroSession:
        return cls(
            id=str(data["id"]),
            duration=int(data["duration"]),
            task_id=data.get("taskId"),
            completed_at=_ts_from_raw(data.get("completedAt")),
        )
