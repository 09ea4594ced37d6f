# src/college_organizer/records/repository.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.errors import ValidationError
from ..core.ports import RecordRepo
from ..scheduling.dates import add_days
from . import schemas
from .memory_store import MemoryRecordStore
from .models import PomodoroSession, Project, Subtask, Task, Track
from .sqlite_store import SqliteRecordStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Repositories:
    """One repo per entity type, plus the few cross-entity write rules."""

    tasks: RecordRepo[Task]
    tracks: RecordRepo[Track]
    projects: RecordRepo[Project]
    subtasks: RecordRepo[Subtask]
    pomodoro_sessions: RecordRepo[PomodoroSession]

    def create_project(self, fields: dict[str, Any]) -> Project:
        # The parent track must exist when the project is created; later
        # track deletion leaves the reference dangling.
        track_id = fields.get("trackId")
        if isinstance(track_id, str) and track_id and self.tracks.get(track_id) is None:
            raise ValidationError("project", {"trackId": f"unknown track {track_id!r}"})
        return self.projects.create(fields)

    def subtasks_for_task(self, task_id: str) -> list[Subtask]:
        return [s for s in self.subtasks.list() if s.task_id == task_id]

    def record_pomodoro(self, duration: int, task_id: str | None = None) -> PomodoroSession:
        session = self.pomodoro_sessions.create({"duration": duration, "taskId": task_id})
        logger.info("Pomodoro session recorded minutes=%s", duration)
        return session

    def close(self) -> None:
        for repo in (self.tasks, self.tracks, self.projects, self.subtasks, self.pomodoro_sessions):
            close = getattr(repo, "close", None)
            if close is not None:
                close()


def memory_repositories() -> Repositories:
    return Repositories(
        tasks=MemoryRecordStore(schemas.TASKS),
        tracks=MemoryRecordStore(schemas.TRACKS),
        projects=MemoryRecordStore(schemas.PROJECTS),
        subtasks=MemoryRecordStore(schemas.SUBTASKS),
        pomodoro_sessions=MemoryRecordStore(schemas.POMODORO_SESSIONS),
    )


def sqlite_repositories(db_path: str | Path) -> Repositories:
    return Repositories(
        tasks=SqliteRecordStore(schemas.TASKS, db_path),
        tracks=SqliteRecordStore(schemas.TRACKS, db_path),
        projects=SqliteRecordStore(schemas.PROJECTS, db_path),
        subtasks=SqliteRecordStore(schemas.SUBTASKS, db_path),
        pomodoro_sessions=SqliteRecordStore(schemas.POMODORO_SESSIONS, db_path),
    )


def seed_demo(repos: Repositories, today: str) -> None:
    """Sample tracks and tasks for a first run."""
    cs = repos.tracks.create({"name": "Computer Science", "color": "#8b5cf6"})
    math = repos.tracks.create({"name": "Mathematics", "color": "#3b82f6"})

    repos.tasks.create(
        {
            "title": "Complete Algorithm Assignment",
            "description": "Implement binary search tree operations",
            "type": "assignment",
            "date": today,
            "startTime": "14:00",
            "endTime": "16:00",
            "priority": "high",
            "trackId": cs.id,
        }
    )
    repos.tasks.create(
        {
            "title": "Study for Calculus Midterm",
            "description": "Review chapters 5-7",
            "type": "exam",
            "date": add_days(today, 1),
            "priority": "high",
            "trackId": math.id,
        }
    )
    repos.tasks.create(
        {
            "title": "Team Meeting",
            "description": "Discuss project milestones",
            "type": "meeting",
            "date": today,
            "startTime": "10:00",
            "endTime": "11:00",
            "completed": True,
            "priority": "medium",
        }
    )
    logger.info("Seeded demo data (2 tracks, 3 tasks)")
