# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from college_organizer.core.state import AppState
from college_organizer.notifications.center import NotificationCenter
from college_organizer.records.models import Task
from college_organizer.records.repository import Repositories, memory_repositories

TODAY = "2024-03-11"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="College Organizer",
        log_level="INFO",
        store_backend="memory",
        data_dir=tmp_path,
        db_path=tmp_path / "organizer.sqlite3",
        seed_demo=False,
        expand_recurring=False,
        upcoming_limit=10,
        notifications_enabled=False,
        notify_timeout_seconds=5.0,
        notify_poll_seconds=0.01,
        pomodoro_minutes=25,
        short_break_minutes=5,
        long_break_minutes=15,
    )


@pytest.fixture()
def repos() -> Repositories:
    return memory_repositories()


@pytest.fixture()
def state(settings: SimpleNamespace, repos: Repositories) -> AppState:
    """AppState over in-memory stores with a fixed "today"."""
    return AppState(
        settings=settings,
        repos=repos,
        notifications=NotificationCenter(timeout_seconds=settings.notify_timeout_seconds),
        today=lambda: TODAY,
    )


def make_task(**overrides) -> Task:
    """Task record with sensible defaults; tests override what they care about."""
    fields = {"id": "t1", "title": "Task", "date": TODAY}
    fields.update(overrides)
    return Task(**fields)
