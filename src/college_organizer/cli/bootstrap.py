# src/college_organizer/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the chosen record store and the notification center into AppState,
- optionally seeds demo data.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..notifications.center import NotificationCenter
from ..records.repository import Repositories, memory_repositories, seed_demo, sqlite_repositories

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def build_repositories(settings) -> Repositories:
    backend = str(getattr(settings, "store_backend", "memory"))
    if backend == "sqlite":
        logger.info("Using SQLite record store at %s", settings.db_path)
        return sqlite_repositories(settings.db_path)
    logger.info("Using in-memory record store (data is lost on exit)")
    return memory_repositories()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(
        settings=settings,
        repos=build_repositories(settings),
        notifications=NotificationCenter(timeout_seconds=settings.notify_timeout_seconds),
    )

    if settings.seed_demo and not state.repos.tasks.list():
        seed_demo(state.repos, state.today())

    return state
