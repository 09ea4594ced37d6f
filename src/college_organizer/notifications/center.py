# src/college_organizer/notifications/center.py

from __future__ import annotations

import itertools
import logging
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from ..records.models import Task
from ..views.stats import high_priority_due_tomorrow, overdue_tasks

logger = logging.getLogger(__name__)

DISPLAY_TIMEOUT_SECONDS = 5.0


class NotificationKind(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class NotificationCategory(StrEnum):
    OVERDUE = "overdue"
    UPCOMING = "upcoming"


class CategoryState(StrEnum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True, slots=True)
class Notification:
    id: str
    category: NotificationCategory
    kind: NotificationKind
    title: str
    description: str
    shown_at: float


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n > 1 else ''}"


class NotificationCenter:
    """
    One-shot notifications, one small state machine per category.

    idle -> active   when the category's trigger holds during evaluate()
    active -> idle   on timeout (expire) or explicit dismiss
    An active category is never re-triggered.
    """

    def __init__(self, *, timeout_seconds: float = DISPLAY_TIMEOUT_SECONDS) -> None:
        self._timeout = float(timeout_seconds)
        self._states = {c: CategoryState.IDLE for c in NotificationCategory}
        self._active: dict[NotificationCategory, Notification] = {}
        self._seq = itertools.count(1)
        self._lock = threading.Lock()

    def state(self, category: NotificationCategory) -> CategoryState:
        with self._lock:
            return self._states[category]

    def active(self) -> list[Notification]:
        with self._lock:
            return sorted(self._active.values(), key=lambda n: n.shown_at)

    def _build(self, category: NotificationCategory, count: int, now: float) -> Notification:
        match category:
            case NotificationCategory.OVERDUE:
                kind = NotificationKind.WARNING
                title = "Overdue Tasks"
                description = f"You have {_plural(count, 'overdue task')}"
            case NotificationCategory.UPCOMING:
                kind = NotificationKind.INFO
                title = "High Priority Tomorrow"
                description = f"{_plural(count, 'high-priority task')} due tomorrow"
        return Notification(
            id=f"{category.value}-{next(self._seq)}",
            category=category,
            kind=kind,
            title=title,
            description=description,
            shown_at=now,
        )

    def evaluate(
        self, tasks: Sequence[Task], today: str, now: float | None = None
    ) -> list[Notification]:
        """Apply both triggers; returns the notifications that became active."""
        if now is None:
            now = time.time()

        counts = {
            NotificationCategory.OVERDUE: len(overdue_tasks(tasks, today)),
            NotificationCategory.UPCOMING: len(high_priority_due_tomorrow(tasks, today)),
        }

        emitted: list[Notification] = []
        with self._lock:
            for category, count in counts.items():
                if count <= 0 or self._states[category] is CategoryState.ACTIVE:
                    continue
                n = self._build(category, count, now)
                self._states[category] = CategoryState.ACTIVE
                self._active[category] = n
                emitted.append(n)

        for n in emitted:
            logger.info("Notification %s: %s", n.id, n.description)
        return emitted

    def dismiss(self, notification_id: str) -> Notification | None:
        with self._lock:
            for category, n in list(self._active.items()):
                if n.id == notification_id:
                    del self._active[category]
                    self._states[category] = CategoryState.IDLE
                    logger.debug("Notification %s dismissed", notification_id)
                    return n
        return None

    def expire(self, now: float | None = None) -> list[Notification]:
        """Drop notifications shown longer than the display timeout."""
        if now is None:
            now = time.time()

        expired: list[Notification] = []
        with self._lock:
            for category, n in list(self._active.items()):
                if now - n.shown_at >= self._timeout:
                    del self._active[category]
                    self._states[category] = CategoryState.IDLE
                    expired.append(n)

        for n in expired:
            logger.debug("Notification %s timed out", n.id)
        return expired
