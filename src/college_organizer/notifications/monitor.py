# src/college_organizer/notifications/monitor.py

"""
Notification monitor.

A small polling loop that:
- reads the task list from the injected repo,
- lets the NotificationCenter apply its triggers when the task collection
  (or the current day) changed since the last evaluation,
- times out notifications past their display window,
- forwards show/hide events to the injected sink.

Presentation (console line, toast, ...) belongs to the sink, not the monitor.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from ..core.ports import NotificationSink, RecordRepo
from ..records.models import Task
from ..scheduling.dates import today_iso
from .center import NotificationCenter

logger = logging.getLogger(__name__)


def task_fingerprint(tasks: Sequence[Task], today: str) -> tuple[Any, ...]:
    """Everything the triggers read; equal fingerprints give equal trigger results."""
    return today, tuple(
        (t.id, t.date, t.completed, t.priority.value) for t in sorted(tasks, key=lambda t: t.id)
    )


async def run_notification_monitor(
        task_repo: RecordRepo[Task],
        center: NotificationCenter,
        sink: NotificationSink,
        *,
        interval_seconds: float = 1.0,
        today: Callable[[], str] = today_iso,
        lock: contextlib.AbstractContextManager[Any] | None = None,
) -> None:
    """
    Every interval_seconds:
    - expire timed-out notifications (sink.hide)
    - fetch tasks; on failure skip this round (no notifications from stale data)
    - if the tasks changed since the last evaluation, evaluate triggers
      (sink.show for each newly active notification)

    An unchanged task list is never re-evaluated, so an expired or dismissed
    notification stays gone until a task changes.

    `lock` (the one console commands hold) guards the read + evaluate step.
    To stop the monitor, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    guard = lock if lock is not None else contextlib.nullcontext()
    last_seen: tuple[Any, ...] | None = None

    while True:
        now_ts = time.time()

        for n in center.expire(now_ts):
            try:
                await sink.hide(n)
            except Exception:
                logger.exception("sink.hide failed notification=%s", n.id)

        emitted = []
        with guard:
            try:
                tasks = task_repo.list()
            except Exception:
                logger.exception("task list failed; skipping notification round")
                tasks = None

            if tasks is not None:
                day = today()
                seen = task_fingerprint(tasks, day)
                if seen != last_seen:
                    last_seen = seen
                    emitted = center.evaluate(tasks, day, now_ts)

        for n in emitted:
            try:
                await sink.show(n)
            except Exception:
                logger.exception("sink.show failed notification=%s", n.id)

        await asyncio.sleep(sleep_s)
