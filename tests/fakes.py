# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from college_organizer.core.ports import NotificationSink
from college_organizer.notifications.center import Notification


@dataclass(slots=True)
class FakeSink(NotificationSink):
    """
    Fake NotificationSink used by monitor tests.
    """

    shown: list[Notification] = field(default_factory=list)
    hidden: list[Notification] = field(default_factory=list)

    async def show(self, notification: Notification) -> None:
        self.shown.append(notification)

    async def hide(self, notification: Notification) -> None:
        self.hidden.append(notification)


class FailingTaskRepo:
    """Task repo whose reads always fail, like an unreachable backend."""

    def __init__(self) -> None:
        self.calls = 0

    def list(self):
        self.calls += 1
        raise RuntimeError("backend down")


class CountingLock:
    """Context-manager lock double that remembers whether it is held."""

    def __init__(self) -> None:
        self.entered = 0
        self.held = False

    def __enter__(self) -> "CountingLock":
        self.entered += 1
        self.held = True
        return self

    def __exit__(self, *exc) -> None:
        self.held = False


class GuardedTaskRepo:
    """Delegates reads to a real repo and records whether `lock` was held for each."""

    def __init__(self, inner, lock: CountingLock) -> None:
        self.inner = inner
        self.lock = lock
        self.held_on_read: list[bool] = []

    def list(self):
        self.held_on_read.append(self.lock.held)
        return self.inner.list()
