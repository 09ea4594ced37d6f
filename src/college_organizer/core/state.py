# src/college_organizer/core/state.py

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..notifications.center import NotificationCenter
from ..records.repository import Repositories
from ..scheduling.dates import today_iso


@dataclass
class AppState:
    # Settings object (config.Settings or a test double with the same attributes).
    settings: Any

    repos: Repositories
    notifications: NotificationCenter

    # Injectable clock so views can be rendered for any "today".
    today: Callable[[], str] = today_iso

    # Held by console commands and by the notification monitor around its read + evaluate step.
    lock: threading.RLock = field(default_factory=threading.RLock)

    @property
    def expand_recurring(self) -> bool:
        return bool(getattr(self.settings, "expand_recurring", False))
