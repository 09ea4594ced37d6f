# src/college_organizer/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the notification monitor in a background thread (optional),
- the console REPL in the main thread.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotificationSink, run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..notifications.monitor import run_notification_monitor

logger = logging.getLogger(__name__)


class NotificationMonitorRunner(threading.Thread):
    """Runs run_notification_monitor on its own event loop until stop()."""

    def __init__(self, state: AppState) -> None:
        super().__init__(name="notification-monitor", daemon=True)
        self._state = state
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task[None] | None = None
        self._ready = threading.Event()

    def run(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        self._task = self._loop.create_task(
            run_notification_monitor(
                self._state.repos.tasks,
                self._state.notifications,
                ConsoleNotificationSink(),
                interval_seconds=self._state.settings.notify_poll_seconds,
                today=self._state.today,
                lock=self._state.lock,
            )
        )
        self._ready.set()
        try:
            self._loop.run_until_complete(self._task)
        except asyncio.CancelledError:
            pass
        finally:
            self._loop.close()
            logger.info("Notification monitor stopped.")

    def stop(self) -> None:
        self._ready.wait(timeout=5.0)
        if self._loop is not None and self._task is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._task.cancel)


def main() -> None:
    settings = get_settings()

    log_file = setup_logging(log_dir=settings.data_dir, console_level=settings.log_level)

    logger.info("Starting %s... (log file: %s)", settings.app_name, log_file)

    state = create_initial_state(settings=settings)

    monitor: NotificationMonitorRunner | None = None
    if settings.notifications_enabled:
        monitor = NotificationMonitorRunner(state)
        monitor.start()

    try:
        run_console_loop(state)
    finally:
        if monitor is not None:
            monitor.stop()
            monitor.join(timeout=10.0)
        state.repos.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
