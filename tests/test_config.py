# tests/test_config.py

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from college_organizer.config import Settings
from college_organizer.logging_setup import CONSOLE_THRESHOLDS, _ConsoleNoiseFilter, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("ORGANIZER_"):
            monkeypatch.delenv(key)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.store_backend == "memory"
    assert s.seed_demo is True
    assert s.expand_recurring is False
    assert s.upcoming_limit == 10
    assert s.notify_timeout_seconds == 5.0
    assert (s.pomodoro_minutes, s.short_break_minutes, s.long_break_minutes) == (25, 5, 15)
    assert s.db_path == s.data_dir / "organizer.sqlite3"


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ORGANIZER_STORE", "SQLite")
    monkeypatch.setenv("ORGANIZER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ORGANIZER_EXPAND_RECURRING", "yes")
    monkeypatch.setenv("ORGANIZER_LOG_LEVEL", "debug")
    monkeypatch.setenv("ORGANIZER_POMODORO_MINUTES", "50")

    s = Settings.from_env()
    assert s.store_backend == "sqlite"
    assert s.seed_demo is False
    assert s.db_path == tmp_path / "organizer.sqlite3"
    assert s.expand_recurring is True
    assert s.log_level == "DEBUG"
    assert s.pomodoro_minutes == 50


def test_bad_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("ORGANIZER_STORE", "postgres")
    monkeypatch.setenv("ORGANIZER_UPCOMING_LIMIT", "0")
    monkeypatch.setenv("ORGANIZER_NOTIFY_POLL_SECONDS", "soon")
    monkeypatch.setenv("ORGANIZER_NOTIFICATIONS_ENABLED", "maybe")

    with caplog.at_level(logging.WARNING, logger="college_organizer.config"):
        s = Settings.from_env()

    assert s.store_backend == "memory"
    assert s.upcoming_limit == 10
    assert s.notify_poll_seconds == 1.0
    assert s.notifications_enabled is True
    assert "ORGANIZER_STORE" in caplog.text


def test_resolve_level() -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(15) == 15
    assert resolve_level("chatty") == logging.INFO
    assert resolve_level(None, logging.ERROR) == logging.ERROR


def test_console_filter_uses_longest_prefix() -> None:
    f = _ConsoleNoiseFilter(CONSOLE_THRESHOLDS)
    assert f.threshold_for("college_organizer.cli.commands") == logging.DEBUG
    assert f.threshold_for("college_organizer.records.memory_store") == logging.INFO
    assert f.threshold_for("college_organizer.notifications.monitor") == logging.WARNING
    assert f.threshold_for("college_organizer.notifications.center") == logging.DEBUG
    assert f.threshold_for("college_organizer_plugin") == logging.ERROR
    assert f.threshold_for("urllib3") == logging.ERROR


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs", console_level="warning")
        logging.getLogger("college_organizer.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert log_file == tmp_path / "logs" / "organizer.log"
        assert "hello file" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
        logging.captureWarnings(False)
