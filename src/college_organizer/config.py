# src/college_organizer/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Every key is ORGANIZER_<NAME> and optional. A value that does not parse
falls back to the default with a warning instead of stopping start-up.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TypeVar

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "ORGANIZER"
STORE_BACKENDS = ("memory", "sqlite")

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}

V = TypeVar("V")


def env_name(key: str) -> str:
    return f"{ENV_PREFIX}_{key}"


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _parse_backend(raw: str) -> str:
    backend = raw.lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(f"expected one of {', '.join(STORE_BACKENDS)}")
    return backend


def _at_least(minimum: float, parse: Callable[[str], V]) -> Callable[[str], V]:
    def parse_bounded(raw: str) -> V:
        value = parse(raw)
        if value < minimum:  # type: ignore[operator]
            raise ValueError(f"must be >= {minimum}")
        return value

    return parse_bounded


def _env(key: str, default: V, parse: Callable[[str], V]) -> V:
    """Read ORGANIZER_<key>; unset or blank means default."""
    raw = os.getenv(env_name(key))
    if raw is None or not raw.strip():
        return default
    try:
        return parse(raw.strip())
    except ValueError as e:
        logger.warning("Ignoring %s=%r (%s); using %r", env_name(key), raw, e, default)
        return default


def _path(raw: str) -> Path:
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    store_backend: str
    data_dir: Path
    db_path: Path
    seed_demo: bool

    # ---- Views ----
    expand_recurring: bool
    upcoming_limit: int

    # ---- Notifications ----
    notifications_enabled: bool
    notify_timeout_seconds: float
    notify_poll_seconds: float

    # ---- Pomodoro presets (minutes) ----
    pomodoro_minutes: int
    short_break_minutes: int
    long_break_minutes: int

    @staticmethod
    def from_env() -> "Settings":
        store_backend = _env("STORE", "memory", _parse_backend)
        data_dir = _env("DATA_DIR", Path(".local/organizer"), _path)

        return Settings(
            app_name=_env("APP_NAME", "College Organizer", str),
            log_level=_env("LOG_LEVEL", "INFO", str.upper),
            store_backend=store_backend,
            data_dir=data_dir,
            db_path=_env("DB_PATH", data_dir / "organizer.sqlite3", _path),
            # A fresh in-memory store is empty on every start, so demo data is on by default there.
            seed_demo=_env("SEED_DEMO", store_backend == "memory", _parse_bool),
            expand_recurring=_env("EXPAND_RECURRING", False, _parse_bool),
            upcoming_limit=_env("UPCOMING_LIMIT", 10, _at_least(1, int)),
            notifications_enabled=_env("NOTIFICATIONS_ENABLED", True, _parse_bool),
            notify_timeout_seconds=_env("NOTIFY_TIMEOUT_SECONDS", 5.0, _at_least(0.1, float)),
            notify_poll_seconds=_env("NOTIFY_POLL_SECONDS", 1.0, _at_least(0.1, float)),
            pomodoro_minutes=_env("POMODORO_MINUTES", 25, _at_least(1, int)),
            short_break_minutes=_env("SHORT_BREAK_MINUTES", 5, _at_least(1, int)),
            long_break_minutes=_env("LONG_BREAK_MINUTES", 15, _at_least(1, int)),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Local .env never overrides variables already set in the environment.
    load_dotenv(override=False)
    return Settings.from_env()
