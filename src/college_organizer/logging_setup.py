# src/college_organizer/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path

LOG_FILE_NAME = "organizer.log"

# Minimum console level per logger-name prefix; the longest matching prefix wins.
CONSOLE_THRESHOLDS: dict[str, int] = {
    "college_organizer": logging.DEBUG,
    # One line per record write; useful in the file, noise at the prompt.
    "college_organizer.records": logging.INFO,
    # The monitor wakes up every second.
    "college_organizer.notifications.monitor": logging.WARNING,
    "py.warnings": logging.ERROR,
}
THIRD_PARTY_THRESHOLD = logging.ERROR


def resolve_level(name: str | int | None, default: int = logging.INFO) -> int:
    """Map a level name ("debug", "INFO") or number to a logging level."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable while the file gets everything.

    Records are matched against `thresholds` by logger-name prefix (dotted
    boundaries only); anything unmatched is third-party and needs ERROR+.
    """

    def __init__(self, thresholds: Mapping[str, int], fallback: int = THIRD_PARTY_THRESHOLD) -> None:
        super().__init__()
        # Longest prefix first.
        self._rules = sorted(thresholds.items(), key=lambda kv: len(kv[0]), reverse=True)
        self._fallback = fallback

    def threshold_for(self, name: str) -> int:
        for prefix, level in self._rules:
            if name == prefix or name.startswith(prefix + "."):
                return level
        return self._fallback

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold_for(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/organizer",
    console_level: str | int = logging.INFO,
    file_level: str | int = logging.DEBUG,
    thresholds: Mapping[str, int] | None = None,
) -> Path:
    """
    Configure the root logger with a filtered stderr handler and a full log file.

    Call this ONCE, very early (before first logger.info).
    Returns the path of the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(resolve_level(console_level))
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter(CONSOLE_THRESHOLDS if thresholds is None else thresholds))
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(resolve_level(file_level, logging.DEBUG))
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
