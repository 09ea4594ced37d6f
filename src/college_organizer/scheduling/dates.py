# src/college_organizer/scheduling/dates.py

"""
Calendar date primitives.

Dates travel as `YYYY-MM-DD` strings, which sort chronologically, so most
callers compare them as plain strings. Months are 0-indexed (January = 0)
and weekdays count from Sunday = 0, the convention the month grid uses.
Everything is in the single local timezone.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from ..records.models import WEEKDAY_TOKENS


def _normalize_month(year: int, month: int) -> tuple[int, int]:
    """Fold an out-of-range 0-indexed month into (year, 1-indexed month)."""
    y, m = divmod(month, 12)
    return year + y, m + 1


def add_days(iso_date: str, n: int) -> str:
    return (date.fromisoformat(iso_date) + timedelta(days=n)).isoformat()


def days_in_month(year: int, month: int) -> int:
    y, m = _normalize_month(year, month)
    return calendar.monthrange(y, m)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    y, m = _normalize_month(year, month)
    return (date(y, m, 1).weekday() + 1) % 7


def iso_date(year: int, month: int, day: int) -> str:
    y, m = _normalize_month(year, month)
    return f"{y:04d}-{m:02d}-{day:02d}"


def today_iso() -> str:
    return date.today().isoformat()


def weekday_token(iso: str) -> str:
    return WEEKDAY_TOKENS[(date.fromisoformat(iso).weekday() + 1) % 7]


def days_between(start: str, end: str) -> int:
    return (date.fromisoformat(end) - date.fromisoformat(start)).days


def parse_hhmm(raw: str) -> tuple[int, int]:
    hours, minutes = raw.split(":")
    return int(hours), int(minutes)


def month_name(month: int) -> str:
    return calendar.month_name[month % 12 + 1]
