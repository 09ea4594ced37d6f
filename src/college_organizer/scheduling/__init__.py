# src/college_organizer/scheduling/__init__.py

from .dates import add_days, days_in_month, first_weekday_of_month, today_iso
from .engine import (
    is_due_tomorrow,
    is_overdue,
    occurrence_dates,
    occurs_on_date,
    occurs_on_date_expanded,
    range_membership,
)

__all__ = [
    "add_days",
    "days_in_month",
    "first_weekday_of_month",
    "is_due_tomorrow",
    "is_overdue",
    "occurrence_dates",
    "occurs_on_date",
    "occurs_on_date_expanded",
    "range_membership",
    "today_iso",
]
