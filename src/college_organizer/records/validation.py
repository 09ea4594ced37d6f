# src/college_organizer/records/validation.py

"""
Payload validation for record writes.

Stores call these on the full (merged) wire-format dict before building a
record, so the scheduling core can rely on well-formed dates and times.
Validation only checks; the dict is returned as given and keys the models
do not declare are ignored here (the record's `from_dict` drops them).
`id` and timestamps are owned by the store.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Any, Literal

import pydantic
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..core.errors import ValidationError
from .models import Priority, Recurrence, TaskType

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"

# Human-readable hints for pattern mismatches, keyed by pattern.
_FORMAT_HINTS = {
    ISO_DATE_PATTERN: "expected YYYY-MM-DD",
    HHMM_PATTERN: "expected HH:MM",
    HEX_COLOR_PATTERN: "expected #rrggbb",
}


def _real_calendar_date(value: str) -> str:
    try:
        dt.date.fromisoformat(value)
    except ValueError:
        raise ValueError("expected YYYY-MM-DD") from None
    return value


IsoDate = Annotated[str, Field(pattern=ISO_DATE_PATTERN), AfterValidator(_real_calendar_date)]
HHMM = Annotated[str, Field(pattern=HHMM_PATTERN)]
HexColor = Annotated[str, Field(pattern=HEX_COLOR_PATTERN)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Weekday = Literal["sun", "mon", "tue", "wed", "thu", "fri", "sat"]
StrictOrder = Annotated[int, Field(strict=True)]


class _WirePayload(BaseModel):
    """Wire payloads use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class TaskPayload(_WirePayload):
    title: NonEmptyStr
    date: IsoDate
    type: TaskType | None = None
    description: str | None = None
    end_date: IsoDate | None = None
    start_time: HHMM | None = None
    end_time: HHMM | None = None
    completed: bool = Field(default=False, strict=True)
    priority: Priority | None = None
    track_id: str | None = None
    project_id: str | None = None
    recurring: Recurrence | None = None
    recurring_days: list[Weekday] | None = None
    recurring_end_date: IsoDate | None = None
    order: StrictOrder = 0

    @field_validator("end_date", "recurring_end_date")
    @classmethod
    def _not_before_anchor(cls, value: str | None, info: ValidationInfo) -> str | None:
        anchor = info.data.get("date")
        if value is not None and anchor is not None and value < anchor:
            raise ValueError("must not be before date")
        return value


class TrackPayload(_WirePayload):
    name: NonEmptyStr
    color: HexColor


class ProjectPayload(_WirePayload):
    name: NonEmptyStr
    track_id: NonEmptyStr
    description: str | None = None
    color: HexColor | None = None


class SubtaskPayload(_WirePayload):
    task_id: NonEmptyStr
    title: NonEmptyStr
    completed: bool = Field(default=False, strict=True)
    order: StrictOrder = 0


class PomodoroSessionPayload(_WirePayload):
    duration: int = Field(strict=True, gt=0)
    task_id: str | None = None


def _message(err: Any) -> str:
    ctx = err.get("ctx") or {}
    match err["type"]:
        case "string_pattern_mismatch":
            return _FORMAT_HINTS.get(ctx.get("pattern"), err["msg"])
        case "value_error":
            return str(ctx.get("error") or err["msg"])
        case "missing":
            return "required"
        case _:
            return err["msg"]


def _check(payload: type[BaseModel], entity: str, data: dict[str, Any]) -> dict[str, Any]:
    try:
        payload.model_validate(data)
    except pydantic.ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "payload"
            errors.setdefault(field, _message(err))
        raise ValidationError(entity, errors) from None
    return data


def validate_task(data: dict[str, Any]) -> dict[str, Any]:
    return _check(TaskPayload, "task", data)


def validate_track(data: dict[str, Any]) -> dict[str, Any]:
    return _check(TrackPayload, "track", data)


def validate_project(data: dict[str, Any]) -> dict[str, Any]:
    return _check(ProjectPayload, "project", data)


def validate_subtask(data: dict[str, Any]) -> dict[str, Any]:
    return _check(SubtaskPayload, "subtask", data)


def validate_pomodoro_session(data: dict[str, Any]) -> dict[str, Any]:
    return _check(PomodoroSessionPayload, "pomodoro session", data)
