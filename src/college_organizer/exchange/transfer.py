# src/college_organizer/exchange/transfer.py

"""
Data export/import.

JSON is the round-trippable format:
    {tasks, tracks, projects, subtasks, exportedAt, version: "1.0"}
CSV and plain text are one-way, human-oriented exports.

Import is additive: every record goes through the normal create path, so
ids are minted fresh. Foreign keys (project -> track, task -> track/project,
subtask -> task) are remapped to the new ids; references to ids that are not
part of the payload are kept unchanged.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..core.errors import OrganizerError, ValidationError
from ..records.models import Task, Track, utc_now
from ..records.repository import Repositories
from ..views.stats import track_name

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
CSV_HEADERS = ["Title", "Type", "Date", "Priority", "Track", "Completed", "Description"]


def format_date(iso: str) -> str:
    d = date.fromisoformat(iso)
    return f"{d:%b} {d.day}, {d.year}"


def export_payload(repos: Repositories) -> dict[str, Any]:
    return {
        "tasks": [t.to_dict() for t in repos.tasks.list()],
        "tracks": [t.to_dict() for t in repos.tracks.list()],
        "projects": [p.to_dict() for p in repos.projects.list()],
        "subtasks": [s.to_dict() for s in repos.subtasks.list()],
        "exportedAt": utc_now().isoformat().replace("+00:00", "Z"),
        "version": EXPORT_VERSION,
    }


def export_json(repos: Repositories) -> str:
    return json.dumps(export_payload(repos), ensure_ascii=False, indent=2)


def export_csv(tasks: list[Task], tracks: list[Track]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for t in tasks:
        writer.writerow(
            [
                t.title,
                t.type.label,
                format_date(t.date),
                t.priority.value,
                track_name(tracks, t.track_id),
                "Yes" if t.completed else "No",
                t.description or "",
            ]
        )
    return buf.getvalue()


def export_txt(tasks: list[Task], tracks: list[Track]) -> str:
    lines = ["COLLEGE ORGANIZER - TASKS EXPORT", ""]
    lines += [f"Exported: {utc_now().astimezone():%Y-%m-%d %H:%M:%S}", ""]
    lines += ["=" * 60, ""]

    for i, t in enumerate(tasks, start=1):
        lines.append(f"{i}. {t.title}")
        lines.append(f"   Type: {t.type.label}")
        lines.append(f"   Date: {format_date(t.date)}")
        lines.append(f"   Priority: {t.priority.value.upper()}")
        lines.append(f"   Track: {track_name(tracks, t.track_id)}")
        lines.append(f"   Status: {'Completed' if t.completed else 'Incomplete'}")
        if t.description:
            lines.append(f"   Description: {t.description}")
        lines.append("")

    return "\n".join(lines)


def load_payload(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError("import", {"payload": f"not valid JSON ({e.msg})"}) from e
    if not isinstance(data, dict):
        raise ValidationError("import", {"payload": "expected a JSON object"})
    for key in ("tasks", "tracks", "projects", "subtasks"):
        if key in data and not isinstance(data[key], list):
            raise ValidationError("import", {key: "expected a list"})
    return data


@dataclass(slots=True)
class ImportResult:
    created: dict[str, int] = field(
        default_factory=lambda: {"tracks": 0, "projects": 0, "tasks": 0, "subtasks": 0}
    )
    failed: list[str] = field(default_factory=list)
    id_map: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.created.values())


def _strip(raw: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in raw.items() if k not in ("id", "createdAt")}


def import_payload(repos: Repositories, data: dict[str, Any]) -> ImportResult:
    """
    Create every record from `data`, parents first.

    A record that fails validation is reported in `failed` and skipped;
    records created before it stay committed.
    """
    result = ImportResult()
    id_map = result.id_map

    def remap(value: Any) -> Any:
        return id_map.get(value, value) if isinstance(value, str) else value

    def create(kind: str, raw: Any, fields: dict[str, Any], creator) -> None:
        label = f"{kind[:-1]} {raw.get('name') or raw.get('title') or '?'}" if isinstance(raw, dict) else kind
        try:
            record = creator(fields)
        except OrganizerError as e:
            logger.warning("Import skipped %s: %s", label, e)
            result.failed.append(f"{label}: {e}")
            return
        if isinstance(raw, dict) and isinstance(raw.get("id"), str):
            id_map[raw["id"]] = record.id
        result.created[kind] += 1

    for raw in data.get("tracks") or []:
        if isinstance(raw, dict):
            create("tracks", raw, {"name": raw.get("name"), "color": raw.get("color")}, repos.tracks.create)

    for raw in data.get("projects") or []:
        if isinstance(raw, dict):
            fields = {
                "name": raw.get("name"),
                "description": raw.get("description"),
                "trackId": remap(raw.get("trackId")),
                "color": raw.get("color"),
            }
            create("projects", raw, fields, repos.create_project)

    for raw in data.get("tasks") or []:
        if isinstance(raw, dict):
            fields = _strip(raw)
            fields["trackId"] = remap(fields.get("trackId"))
            fields["projectId"] = remap(fields.get("projectId"))
            create("tasks", raw, fields, repos.tasks.create)

    for raw in data.get("subtasks") or []:
        if isinstance(raw, dict):
            fields = _strip(raw)
            fields["taskId"] = remap(fields.get("taskId"))
            create("subtasks", raw, fields, repos.subtasks.create)

    logger.info(
        "Import finished created=%s failed=%d", result.created, len(result.failed)
    )
    return result
