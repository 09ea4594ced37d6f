# src/college_organizer/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import cast

from ..core.errors import NotFoundError, OrganizerError, StoreError, ValidationError
from ..core.state import AppState
from ..exchange.transfer import export_csv, export_json, export_txt, import_payload, load_payload
from ..notifications.center import Notification
from ..records.models import Priority, Task, Track
from ..scheduling.dates import month_name
from ..scheduling.engine import is_timed
from ..views import (
    month_grid,
    reorder,
    search_tasks,
    statistics,
    time_blocks,
    timeline,
    today_bucket,
    track_rollups,
    upcoming_bucket,
)
from ..views.calendar import DAY_CANVAS_HEIGHT
from ..views.stats import find_track

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /today, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        OrganizerError is reported as a reply; anything else propagates.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except StoreError as e:
            logger.error("Store failure in /%s: %s", name, e)
            return f"Storage error: {e}. Nothing was changed."
        except OrganizerError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting helpers ----


def _short(record_id: str) -> str:
    return record_id[:8]


def format_task(task: Task, tracks: list[Track]) -> str:
    mark = "x" if task.completed else " "
    when = task.date if not task.end_date else f"{task.date}..{task.end_date}"
    line = f"[{mark}] {_short(task.id)}  {when}  {task.priority.value.upper():<6} {task.title}"
    if is_timed(task):
        line += f" ({task.start_time or '?'}-{task.end_time or '?'})"
    track = find_track(tracks, task.track_id)
    if track:
        line += f" {{{track.name}}}"
    return line


def format_notification(n: Notification) -> str:
    return f"[{n.kind.value.upper()}] {n.title}: {n.description} ({n.id})"


def _task_list(title: str, tasks: list[Task], tracks: list[Track], empty: str) -> str:
    if not tasks:
        return f"{title}\n  {empty}"
    return "\n".join([title] + [f"  {format_task(t, tracks)}" for t in tasks])


def _resolve_task(state: AppState, prefix: str) -> Task:
    matches = [t for t in state.repos.tasks.list() if t.id.startswith(prefix)]
    if not matches:
        raise NotFoundError("task", prefix)
    if len(matches) > 1:
        raise ValidationError("task", {"id": f"prefix {prefix!r} matches {len(matches)} tasks"})
    return matches[0]


def _resolve_track(state: AppState, prefix: str) -> Track:
    matches = [t for t in state.repos.tracks.list() if t.id.startswith(prefix)]
    if len(matches) != 1:
        raise NotFoundError("track", prefix)
    return matches[0]


def _parse_date_arg(raw: str) -> str:
    try:
        return date.fromisoformat(raw).isoformat()
    except ValueError:
        raise ValidationError("command", {"date": f"expected YYYY-MM-DD, got {raw!r}"}) from None


def _after_task_write(state: AppState, emit: CommandEmitter | None) -> None:
    """Re-run notification triggers whenever the task collection changes."""
    for n in state.notifications.evaluate(state.repos.tasks.list(), state.today()):
        if emit:
            emit(format_notification(n))


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_today(state: AppState, args: list[str]) -> str:
    today = state.today()
    tasks = search_tasks(state.repos.tasks.list(), " ".join(args))
    bucket = today_bucket(tasks, today, expand_recurring=state.expand_recurring)
    return _task_list(f"Today ({today}):", bucket, state.repos.tracks.list(), "No tasks for today.")


def cmd_upcoming(state: AppState, args: list[str]) -> str:
    limit = int(getattr(state.settings, "upcoming_limit", 10))
    bucket = upcoming_bucket(state.repos.tasks.list(), state.today(), limit=limit)
    return _task_list("Upcoming:", bucket, state.repos.tracks.list(), "Nothing upcoming.")


def cmd_search(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /search <text>"
    found = search_tasks(state.repos.tasks.list(), " ".join(args))
    return _task_list(f"Search {' '.join(args)!r}:", found, state.repos.tracks.list(), "No matches.")


def cmd_week(state: AppState, args: list[str]) -> str:
    """
    /week                 -> 14 days from today
    /week 2024-03-10      -> 14 days from that date
    /week <date> <track>  -> only tasks of the track (id prefix)
    """
    start = _parse_date_arg(args[0]) if args else state.today()
    tracks = state.repos.tracks.list()
    track_id = _resolve_track(state, args[1]).id if len(args) > 1 else None

    lines = [f"Timeline from {start}:"]
    for day in timeline(state.repos.tasks.list(), start, track_id=track_id):
        label = f"{date.fromisoformat(day.date):%a} {day.date}"
        if not day.tasks:
            lines.append(f"  {label}: No tasks")
            continue
        lines.append(f"  {label}:")
        lines += [f"    {format_task(t, tracks)}" for t in day.tasks]
    return "\n".join(lines)


def cmd_month(state: AppState, args: list[str]) -> str:
    """/month [YYYY-MM] -> calendar grid (Sunday first), max 3 titles per day."""
    if args:
        try:
            year_s, month_s = args[0].split("-")
            year, month = int(year_s), int(month_s) - 1
        except ValueError:
            return "Usage: /month [YYYY-MM]"
        if not 0 <= month <= 11:
            return "Usage: /month [YYYY-MM]"
    else:
        d = date.fromisoformat(state.today())
        year, month = d.year, d.month - 1

    grid = month_grid(state.repos.tasks.list(), year, month, expand_recurring=state.expand_recurring)
    lines = [f"{month_name(grid.month)} {grid.year}", "Sun Mon Tue Wed Thu Fri Sat"]

    row: list[str] = []
    for cell in grid.cells:
        row.append("   " if cell.is_blank else f"{cell.day:>2}{'*' if cell.tasks else ' '}")
        if len(row) == 7:
            lines.append(" ".join(row))
            row = []
    if row:
        lines.append(" ".join(row))

    for cell in grid.day_cells:
        if not cell.tasks:
            continue
        shown, more = cell.preview()
        titles = ", ".join(t.title for t in shown)
        lines.append(f"  {cell.date}: {titles}" + (f" (+{more} more)" if more else ""))
    return "\n".join(lines)


def cmd_blocks(state: AppState, args: list[str]) -> str:
    day = _parse_date_arg(args[0]) if args else state.today()
    blocks = time_blocks(state.repos.tasks.list(), day)
    if not blocks:
        return f"No time-blocked tasks on {day}."
    lines = [f"Time blocks for {day} (60px/hour, {DAY_CANVAS_HEIGHT}px day):"]
    for b in sorted(blocks, key=lambda b: b.top):
        t = b.task
        lines.append(f"  {t.start_time}-{t.end_time}  top={b.top:g} height={b.height:g}  {t.title}")
    return "\n".join(lines)


def cmd_tracks(state: AppState, args: list[str]) -> str:
    rollups = track_rollups(
        state.repos.tasks.list(), state.repos.tracks.list(), state.repos.projects.list()
    )
    if not rollups:
        return "No tracks yet. Create one with /track <#rrggbb> <name>."
    lines = ["Tracks:"]
    for r in rollups:
        lines.append(
            f"  {_short(r.track.id)} {r.track.name} ({r.track.color}): "
            f"{r.task_count} tasks, {r.completed_count} completed, {r.project_count} projects"
        )
        for p in r.projects:
            lines.append(
                f"    - {p.project.name} ({p.color}): {p.task_count} tasks, {p.completed_count} completed"
            )
    return "\n".join(lines)


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = statistics(state.repos.tasks.list(), state.repos.pomodoro_sessions.list(), state.today())
    return (
        "Statistics:\n"
        f"  Completion rate: {s.completion_rate}% ({s.completed} of {s.total} tasks)\n"
        f"  Total tasks: {s.total} ({s.remaining} remaining)\n"
        f"  High priority: {s.high_priority_open}\n"
        f"  Overdue: {s.overdue}\n"
        f"  This week: {s.this_week_completed} completed of {s.this_week_total}\n"
        f"  Pomodoros: {s.pomodoro_count} ({s.pomodoro_minutes} minutes)"
    )


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/add <YYYY-MM-DD> <high|medium|low> <title...>"""
    if len(args) < 3:
        return "Usage: /add <YYYY-MM-DD> <high|medium|low> <title>"
    priority = args[1].lower()
    if priority not in {p.value for p in Priority}:
        return "Priority must be one of: high, medium, low."
    task = state.repos.tasks.create(
        {"title": " ".join(args[2:]), "date": args[0], "priority": priority}
    )
    logger.info("Task created id=%s date=%s", task.id, task.date)
    _after_task_write(state, emit)
    return f"Created {format_task(task, state.repos.tracks.list())}"


def _set_completed(state: AppState, args: list[str], emit: CommandEmitter | None, done: bool) -> str:
    if not args:
        return "Usage: /done <id> or /undo <id>"
    task = _resolve_task(state, args[0])
    updated = state.repos.tasks.update(task.id, {"completed": done})
    if updated is None:
        raise NotFoundError("task", task.id)
    _after_task_write(state, emit)
    return format_task(updated, state.repos.tracks.list())


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return _set_completed(state, args, emit, True)


def cmd_undo(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return _set_completed(state, args, emit, False)


def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /delete <id>"
    task = _resolve_task(state, args[0])
    if not state.repos.tasks.delete(task.id):
        raise NotFoundError("task", task.id)
    _after_task_write(state, emit)
    return f"Deleted task {task.title!r}."


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move <id> <position> -> reorder within today's list (1-based position)."""
    if len(args) < 2 or not args[1].isdigit():
        return "Usage: /move <id> <position>"
    task = _resolve_task(state, args[0])
    today_list = today_bucket(state.repos.tasks.list(), state.today(), expand_recurring=state.expand_recurring)
    if not any(t.id == task.id for t in today_list):
        return "Only tasks on today's list can be moved."
    writes = reorder(today_list, task.id, int(args[1]) - 1)
    for task_id, order in writes:
        state.repos.tasks.update(task_id, {"order": order})
    return f"Moved {task.title!r} ({len(writes)} tasks renumbered)."


def cmd_track(state: AppState, args: list[str]) -> str:
    """/track <#rrggbb> <name...>"""
    if len(args) < 2:
        return "Usage: /track <#rrggbb> <name>"
    track = state.repos.tracks.create({"color": args[0], "name": " ".join(args[1:])})
    return f"Created track {_short(track.id)} {track.name}."


def cmd_project(state: AppState, args: list[str]) -> str:
    """/project <track-id> <name...>"""
    if len(args) < 2:
        return "Usage: /project <track-id> <name>"
    track = _resolve_track(state, args[0])
    project = state.repos.create_project({"trackId": track.id, "name": " ".join(args[1:])})
    return f"Created project {_short(project.id)} {project.name} in {track.name}."


def cmd_subtask(state: AppState, args: list[str]) -> str:
    """
    /sub <task-id>          -> list subtasks
    /sub <task-id> <title>  -> add a subtask
    """
    if not args:
        return "Usage: /sub <task-id> [title]"
    task = _resolve_task(state, args[0])
    if len(args) > 1:
        existing = state.repos.subtasks_for_task(task.id)
        state.repos.subtasks.create(
            {"taskId": task.id, "title": " ".join(args[1:]), "order": len(existing)}
        )
    subs = state.repos.subtasks_for_task(task.id)
    if not subs:
        return f"No subtasks for {task.title!r}."
    lines = [f"Subtasks of {task.title!r}:"]
    lines += [f"  [{'x' if s.completed else ' '}] {_short(s.id)} {s.title}" for s in subs]
    return "\n".join(lines)


def cmd_pomodoro(state: AppState, args: list[str]) -> str:
    """
    /pomodoro          -> record a completed focus session (default preset)
    /pomodoro 50       -> record a 50 minute session
    /pomodoro presets  -> show focus/break lengths
    """
    s = state.settings
    minutes = int(getattr(s, "pomodoro_minutes", 25))
    if args and args[0].lower() == "presets":
        return (
            f"Pomodoro: {minutes} min, short break: {getattr(s, 'short_break_minutes', 5)} min, "
            f"long break: {getattr(s, 'long_break_minutes', 15)} min"
        )
    if args:
        if not args[0].isdigit():
            return "Usage: /pomodoro [minutes]"
        minutes = int(args[0])
    state.repos.record_pomodoro(minutes)
    return f"Pomodoro session completed! ({minutes} minutes)"


def cmd_alerts(state: AppState, args: list[str]) -> str:
    """
    /alerts            -> list active notifications
    /alerts dismiss ID -> dismiss one
    """
    if len(args) >= 2 and args[0].lower() == "dismiss":
        n = state.notifications.dismiss(args[1])
        return f"Dismissed {n.id}." if n else f"No active notification {args[1]}."
    active = state.notifications.active()
    if not active:
        return "No active notifications."
    return "\n".join(format_notification(n) for n in active)


def cmd_export(state: AppState, args: list[str]) -> str:
    """/export json|csv|txt <path>"""
    if len(args) < 2 or args[0].lower() not in ("json", "csv", "txt"):
        return "Usage: /export json|csv|txt <path>"
    fmt, path = args[0].lower(), Path(" ".join(args[1:])).expanduser()

    match fmt:
        case "json":
            text = export_json(state.repos)
        case "csv":
            text = export_csv(state.repos.tasks.list(), state.repos.tracks.list())
        case _:
            text = export_txt(state.repos.tasks.list(), state.repos.tracks.list())

    try:
        path.write_text(text, "utf-8")
    except OSError as e:
        logger.exception("Export to %s failed", path)
        return f"Export failed: {e.strerror or e}"
    logger.info("Exported %s to %s", fmt, path)
    return f"Exported {fmt.upper()} to {path}"


def cmd_import(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/import <path> -> additive JSON import (new ids, references remapped)."""
    if not args:
        return "Usage: /import <path>"
    path = Path(" ".join(args)).expanduser()
    try:
        text = path.read_text("utf-8")
    except OSError as e:
        return f"Import failed: {e.strerror or e}"

    result = import_payload(state.repos, load_payload(text))
    _after_task_write(state, emit)
    c = result.created
    reply = (
        f"Imported {c['tracks']} tracks, {c['projects']} projects, "
        f"{c['tasks']} tasks, {c['subtasks']} subtasks."
    )
    if result.failed:
        reply += f"\nSkipped {len(result.failed)}:\n" + "\n".join(f"  {f}" for f in result.failed)
    return reply


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("today", cmd_today, help_text="Today's tasks by priority: /today [filter].")
registry.register("upcoming", cmd_upcoming, help_text="Next open tasks after today.")
registry.register("search", cmd_search, help_text="Search titles and descriptions: /search <text>.")
registry.register("week", cmd_week, help_text="Two-week timeline: /week [YYYY-MM-DD] [track-id].")
registry.register("month", cmd_month, help_text="Month calendar: /month [YYYY-MM].", aliases=["c"])
registry.register("blocks", cmd_blocks, help_text="Time blocks for a day: /blocks [YYYY-MM-DD].")
registry.register("tracks", cmd_tracks, help_text="Tracks and projects with task counts.", aliases=["t"])
registry.register("stats", cmd_stats, help_text="Completion, overdue and pomodoro statistics.", aliases=["s"])
registry.register("add", cmd_add, help_text="New task: /add <YYYY-MM-DD> <priority> <title>.", aliases=["n"])
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undo", cmd_undo, help_text="Mark a task not completed: /undo <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.")
registry.register("move", cmd_move, help_text="Reorder today's list: /move <id> <position>.")
registry.register("track", cmd_track, help_text="New track: /track <#rrggbb> <name>.")
registry.register("project", cmd_project, help_text="New project: /project <track-id> <name>.")
registry.register("sub", cmd_subtask, help_text="Subtasks: /sub <task-id> [title].")
registry.register("pomodoro", cmd_pomodoro, help_text="Record a focus session: /pomodoro [minutes].", aliases=["p"])
registry.register("alerts", cmd_alerts, help_text="Notifications: /alerts | /alerts dismiss <id>.")
registry.register("export", cmd_export, help_text="Export: /export json|csv|txt <path>.", aliases=["e"])
registry.register("import", cmd_import, help_text="Import a JSON export: /import <path>.")
