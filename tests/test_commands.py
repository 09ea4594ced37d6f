# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from college_organizer.cli.bootstrap import create_initial_state
from college_organizer.cli.commands import CommandRegistry, registry
from college_organizer.core.errors import StoreError


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2 " + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a", aliases=["alpha"])
    reg.register("b", h3, "b")

    notes: list[str] = []
    assert reg.handle(state, "/a x y") == "h2 x,y"
    assert reg.handle(state, "/ALPHA") == "h2 "
    assert reg.handle(state, "/b", emit=notes.append) == "h3"
    assert called == {"h2": 2, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_store_errors_are_reported_not_raised(state) -> None:
    reg = CommandRegistry()

    def broken(state, args):
        raise StoreError("disk full")

    reg.register("broken", broken, "broken")
    assert reg.handle(state, "/broken") == "Storage error: disk full. Nothing was changed."


def test_help_lists_registered_commands(state) -> None:
    reply = registry.handle(state, "/help") or ""
    for name in ("/today", "/upcoming", "/month", "/stats", "/export", "/import"):
        assert name in reply


def test_add_then_today(state) -> None:
    reply = registry.handle(state, "/add 2024-03-11 high Write essay") or ""
    assert reply.startswith("Created [ ]")
    assert "HIGH" in reply

    registry.handle(state, "/add 2024-03-11 low Laundry")
    registry.handle(state, "/add 2024-03-15 medium Later")

    today = registry.handle(state, "/today") or ""
    assert today.splitlines()[0] == "Today (2024-03-11):"
    assert today.index("Write essay") < today.index("Laundry")
    assert "Later" not in today

    upcoming = registry.handle(state, "/upcoming") or ""
    assert "Later" in upcoming


def test_add_reports_validation_errors(state) -> None:
    assert registry.handle(state, "/add 2024-13-01 high Broken") == "Invalid task: date: expected YYYY-MM-DD"
    assert registry.handle(state, "/add 2024-03-11 urgent Broken") == "Priority must be one of: high, medium, low."
    assert state.repos.tasks.list() == []


def test_adding_overdue_task_emits_notification(state) -> None:
    notes: list[str] = []
    registry.handle(state, "/add 2024-03-01 medium Forgotten", emit=notes.append)
    assert len(notes) == 1
    assert notes[0].startswith("[WARNING] Overdue Tasks: You have 1 overdue task")

    # Category stays active, so a second overdue task does not re-notify.
    registry.handle(state, "/add 2024-03-02 medium Also forgotten", emit=notes.append)
    assert len(notes) == 1

    alerts = registry.handle(state, "/alerts") or ""
    assert "Overdue Tasks" in alerts


def test_done_and_delete_by_id_prefix(state) -> None:
    task = state.repos.tasks.create({"title": "Quiz", "date": "2024-03-11"})

    assert (registry.handle(state, f"/done {task.id[:8]}") or "").startswith("[x]")
    stored = state.repos.tasks.get(task.id)
    assert stored is not None and stored.completed

    assert (registry.handle(state, f"/undo {task.id[:8]}") or "").startswith("[ ]")
    assert registry.handle(state, f"/delete {task.id}") == "Deleted task 'Quiz'."
    assert registry.handle(state, "/done zzzz") == "Task not found: zzzz"


def test_move_reorders_todays_list(state) -> None:
    a = state.repos.tasks.create({"title": "A", "date": "2024-03-11"})
    b = state.repos.tasks.create({"title": "B", "date": "2024-03-11"})

    reply = registry.handle(state, f"/move {b.id} 1") or ""
    assert reply.startswith("Moved 'B'")

    orders = {t.id: t.order for t in state.repos.tasks.list()}
    assert orders[b.id] == 0
    assert orders[a.id] == 1


def test_tracks_projects_and_stats(state) -> None:
    assert "Created track" in (registry.handle(state, "/track #8b5cf6 Computer Science") or "")
    (track,) = state.repos.tracks.list()
    assert "Created project" in (registry.handle(state, f"/project {track.id[:8]} Compilers") or "")

    state.repos.tasks.create({"title": "Parser", "date": "2024-03-11", "trackId": track.id, "completed": True})
    state.repos.tasks.create({"title": "Lexer", "date": "2024-03-12", "trackId": track.id})

    tracks = registry.handle(state, "/tracks") or ""
    assert "Computer Science (#8b5cf6): 2 tasks, 1 completed, 1 projects" in tracks
    assert "- Compilers (#8b5cf6): 0 tasks, 0 completed" in tracks

    stats = registry.handle(state, "/stats") or ""
    assert "Completion rate: 50% (1 of 2 tasks)" in stats
    assert "Pomodoros: 0 (0 minutes)" in stats

    assert registry.handle(state, "/pomodoro") == "Pomodoro session completed! (25 minutes)"
    assert "Pomodoros: 1 (25 minutes)" in (registry.handle(state, "/s") or "")


def test_month_and_blocks(state) -> None:
    state.repos.tasks.create(
        {"title": "Lecture", "date": "2024-02-29", "startTime": "14:00", "endTime": "16:00"}
    )
    month = registry.handle(state, "/month 2024-02") or ""
    assert month.splitlines()[0] == "February 2024"
    assert "  2024-02-29: Lecture" in month
    assert registry.handle(state, "/month 2024-13") == "Usage: /month [YYYY-MM]"

    blocks = registry.handle(state, "/blocks 2024-02-29") or ""
    assert "top=840 height=120" in blocks
    assert registry.handle(state, "/blocks") == "No time-blocked tasks on 2024-03-11."


def test_export_then_import_round_trip(state, tmp_path: Path) -> None:
    state.repos.tasks.create({"title": "Carry over", "date": "2024-03-20", "priority": "high"})
    path = tmp_path / "export.json"

    assert registry.handle(state, f"/export json {path}") == f"Exported JSON to {path}"
    assert path.exists()

    reply = registry.handle(state, f"/import {path}") or ""
    assert reply == "Imported 0 tracks, 0 projects, 1 tasks, 0 subtasks."
    assert [t.title for t in state.repos.tasks.list()] == ["Carry over", "Carry over"]

    assert (registry.handle(state, f"/import {tmp_path / 'missing.json'}") or "").startswith("Import failed")


def test_bootstrap_seeds_demo_data_once(settings) -> None:
    settings.seed_demo = True
    settings.store_backend = "sqlite"

    state = create_initial_state(settings=settings)
    assert len(state.repos.tasks.list()) == 3

    again = create_initial_state(settings=settings)
    assert len(again.repos.tasks.list()) == 3
