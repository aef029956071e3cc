# tests/test_commands.py

from __future__ import annotations

from datetime import datetime

from tasklist.cli.commands import CommandRegistry, default_due, registry
from tasklist.core.state import AppState
from tasklist.tasks.task_models import Priority, ViewFilter

from .fakes import InputErrorSink, RecordingRenderer


def test_command_registry_routes_names_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/ALPHA") == "ok"
    assert called == [["x", "y"], []]
    assert "/a - a" in reg.build_help()


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_with_flags(state: AppState, renderer: RecordingRenderer) -> None:
    reply = registry.handle(state, "/add -p low -d 2024-01-01 -t 09:00 Buy milk -p")

    assert reply == ""
    (task,) = state.task_store.snapshot()
    assert task.text == "Buy milk -p"
    assert task.priority is Priority.LOW
    assert (task.date, task.time) == ("2024-01-01", "09:00")
    assert renderer.views


def test_add_uses_session_defaults(state: AppState) -> None:
    state.prefill_date = True
    state.default_priority = Priority.MEDIUM
    registry.handle(state, "/add water plants")

    (task,) = state.task_store.snapshot()
    assert task.priority is Priority.MEDIUM
    assert task.date != ""
    assert len(task.time) == 5


def test_add_no_date_clears_prefill(state: AppState) -> None:
    state.prefill_date = True
    registry.handle(state, "/add --no-date someday")
    (task,) = state.task_store.snapshot()
    assert (task.date, task.time) == ("", "")


def test_add_missing_flag_value_shows_usage(state: AppState) -> None:
    assert (registry.handle(state, "/add -p") or "").startswith("Usage")
    assert len(state.task_store) == 0


def test_add_bad_priority_signals_input_error(state: AppState, input_errors: InputErrorSink) -> None:
    registry.handle(state, "/add -p urgent now")
    assert len(state.task_store) == 0
    assert len(input_errors.errors) == 1


def test_default_due_follows_clock(state: AppState) -> None:
    now = datetime(2024, 3, 7, 8, 5)
    state.prefill_date = True
    assert default_due(state, now) == ("2024-03-07", "08:05")
    state.prefill_date = False
    assert default_due(state, now) == ("", "")


def test_toggle_and_delete_by_id(state: AppState) -> None:
    registry.handle(state, "/add a")
    (task,) = state.task_store.snapshot()

    assert registry.handle(state, f"/done {task.id}") == ""
    assert state.task_store.get(task.id).completed is True

    assert registry.handle(state, f"/rm {task.id}") == ""
    assert len(state.task_store) == 0


def test_toggle_and_delete_need_numeric_id(state: AppState) -> None:
    assert registry.handle(state, "/toggle abc") == "Usage: /toggle ID"
    assert registry.handle(state, "/delete") == "Usage: /delete ID"
    assert registry.handle(state, "/toggle 1 2") == "Usage: /toggle ID"


def test_filter_command(state: AppState) -> None:
    assert "Current filter: all" in (registry.handle(state, "/filter") or "")
    assert registry.handle(state, "/filter completed") == ""
    assert state.projector.filter is ViewFilter.COMPLETED
    assert (registry.handle(state, "/filter later") or "").startswith("Usage")
    assert state.projector.filter is ViewFilter.COMPLETED


def test_stats_and_list(state: AppState, renderer: RecordingRenderer) -> None:
    registry.handle(state, "/add a")
    registry.handle(state, "/add b")
    registry.handle(state, f"/x {state.task_store.snapshot()[0].id}")

    assert registry.handle(state, "/stats") == "2 tasks, 1 completed"
    count = len(renderer.views)
    assert registry.handle(state, "/ls") == ""
    assert len(renderer.views) == count + 1


def test_add_rejects_malformed_date(state: AppState) -> None:
    reply = registry.handle(state, "/add -d tomorrow call bob") or ""
    assert "YYYY-MM-DD" in reply
    assert "Usage" in reply
    assert len(state.task_store) == 0


def test_add_rejects_malformed_time(state: AppState) -> None:
    reply = registry.handle(state, "/add -d 2024-01-01 -t 9am call bob") or ""
    assert "HH:MM" in reply
    assert "Usage" in reply
    assert len(state.task_store) == 0
