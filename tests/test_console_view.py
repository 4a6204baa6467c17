# tests/test_console_view.py

from __future__ import annotations

from datetime import timedelta

import pytest

from nameless_todo.connectors.console_connector import TodoListView, run_console_loop
from nameless_todo.tasks.countdown import format_short
from nameless_todo.tasks.task_store import TodoStore

from .fakes import T0, FakeClock


@pytest.fixture()
def view(store: TodoStore, clock: FakeClock) -> TodoListView:
    return TodoListView(store, clock=clock)


def test_view_follows_store_snapshots(store: TodoStore, view: TodoListView) -> None:
    assert view.tasks == ()
    store.add("pushed")
    assert [t.title for t in view.tasks] == ["pushed"]

    view.close()
    store.add("not seen")
    assert len(view.tasks) == 1


def test_tick_only_changes_display_time(store: TodoStore, view: TodoListView) -> None:
    task = store.add("due soon", T0 + timedelta(hours=25))
    assert task is not None
    assert view.is_urgent(task) is False
    assert view.time_remaining(task) == "1 jour restant"

    clocks: list[str] = []
    view.on_clock_change = clocks.append
    view.tick(T0 + timedelta(hours=2))

    assert view.is_urgent(task) is True
    assert view.time_remaining(task) == "23h 0min restantes"
    assert clocks == ["lundi 19 octobre 2026, 14:00:00"]
    # the store is untouched
    assert store.snapshot() == (task,)

    view.tick(T0 + timedelta(hours=26))
    assert view.time_remaining(task) == "En retard !"
    assert view.is_urgent(task) is False


def test_render_lists_tasks_with_dates(store: TodoStore, view: TodoListView) -> None:
    soon = store.add("Rapport", T0 + timedelta(hours=2, minutes=30))
    later = store.add("Courses")
    assert soon is not None and later is not None
    store.toggle(later.id)

    out = view.render()
    lines = out.splitlines()

    assert lines[0] == "Nameless TODO APP"
    assert lines[1] == "lundi 19 octobre 2026, 12:00:00"
    assert lines[3].startswith("! [ ]") and "Rapport" in lines[3]
    assert f"Créé le: {format_short(soon.created_at)}" in lines[4]
    assert f"Deadline: {format_short(soon.deadline)} (2h 30min restantes)" in lines[4]
    assert lines[5].startswith("  [x]") and "~Courses~" in lines[5]
    assert "Deadline" not in lines[6]


def test_render_empty_list(view: TodoListView) -> None:
    assert "(aucune tâche)" in view.render()


def test_intents_are_forwarded(store: TodoStore, view: TodoListView) -> None:
    assert view.add("   ") == "Title required."
    assert view.add("x", "not a date").startswith("Invalid deadline")
    assert len(store) == 0

    assert view.add("x", "2099-01-01 10:00") == "Added #1."
    assert view.toggle(1) == "Task 1 done."
    assert view.delete(1) == "Task 1 removed."
    assert view.delete(1) == "Task id 1 not found."


def test_console_loop_handles_lines_until_exit(state, monkeypatch, capsys) -> None:
    lines = iter(["Acheter du pain", "", "/done 1", "/unknown", "/exit"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))

    run_console_loop(state)

    assert [t.title for t in state.store.snapshot()] == ["Acheter du pain"]
    assert state.store.snapshot()[0].completed is True
    out = capsys.readouterr().out
    assert "Unknown command: /unknown" in out
    assert state.view.on_clock_change is None


def test_console_loop_exits_on_eof(state, monkeypatch) -> None:
    def raise_eof(_prompt: str = "") -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    run_console_loop(state)
    assert len(state.store) == 0
