# tests/test_commands.py

from __future__ import annotations

import pytest

from nameless_todo.cli.bootstrap import create_initial_state
from nameless_todo.cli.commands import CommandRegistry, registry, split_title_deadline


def test_command_registry_routes_names_and_aliases(state) -> None:
    reg = CommandRegistry()
    calls: list[list[str]] = []

    def handler(state, args):
        calls.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["bee"])

    assert reg.handle(state, "/a x") == "ok"
    assert reg.handle(state, "/BEE y z") == "ok"
    assert calls == [["x"], ["y", "z"]]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_toggle_rm_flow(state) -> None:
    assert registry.handle(state, "/add Buy milk") == "Added #1."
    assert registry.handle(state, "/add Rapport @ 2099-01-01 09:00") == "Added #2."

    titles = [t.title for t in state.store.snapshot()]
    assert titles == ["Rapport", "Buy milk"]
    assert state.store.get(2).deadline is not None

    assert registry.handle(state, "/done 1") == "Task 1 done."
    assert state.store.get(1).completed is True
    assert registry.handle(state, "/toggle #1") == "Task 1 reopened."

    assert registry.handle(state, "/rm 2") == "Task 2 removed."
    assert registry.handle(state, "/rm 2") == "Task id 2 not found."
    assert len(state.store) == 1


def test_add_rejects_blank_and_bad_deadline(state) -> None:
    assert (registry.handle(state, "/add") or "").startswith("Usage")
    assert registry.handle(state, "/add @ 2099-01-01") == "Title required."
    assert "Invalid deadline" in (registry.handle(state, "/add Pay rent @ someday") or "")
    assert len(state.store) == 0


def test_id_commands_validate_arguments(state) -> None:
    assert registry.handle(state, "/toggle") == "Usage: /toggle <id>"
    assert registry.handle(state, "/rm abc") == "Usage: /rm <id>"
    assert registry.handle(state, "/toggle 42") == "Task id 42 not found."


def test_status_and_help(state) -> None:
    registry.handle(state, "/add a")
    status = registry.handle(state, "/status") or ""
    assert "Tasks: 1 (0 done, 0 urgent)" in status
    assert str(state.settings.storage_path) in status

    help_text = registry.handle(state, "/help") or ""
    for name in ("/add", "/toggle", "/rm", "/list", "/clock", "/exit"):
        assert name in help_text


def test_tasks_survive_restart(settings) -> None:
    first = create_initial_state(settings=settings)
    registry.handle(first, "/add persisted @ 2099-05-05 10:00")
    registry.handle(first, "/done 1")

    second = create_initial_state(settings=settings)
    tasks = second.store.snapshot()
    assert [t.title for t in tasks] == ["persisted"]
    assert tasks[0].completed is True
    assert tasks[0].deadline == first.store.snapshot()[0].deadline
    assert settings.storage_path.exists()


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Email bob@example.com", ("Email bob@example.com", None)),
        ("Rapport @ 2026-10-20 18:00", ("Rapport", "2026-10-20 18:00")),
        ("Ping a@b.c @ 2026-10-20", ("Ping a@b.c", "2026-10-20")),
        ("@ 2026-10-20", ("", "2026-10-20")),
        ("@home", ("@home", None)),
    ],
)
def test_split_title_deadline(text: str, expected: tuple[str, str | None]) -> None:
    assert split_title_deadline(text) == expected


def test_title_with_at_sign_is_kept_whole(state) -> None:
    assert registry.handle(state, "/add Email bob@example.com") == "Added #1."
    task = state.store.get(1)
    assert task is not None
    assert task.title == "Email bob@example.com"
    assert task.deadline is None
