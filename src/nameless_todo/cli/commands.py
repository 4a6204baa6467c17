# src/nameless_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState

CommandHandler = Callable[[AppState, list[str]], str]

# Separates title and deadline in "/add <title> @ <deadline>". The spaces are
# part of it, so "bob@example.com" stays in the title.
DEADLINE_SEPARATOR = " @ "

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
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

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    raw = args[0].lstrip("#").rstrip(".")
    return int(raw) if raw.isdigit() else None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return state.view.render()


def split_title_deadline(text: str) -> tuple[str, str | None]:
    """
    "Rapport @ 2026-10-20 18:00" -> ("Rapport", "2026-10-20 18:00")
    "Email bob@example.com"      -> ("Email bob@example.com", None)
    """
    # Leading space so "@ <deadline>" with an empty title still splits.
    title, sep, deadline_text = f" {text}".rpartition(DEADLINE_SEPARATOR)
    if not sep:
        return text.strip(), None
    return title.strip(), deadline_text.strip() or None


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title>                     -> task without deadline
    /add <title> @ <YYYY-MM-DD HH:MM> -> task with deadline
    """
    text = " ".join(args).strip()
    if not text:
        return "Usage: /add <title> [@ YYYY-MM-DD HH:MM]"

    title, deadline_text = split_title_deadline(text)
    return state.view.add(title, deadline_text)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /toggle <id>"
    return state.view.toggle(task_id)


def cmd_rm(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    return state.view.delete(task_id)


def cmd_clock(state: AppState, args: list[str]) -> str:
    return state.view.clock_text()


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.store.snapshot()
    done = sum(1 for t in tasks if t.completed)
    urgent = sum(1 for t in tasks if state.view.is_urgent(t))
    path = getattr(state.settings, "storage_path", "?")
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({done} done, {urgent} urgent)\n"
        f"  Storage: {path}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <title> [@ YYYY-MM-DD HH:MM].", aliases=["a"]
)
registry.register(
    "toggle", cmd_toggle, help_text="Mark a task done / not done: /toggle <id>.", aliases=["done", "t"]
)
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del", "delete"])
registry.register("clock", cmd_clock, help_text="Show the current time.")
registry.register("status", cmd_status, help_text="Show task counts and storage location.")
