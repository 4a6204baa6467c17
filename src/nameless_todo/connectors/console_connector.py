# src/nameless_todo/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from datetime import datetime, timedelta

from ..cli.commands import registry as command_registry
from ..core.ports import Clock, TodoRepo, now_local
from ..core.state import AppState
from ..tasks.countdown import (
    URGENCY_WINDOW,
    format_clock,
    format_short,
    is_urgent,
    parse_deadline,
    remaining_time_label,
)
from ..tasks.task_models import Snapshot, Task

logger = logging.getLogger(__name__)

# Row of the clock line once the screen has been cleared and redrawn (1-based).
CLOCK_ROW = 2


class TodoListView:
    """
    Presentation layer.

    Holds a read-only snapshot pushed by the store plus a display-only
    "current time" refreshed by the clock. User intents are forwarded to the
    store verbatim; the view never changes a task itself.
    """

    def __init__(
        self,
        store: TodoRepo,
        *,
        title: str = "Nameless TODO APP",
        urgency_window: timedelta = URGENCY_WINDOW,
        clock: Clock = now_local,
    ) -> None:
        self.store = store
        self.title = title
        self.urgency_window = urgency_window
        self.current_time: datetime = clock()
        self.tasks: Snapshot = ()
        self.on_clock_change: Callable[[str], None] | None = None
        self._unsubscribe = store.subscribe(self._on_snapshot)

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self.tasks = snapshot

    def close(self) -> None:
        self._unsubscribe()

    # ---- clock ----

    def tick(self, now: datetime) -> None:
        self.current_time = now
        if self.on_clock_change is not None:
            self.on_clock_change(self.clock_text())

    def clock_text(self) -> str:
        return format_clock(self.current_time)

    # ---- derived values ----

    def is_urgent(self, task: Task) -> bool:
        return is_urgent(task, self.current_time, self.urgency_window)

    def time_remaining(self, task: Task) -> str:
        return remaining_time_label(task, self.current_time)

    # ---- rendering ----

    def render_task(self, task: Task) -> list[str]:
        mark = "!" if self.is_urgent(task) else " "
        box = "[x]" if task.completed else "[ ]"
        title = f"~{task.title}~" if task.completed else task.title
        lines = [f"{mark} {box} {task.id:>3}  {title}"]

        dates = f"Créé le: {format_short(task.created_at)}"
        if task.deadline is not None:
            dates += f" | Deadline: {format_short(task.deadline)} ({self.time_remaining(task)})"
        lines.append(" " * 10 + dates)
        return lines

    def render(self) -> str:
        lines = [self.title, self.clock_text(), ""]
        if not self.tasks:
            lines.append("  (aucune tâche)")
        for task in self.tasks:
            lines.extend(self.render_task(task))
        return "\n".join(lines)

    # ---- intents (forwarded to the store) ----

    def add(self, title: str, deadline_text: str | None = None) -> str:
        if not (title or "").strip():
            return "Title required."
        try:
            deadline = parse_deadline(deadline_text)
        except ValueError as e:
            return str(e)
        task = self.store.add(title, deadline)
        if task is None:
            return "Title required."
        return f"Added #{task.id}."

    def toggle(self, task_id: int) -> str:
        task = self.store.toggle(task_id)
        if task is None:
            return f"Task id {task_id} not found."
        return f"Task {task_id} {'done' if task.completed else 'reopened'}."

    def delete(self, task_id: int) -> str:
        if self.store.delete(task_id):
            return f"Task {task_id} removed."
        return f"Task id {task_id} not found."


# ---- terminal helpers ----


def _clear_screen() -> None:
    # ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _rewrite_clock_line(text: str) -> None:
    """Rewrite the clock row in place, keeping the cursor where the user types."""
    sys.stdout.write(f"\0337\033[{CLOCK_ROW};1H\033[2K{text}\0338")
    sys.stdout.flush()


def run_console_loop(state: AppState) -> None:
    view = state.view
    interactive = sys.stdout.isatty()
    live_clock = bool(getattr(state.settings, "live_clock", True)) and interactive

    def on_clock_change(text: str) -> None:
        with state.lock:
            try:
                _rewrite_clock_line(text)
            except OSError:
                logger.debug("Clock redraw failed.", exc_info=True)

    if live_clock:
        view.on_clock_change = on_clock_change

    logger.info("Console connector started (live_clock=%s).", live_clock)

    reply: str | None = None
    try:
        while True:
            with state.lock:
                if interactive:
                    _clear_screen()
                print(view.render())
                if reply:
                    print(f"\n{reply}")
                else:
                    print("\nType a title to add a task, /help for commands, /exit to quit.")
            reply = None

            try:
                user_input = input(": ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            # A bare line is shorthand for /add <line>.
            line = user_input if user_input.startswith("/") else f"/add {user_input}"
            try:
                reply = command_registry.handle(state, line)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."
    finally:
        view.on_clock_change = None

    logger.info("Console connector finished.")
