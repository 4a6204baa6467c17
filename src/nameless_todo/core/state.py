# src/nameless_todo/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..tasks.task_store import TodoStore

if TYPE_CHECKING:
    from ..connectors.console_connector import TodoListView
    from ..tasks.ticker import ClockRunner


@dataclass
class AppState:
    # Settings are kept on the state so commands can read them without globals.
    settings: object

    store: TodoStore
    view: TodoListView

    clock_runner: ClockRunner | None = None
    # Serializes terminal writes between the REPL and the display clock thread.
    lock: threading.Lock = field(default_factory=threading.Lock)
