# src/nameless_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store and the presentation layer depend on Protocols instead of concrete
implementations, so storage backends and clocks are swappable in tests.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import Snapshot, Task

# Returns the current, timezone-aware wall-clock time.
Clock = Callable[[], datetime]

# Receives every new snapshot pushed by the store.
SnapshotObserver = Callable[[Snapshot], None]


class KeyValueStorage(Protocol):
    """
    Durable string key-value slot store (browser localStorage equivalent).

    Values are opaque strings; the caller owns the encoding.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TodoRepo(Protocol):
    # Query API
    def snapshot(self) -> Snapshot: ...
    def subscribe(self, observer: SnapshotObserver) -> Callable[[], None]: ...

    # Mutations
    def add(self, title: str, deadline: datetime | None = None) -> Task | None: ...
    def toggle(self, task_id: int) -> Task | None: ...
    def delete(self, task_id: int) -> bool: ...


def now_local() -> datetime:
    return datetime.now().astimezone()
