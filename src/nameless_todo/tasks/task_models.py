# src/nameless_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

# Sort key placeholder for tasks without a deadline (never compared against
# a real deadline because the first key element already separates them).
_NO_DEADLINE = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single todo entry.

    Instances are immutable: the store replaces a task with an updated copy
    on toggle, so snapshots handed to observers never change under them.
    """

    id: int
    title: str
    created_at: datetime
    completed: bool = False
    deadline: datetime | None = None


Snapshot = tuple[Task, ...]


def deadline_sort_key(task: Task) -> tuple[bool, datetime]:
    return (task.deadline is None, task.deadline or _NO_DEADLINE)


def sort_tasks(tasks: list[Task]) -> None:
    """
    Sort in place: tasks with a deadline first (ascending), then tasks without.
    The sort is stable, so equal keys keep insertion order.
    """
    tasks.sort(key=deadline_sort_key)
