# src/nameless_todo/tasks/task_codec.py

"""
Snapshot (de)serialization.

Wire format: a JSON list of objects with the keys
``id``, ``title``, ``completed``, ``createdAt`` and (optionally) ``deadline``.
JSON has no timestamp type, so the decoder knows which keys hold ISO-8601
text and converts them back to datetimes.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)


class SnapshotDecodeError(ValueError):
    """The stored snapshot cannot be decoded as a task list at all."""


def parse_timestamp(raw: str) -> datetime:
    """
    Parse ISO-8601 text into an aware datetime.

    Accepts the trailing "Z" written by browsers (``toISOString``).
    Naive values are taken as local time.
    """
    dt = datetime.fromisoformat(raw.strip())
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def task_to_dict(task: Task) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "completed": task.completed,
        "createdAt": task.created_at.isoformat(),
    }
    # An absent deadline is dropped, like JSON.stringify drops undefined.
    if task.deadline is not None:
        out["deadline"] = task.deadline.isoformat()
    return out


def task_from_dict(raw: dict[str, Any]) -> Task:
    """Build a Task from one decoded record. Raises ValueError on bad records."""
    tid = raw.get("id")
    if isinstance(tid, bool) or not isinstance(tid, int):
        raise ValueError(f"invalid id: {tid!r}")

    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValueError(f"invalid title for id={tid}")

    created_raw = raw.get("createdAt")
    if not isinstance(created_raw, str):
        raise ValueError(f"missing createdAt for id={tid}")

    completed = raw.get("completed", False)
    if not isinstance(completed, bool):
        raise ValueError(f"invalid completed flag for id={tid}: {completed!r}")

    deadline_raw = raw.get("deadline")
    if deadline_raw is not None and not isinstance(deadline_raw, str):
        raise ValueError(f"invalid deadline for id={tid}")

    return Task(
        id=tid,
        title=title.strip(),
        completed=completed,
        created_at=parse_timestamp(created_raw),
        deadline=parse_timestamp(deadline_raw) if deadline_raw else None,
    )


def dumps_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)


def loads_tasks(text: str) -> list[Task]:
    """
    Decode a stored snapshot.

    - unusable document (bad JSON, not a list) -> SnapshotDecodeError
    - unusable records -> skipped with a warning
    - duplicate ids -> first occurrence wins
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotDecodeError(f"snapshot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise SnapshotDecodeError(f"snapshot must be a list, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[int] = set()
    for idx, raw in enumerate(data):
        if not isinstance(raw, dict):
            logger.warning("Skipping snapshot record #%d: not an object", idx)
            continue
        try:
            task = task_from_dict(raw)
        except ValueError as e:
            logger.warning("Skipping snapshot record #%d: %s", idx, e)
            continue
        if task.id in seen:
            logger.warning("Skipping snapshot record #%d: duplicate id=%s", idx, task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out
