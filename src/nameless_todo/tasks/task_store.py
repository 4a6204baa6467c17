# src/nameless_todo/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from ..core.ports import Clock, KeyValueStorage, SnapshotObserver, now_local
from .task_codec import SnapshotDecodeError, dumps_tasks, loads_tasks
from .task_models import Snapshot, Task, sort_tasks

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todos"


class TodoStore:
    """
    Owner of the task collection.

    - The collection is kept in deadline order (see sort_tasks) after every mutation.
    - Every successful mutation is written to the storage slot, then pushed to observers.
    - Invalid input is a silent no-op: nothing here raises for a bad title or an unknown id.

    Build one instance in the composition root and pass it around explicitly.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Clock = now_local,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._tasks: list[Task] = []
        self._observers: list[SnapshotObserver] = []
        self._last_id = 0

    # ---- low-level helpers ----

    def _next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def _find_index(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _persist(self) -> None:
        try:
            self._storage.set_item(self._key, dumps_tasks(self._tasks))
        except Exception:
            # No retry: the in-memory collection stays authoritative.
            logger.exception("Failed to persist %d tasks under key=%s", len(self._tasks), self._key)

    def _notify(self) -> None:
        snap = self.snapshot()
        for observer in list(self._observers):
            try:
                observer(snap)
            except Exception:
                logger.exception("Snapshot observer %r failed", observer)

    def _commit(self) -> None:
        sort_tasks(self._tasks)
        self._persist()
        self._notify()

    # ---- public API ----

    def load(self) -> Snapshot:
        """
        Restore the collection from the storage slot.

        Missing slot -> empty collection.
        Corrupted slot -> empty collection + warning (never fatal).
        """
        raw = self._storage.get_item(self._key)
        tasks: list[Task] = []
        if raw is not None:
            try:
                tasks = loads_tasks(raw)
            except SnapshotDecodeError as e:
                logger.warning("Ignoring corrupted snapshot under key=%s: %s", self._key, e)
                tasks = []

        sort_tasks(tasks)
        self._tasks = tasks
        self._last_id = max([self._last_id, *(t.id for t in tasks)])
        logger.info("TodoStore loaded key=%s total=%d", self._key, len(tasks))
        self._notify()
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task | None:
        idx = self._find_index(task_id)
        return None if idx is None else self._tasks[idx]

    def __len__(self) -> int:
        return len(self._tasks)

    def subscribe(self, observer: SnapshotObserver) -> Callable[[], None]:
        """
        Register an observer; it is called right away with the current snapshot
        and then after every mutation. Returns an unsubscribe callable.
        """
        self._observers.append(observer)
        try:
            observer(self.snapshot())
        except Exception:
            logger.exception("Snapshot observer %r failed on subscribe", observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def add(self, title: str, deadline: datetime | None = None) -> Task | None:
        clean = (title or "").strip()
        if not clean:
            logger.debug("Rejected task with blank title")
            return None

        if deadline is not None and deadline.tzinfo is None:
            deadline = deadline.astimezone()

        task = Task(
            id=self._next_id(),
            title=clean,
            completed=False,
            created_at=self._clock(),
            deadline=deadline,
        )
        self._tasks.append(task)
        self._commit()
        logger.info("Task added id=%s deadline=%s", task.id, task.deadline)
        return task

    def toggle(self, task_id: int) -> Task | None:
        idx = self._find_index(task_id)
        if idx is None:
            logger.debug("Toggle ignored: unknown id=%s", task_id)
            return None

        task = replace(self._tasks[idx], completed=not self._tasks[idx].completed)
        self._tasks[idx] = task
        self._commit()
        logger.info("Task %s -> completed=%s", task.id, task.completed)
        return task

    def delete(self, task_id: int) -> bool:
        idx = self._find_index(task_id)
        if idx is None:
            logger.debug("Delete ignored: unknown id=%s", task_id)
            return False

        del self._tasks[idx]
        self._commit()
        logger.info("Task %s deleted", task_id)
        return True
