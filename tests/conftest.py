# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from nameless_todo.cli.bootstrap import create_initial_state
from nameless_todo.core.state import AppState
from nameless_todo.storage.kv_store import MemoryKeyValueStore
from nameless_todo.tasks.task_store import TodoStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than the real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="Nameless TODO APP",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "local_storage.json",
        storage_key="todos",
        tick_seconds=1.0,
        urgency_hours=24.0,
        live_clock=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(storage: MemoryKeyValueStore, clock: FakeClock) -> TodoStore:
    s = TodoStore(storage, clock=clock)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState built by the real composition root.

    NOTE: We keep the real file-backed store here (in tmp_path) because
    persistence across restarts is part of what we want to test.
    """
    return create_initial_state(settings=settings)
