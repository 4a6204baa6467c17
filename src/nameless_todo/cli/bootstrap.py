# src/nameless_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the one TodoStore and loads its snapshot,
- wires the presentation layer to it.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ..config import get_settings
from ..connectors.console_connector import TodoListView
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..storage.kv_store import FileKeyValueStore
from ..tasks.task_store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage: KeyValueStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = FileKeyValueStore(settings.storage_path)

    store = TodoStore(storage, key=settings.storage_key)
    store.load()

    view = TodoListView(
        store,
        title=settings.app_name,
        urgency_window=timedelta(hours=float(settings.urgency_hours)),
    )
    logger.info("State ready: %d tasks from key=%s", len(store), settings.storage_key)
    return AppState(settings=settings, store=store, view=view)
