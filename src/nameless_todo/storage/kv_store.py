# src/nameless_todo/storage/kv_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileKeyValueStore:
    """
    File-backed string key-value store.

    The whole store is one JSON object ``{key: value}`` on disk. Every write
    rewrites the file atomically (tmp file + os.replace), so a crash never
    leaves a half-written store behind.

    Reads are best-effort: a missing, unreadable or malformed file behaves
    like an empty store (the anomaly is logged).
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("FileKeyValueStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read key-value store %s; treating as empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Key-value store %s is not an object; treating as empty", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            # Best-effort: keep the file private on disk.
            os.chmod(self._path, 0o600)

    # ---- public API ----

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug("Stored key=%s (%d chars) in %s", key, len(value), self._path)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is None:
            return
        self._write_all(data)


class MemoryKeyValueStore:
    """In-process key-value store (nothing survives the process)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
