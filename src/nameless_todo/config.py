# src/nameless_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is read from disk at import time except the optional .env.
- Tests build their own settings object instead of touching the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Durable storage slot ----
    data_dir: Path
    storage_path: Path
    storage_key: str

    # ---- Display ----
    tick_seconds: float
    urgency_hours: float
    live_clock: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Nameless TODO APP").strip() or "Nameless TODO APP"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/nameless_todo"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "local_storage.json")
        storage_key = _env(_k("STORAGE_KEY"), "todos").strip() or "todos"

        # A zero or negative cadence would spin the ticker.
        tick_seconds = max(0.1, _env_float(_k("TICK_SECONDS"), 1.0))
        urgency_hours = max(0.0, _env_float(_k("URGENCY_HOURS"), 24.0))
        live_clock = _env_bool(_k("LIVE_CLOCK"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
            tick_seconds=tick_seconds,
            urgency_hours=urgency_hours,
            live_clock=live_clock,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
