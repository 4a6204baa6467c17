# src/nameless_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path

LOG_FILE_NAME = "nameless_todo.log"

# Minimum console level per logger prefix (longest matching prefix wins).
# The display clock ticks every second; anything below WARNING there is noise.
CONSOLE_LEVELS: dict[str, int] = {
    "nameless_todo": logging.INFO,
    "nameless_todo.tasks.ticker": logging.WARNING,
    "py.warnings": logging.ERROR,
}

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: int | str, default: int = logging.INFO) -> int:
    """Accept 10 / "DEBUG" / "debug"; unknown names fall back to `default`."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


class _ConsoleNoiseFilter(logging.Filter):
    """
    Per-prefix console threshold.

    Loggers without a matching prefix (third-party) only pass at ERROR+.
    """

    def __init__(self, levels: Mapping[str, int] | None = None, fallback: int = logging.ERROR) -> None:
        super().__init__()
        levels = CONSOLE_LEVELS if levels is None else levels
        # Longest prefix first so "nameless_todo.tasks.ticker" beats "nameless_todo".
        self._levels = sorted(levels.items(), key=lambda kv: len(kv[0]), reverse=True)
        self._fallback = fallback

    def threshold(self, name: str) -> int:
        for prefix, level in self._levels:
            if name == prefix or name.startswith(prefix + "."):
                return level
        return self._fallback

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/nameless_todo",
    console_level: int | str = logging.WARNING,
    file_level: int | str = logging.DEBUG,
) -> Path:
    """
    Send everything to <log_dir>/nameless_todo.log and only filtered
    problems to stderr, so log lines never scroll the task list away.

    Call once at startup. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolve_level(console_level, logging.WARNING))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(resolve_level(file_level, logging.DEBUG))
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
