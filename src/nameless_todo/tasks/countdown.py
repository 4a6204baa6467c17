# src/nameless_todo/tasks/countdown.py

"""
Time-derived display values.

Everything takes ``now`` explicitly so the display clock (not the store)
decides what "now" means, and tests can pin it.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from .task_models import Task

URGENCY_WINDOW = timedelta(hours=24)
OVERDUE_LABEL = "En retard !"

_HOUR = timedelta(hours=1)
_MINUTE = timedelta(minutes=1)

_WEEKDAYS_FR = ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche")
_MONTHS_FR = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)


def is_urgent(task: Task, now: datetime, window: timedelta = URGENCY_WINDOW) -> bool:
    """Deadline strictly in the future and less than `window` away."""
    if task.deadline is None:
        return False
    remaining = task.deadline - now
    return timedelta(0) < remaining < window


def remaining_time_label(task: Task, now: datetime) -> str:
    if task.deadline is None:
        return ""

    remaining = task.deadline - now
    if remaining < timedelta(0):
        return OVERDUE_LABEL

    hours = remaining // _HOUR
    minutes = (remaining % _HOUR) // _MINUTE

    if hours > 24:
        days = hours // 24
        s = "s" if days > 1 else ""
        return f"{days} jour{s} restant{s}"

    return f"{hours}h {minutes}min restantes"


def format_clock(now: datetime) -> str:
    """Long French date for the live clock, e.g. 'lundi 19 octobre 2026, 14:03:09'."""
    weekday = _WEEKDAYS_FR[now.weekday()]
    month = _MONTHS_FR[now.month - 1]
    return f"{weekday} {now.day} {month} {now.year}, {now:%H:%M:%S}"


def format_short(dt: datetime) -> str:
    return dt.astimezone().strftime("%d/%m/%Y, %H:%M")


def parse_deadline(text: str | None) -> datetime | None:
    """
    Parse a user-entered deadline.

    Accepted: 'YYYY-MM-DDTHH:MM' (datetime-local form), 'YYYY-MM-DD HH:MM',
    'YYYY-MM-DD' (midnight), with or without an explicit UTC offset.
    Naive values are local time. Blank -> None. Anything else -> ValueError.
    """
    raw = (text or "").strip()
    if not raw:
        return None
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"Invalid deadline: {raw!r} (expected YYYY-MM-DD HH:MM)") from None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt
