"""Recurrence helpers for the MinuteMind CLI."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from minutemind.models import RECURRENCES

RECURRENCE_LABELS: dict[str, str] = {
    "none": "No recurrence",
    "daily": "Every day",
    "weekly": "Every week",
    "monthly": "Every month",
}


def describe_recurrence(recurrence: str) -> str:
    """Human-readable description of a recurrence value."""
    return RECURRENCE_LABELS.get(recurrence, recurrence)


def parse_recurrence(value: str) -> str:
    """Normalise user input ("Weekly", "off", "") to a recurrence value.

    Raises:
        ValueError: If the value is not a known pattern
    """
    normalized = value.strip().lower()
    if normalized in ("", "off", "never"):
        return "none"
    if normalized not in RECURRENCES:
        raise ValueError(f"recurrence must be one of: {', '.join(RECURRENCES)}")
    return normalized


def next_occurrence(due: date, recurrence: str) -> date | None:
    """Next due date after ``due`` for a recurring task.

    Monthly recurrence keeps the day of month, clamped to the length of the
    target month (Jan 31 -> Feb 28/29).
    """
    if recurrence == "daily":
        return due + timedelta(days=1)
    if recurrence == "weekly":
        return due + timedelta(weeks=1)
    if recurrence == "monthly":
        year = due.year + due.month // 12
        month = due.month % 12 + 1
        day = min(due.day, calendar.monthrange(year, month)[1])
        return date(year, month, day)
    return None
