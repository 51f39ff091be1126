"""MinuteMind domain models.

Pydantic models for tasks, subtasks, quick links and the persisted snapshot.
"""

from .snapshot import DARK_MODE_KEY, LINKS_KEY, SNAPSHOT_KEYS, TASKS_KEY, AppSnapshot
from .task import (
    COLOR_PALETTE,
    PRIORITIES,
    RECURRENCES,
    SUBTASK_STATUSES,
    Priority,
    QuickLink,
    Recurrence,
    Subtask,
    SubtaskStatus,
    Task,
    compute_progress,
    new_id,
    utc_now,
)

__all__ = [
    # Task models
    "Task",
    "Subtask",
    "QuickLink",
    "Priority",
    "Recurrence",
    "SubtaskStatus",
    "PRIORITIES",
    "RECURRENCES",
    "SUBTASK_STATUSES",
    "COLOR_PALETTE",
    "compute_progress",
    "new_id",
    "utc_now",
    # Snapshot
    "AppSnapshot",
    "TASKS_KEY",
    "LINKS_KEY",
    "DARK_MODE_KEY",
    "SNAPSHOT_KEYS",
]
