"""Task, subtask and quick-link data models.

All models serialize with camelCase aliases so the persisted snapshot keeps
the field names the storage format has always used (``createdAt``,
``pomodoroCount`` ...). Timestamps are timezone-aware UTC datetimes and
serialize to ISO-8601 strings.
"""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Priority = Literal["low", "medium", "high"]
Recurrence = Literal["none", "daily", "weekly", "monthly"]
SubtaskStatus = Literal["pending", "in-progress", "completed"]

PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
RECURRENCES: tuple[str, ...] = ("none", "daily", "weekly", "monthly")
SUBTASK_STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed")

# Fixed tag palette
COLOR_PALETTE: tuple[str, ...] = (
    "slate",
    "red",
    "amber",
    "emerald",
    "cyan",
    "violet",
    "fuchsia",
    "rose",
)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return str(uuid.uuid4())


def compute_progress(subtasks: list[Subtask]) -> int:
    """Percentage of completed subtasks, rounded half up.

    Returns 0 for an empty list.
    """
    total = len(subtasks)
    if total == 0:
        return 0
    done = sum(1 for subtask in subtasks if subtask.status == "completed")
    # Integer half-up rounding of 100 * done / total
    return (200 * done + total) // (2 * total)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Subtask(_CamelModel):
    """Checklist item owned by exactly one task.

    Attributes:
        id: Unique identifier
        title: Display text (may be empty while the user is typing)
        status: pending, in-progress or completed
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str = Field(default_factory=new_id)
    title: str = ""
    status: SubtaskStatus = "pending"
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Task(_CamelModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Display text
        completed: Completion status
        pinned: Pinned tasks are always listed before unpinned ones
        order: Manual sort position among unpinned tasks
        created_at: Creation timestamp
        updated_at: Last update timestamp
        priority: low, medium or high
        recurrence: none, daily, weekly or monthly
        color: Optional tag from COLOR_PALETTE
        due_date: Optional due date
        notes: Optional free-form notes
        subtasks: Ordered checklist
        progress: Percentage of completed subtasks (derived)
        pomodoro_count: Number of finished pomodoro sessions
        pomodoro_target: Optional number of sessions the user aims for
    """

    id: str = Field(default_factory=new_id)
    title: str
    completed: bool = False
    pinned: bool = False
    order: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    priority: Priority = "medium"
    recurrence: Recurrence = "none"
    color: str | None = None
    due_date: date | None = None
    notes: str | None = None
    subtasks: list[Subtask] = Field(default_factory=list)
    progress: int = Field(default=0, ge=0, le=100)
    pomodoro_count: int = Field(default=0, ge=0)
    pomodoro_target: int | None = Field(default=None, ge=1)

    @field_validator("recurrence", mode="before")
    @classmethod
    def _null_recurrence(cls, value):
        # Older snapshots store "no recurrence" as null
        return "none" if value is None else value

    @field_validator("pomodoro_count", mode="before")
    @classmethod
    def _null_pomodoro_count(cls, value):
        return 0 if value is None else value

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if value.split("-")[0] not in COLOR_PALETTE:
            raise ValueError(
                f"color must be one of: {', '.join(COLOR_PALETTE)}"
            )
        return value

    @model_validator(mode="after")
    def _derive_progress(self) -> Task:
        self.progress = compute_progress(self.subtasks)
        return self

    def touch(self) -> None:
        """Bump updated_at, keeping it at or after created_at."""
        self.updated_at = max(utc_now(), self.created_at)


class QuickLink(_CamelModel):
    """Bookmark shown next to the task list, independent of any task."""

    id: str = Field(default_factory=new_id)
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    icon: str | None = None
