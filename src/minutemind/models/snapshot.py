"""Whole-state snapshot exchanged with persistence adapters."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .task import QuickLink, Task

TASKS_KEY = "tasks"
LINKS_KEY = "links"
DARK_MODE_KEY = "darkMode"

SNAPSHOT_KEYS: frozenset[str] = frozenset({TASKS_KEY, LINKS_KEY, DARK_MODE_KEY})


class AppSnapshot(BaseModel):
    """Everything that is persisted: tasks, quick links and the theme flag."""

    model_config = ConfigDict(populate_by_name=True)

    tasks: list[Task] = Field(default_factory=list)
    links: list[QuickLink] = Field(default_factory=list)
    dark_mode: bool = Field(default=False, alias=DARK_MODE_KEY)

    def to_storage(self) -> dict[str, Any]:
        """Serialize to the key/value mapping written in one batch."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage(cls, data: dict[str, Any]) -> AppSnapshot:
        """Build a snapshot from a possibly partial key/value mapping.

        Keys that are absent (or stored as null) keep their defaults.
        """
        present = {key: value for key, value in data.items() if value is not None}
        return cls.model_validate(
            {key: value for key, value in present.items() if key in SNAPSHOT_KEYS}
        )
