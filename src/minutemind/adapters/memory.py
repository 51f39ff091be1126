"""In-process adapter, used for ephemeral sessions and tests."""

from __future__ import annotations

import copy
from typing import Any

from .base import PersistenceAdapter


class MemoryAdapter(PersistenceAdapter):
    """Keeps values in a dict; nothing survives the process."""

    name = "memory"

    def __init__(self, initial: dict[str, Any] | None = None):
        self.data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, keys: set[str]) -> dict[str, Any]:
        return {key: copy.deepcopy(self.data[key]) for key in keys if key in self.data}

    async def set(self, data: dict[str, Any]) -> None:
        self.data.update(copy.deepcopy(data))
