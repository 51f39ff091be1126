"""Sync controller - keeps the task store and the adapter consistent.

On start the whole snapshot is read in one batch. After that every store
change marks the state dirty and wakes a single background writer that saves
the whole snapshot, also in one batch. Store commands never wait for a save.
Changes that arrive while a write is in flight are coalesced into one
follow-up write of the newest state, so the last write always reflects the
latest change.

A failed write is logged and dropped; nothing is retried and the in-memory
store stays the source of truth for the rest of the session.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from minutemind.adapters import PersistenceAdapter
from minutemind.exceptions import StorageError
from minutemind.models import SNAPSHOT_KEYS, AppSnapshot
from minutemind.utils.logger import get_logger

from .task_store import TaskStore

logger = get_logger("sync")


class SyncController:
    """Load-on-start and save-on-change between a store and an adapter."""

    def __init__(self, store: TaskStore, adapter: PersistenceAdapter):
        self.store = store
        self.adapter = adapter
        self.saves = 0
        self.failed_saves = 0
        self._dirty = False
        self._writer: asyncio.Task[None] | None = None
        self._unsubscribe: Callable[[], None] | None = None

    async def load(self) -> bool:
        """Hydrate the store from storage and start watching for changes.

        Returns:
            True if storage was read, False if defaults were kept
        """
        loaded = True
        try:
            data = await self.adapter.get(set(SNAPSHOT_KEYS))
            self.store.hydrate(AppSnapshot.from_storage(data))
            logger.info(
                "loaded %d tasks and %d links from %s storage",
                len(self.store.tasks),
                len(self.store.links),
                self.adapter.name,
            )
        except (StorageError, ValidationError) as e:
            loaded = False
            logger.error("load failed, keeping defaults: %s", e)

        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self._on_change)
        return loaded

    @property
    def busy(self) -> bool:
        """Whether a write is scheduled or in flight."""
        return self._writer is not None and not self._writer.done()

    def _on_change(self, store: TaskStore) -> None:
        self._dirty = True
        if self.busy:
            return
        try:
            self._writer = asyncio.get_running_loop().create_task(self._drain())
        except RuntimeError:
            logger.warning("no running event loop, change not persisted yet")

    async def _drain(self) -> None:
        while self._dirty:
            self._dirty = False
            await self._write(self.store.snapshot().to_storage())

    async def _write(self, payload: dict[str, Any]) -> None:
        try:
            await self.adapter.set(payload)
        except StorageError as e:
            self.failed_saves += 1
            logger.error("save failed (%d so far): %s", self.failed_saves, e)
        else:
            self.saves += 1
            logger.debug("saved %d tasks", len(payload.get("tasks", [])))

    async def save(self) -> None:
        """Queue a write of the current snapshot and wait until it lands.

        The write goes through the same single writer as change-driven
        saves, so it can never race an in-flight write.
        """
        self._dirty = True
        if not self.busy:
            self._writer = asyncio.get_running_loop().create_task(self._drain())
        await self.flush()

    async def flush(self) -> None:
        """Wait until every observed change has been written (or failed)."""
        if self.busy:
            assert self._writer is not None
            await self._writer
        if self._dirty:
            await self._drain()

    def close(self) -> None:
        """Stop watching the store."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
