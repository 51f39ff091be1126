"""Wires the store, the adapter and the sync controller together."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from minutemind.adapters import PersistenceAdapter, create_adapter
from minutemind.config import ConfigManager, get_config_manager
from minutemind.utils.notifications import Notifier, build_notifier
from minutemind.utils.scheduler import AsyncioScheduler, Scheduler

from .pomodoro import PomodoroEngine
from .sync_service import SyncController
from .task_store import TaskStore


@dataclass
class Session:
    """One running instance of the core."""

    store: TaskStore
    sync: SyncController
    config_manager: ConfigManager

    def pomodoro(
        self,
        scheduler: Scheduler | None = None,
        notifier: Notifier | None = None,
    ) -> PomodoroEngine:
        """Build the focus timer for this session from configuration."""
        settings = self.config_manager.config.pomodoro
        return PomodoroEngine(
            self.store,
            scheduler or AsyncioScheduler(),
            notifier or build_notifier(settings.notifier),
            duration_seconds=settings.duration_seconds,
            notify_failure_threshold=settings.notify_failure_threshold,
        )


@asynccontextmanager
async def open_session(
    config_manager: ConfigManager | None = None,
    adapter: PersistenceAdapter | None = None,
) -> AsyncIterator[Session]:
    """Load state on entry, flush pending saves on exit."""
    config_manager = config_manager or get_config_manager()
    adapter = adapter or create_adapter(config_manager)
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()
    try:
        yield Session(store=store, sync=sync, config_manager=config_manager)
    finally:
        await sync.flush()
        sync.close()
