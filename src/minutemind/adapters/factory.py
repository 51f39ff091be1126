"""Backend selection for the persistence adapter."""

from __future__ import annotations

from minutemind.config import ConfigManager
from minutemind.utils.logger import get_logger

from .base import PersistenceAdapter
from .json_file import JsonFileAdapter
from .memory import MemoryAdapter
from .sqlite import SqliteKeyValueAdapter, supports_upsert

logger = get_logger("storage")


def detect_backend() -> str:
    """Probe the runtime for the preferred backend."""
    return "sqlite" if supports_upsert() else "json"


def create_adapter(config_manager: ConfigManager) -> PersistenceAdapter:
    """Build the adapter named by ``storage.backend``.

    ``auto`` probes the runtime; the choice is invisible to the store.
    """
    backend = config_manager.config.storage.backend
    if backend == "auto":
        backend = detect_backend()

    if backend == "memory":
        adapter: PersistenceAdapter = MemoryAdapter()
    elif backend == "sqlite":
        adapter = SqliteKeyValueAdapter(config_manager.storage_path("db"))
    else:
        adapter = JsonFileAdapter(config_manager.storage_path("json"))

    logger.debug("using %s storage backend", adapter.name)
    return adapter
