"""Persistence adapters (key/value backends) for MinuteMind."""

from .base import PersistenceAdapter
from .factory import create_adapter, detect_backend
from .json_file import JsonFileAdapter
from .memory import MemoryAdapter
from .sqlite import SqliteKeyValueAdapter

__all__ = [
    "PersistenceAdapter",
    "JsonFileAdapter",
    "SqliteKeyValueAdapter",
    "MemoryAdapter",
    "create_adapter",
    "detect_backend",
]
