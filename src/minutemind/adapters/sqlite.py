"""SQLite key/value adapter.

Each key is one row holding its JSON-encoded value, the same shape a
browser's local storage uses. A batch ``set`` runs in a single transaction.
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
from pathlib import Path
from typing import Any

from minutemind.exceptions import StorageError

from .base import PersistenceAdapter

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

UPSERT = """
INSERT INTO kv_store (key, value) VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""


class SqliteKeyValueAdapter(PersistenceAdapter):
    """SQLite implementation of the persistence adapter."""

    name = "sqlite"

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)

    async def get(self, keys: set[str]) -> dict[str, Any]:
        return await asyncio.to_thread(self._get, sorted(keys))

    async def set(self, data: dict[str, Any]) -> None:
        await asyncio.to_thread(self._set, data)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        connection = sqlite3.connect(str(self.db_path), timeout=30.0)
        connection.execute(SCHEMA)
        return connection

    def _get(self, keys: list[str]) -> dict[str, Any]:
        if not keys:
            return {}
        placeholders = ", ".join("?" for _ in keys)
        try:
            connection = self._connect()
            try:
                rows = connection.execute(
                    f"SELECT key, value FROM kv_store WHERE key IN ({placeholders})",
                    keys,
                ).fetchall()
            finally:
                connection.close()
            return {key: json.loads(value) for key, value in rows}
        except (sqlite3.Error, OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.db_path}: {e}") from e

    def _set(self, data: dict[str, Any]) -> None:
        try:
            rows = [(key, json.dumps(value)) for key, value in data.items()]
            connection = self._connect()
            try:
                with connection:
                    connection.executemany(UPSERT, rows)
            finally:
                connection.close()
        except (sqlite3.Error, OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write {self.db_path}: {e}") from e


def supports_upsert() -> bool:
    """Whether the linked SQLite library understands INSERT ... ON CONFLICT."""
    return sqlite3.sqlite_version_info >= (3, 24, 0)
