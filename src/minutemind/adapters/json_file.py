"""Single JSON document adapter.

All keys live in one JSON object on disk. Writes go to a temporary file that
is then renamed over the store, so readers never see a half-written file.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from minutemind.exceptions import StorageError
from minutemind.utils.logger import get_logger

from .base import PersistenceAdapter

logger = get_logger("storage.json")


class JsonFileAdapter(PersistenceAdapter):
    """JSON file-based key/value store.

    Attributes:
        file_path: Path to the JSON document
    """

    name = "json"

    def __init__(self, file_path: str | Path):
        self.file_path = Path(file_path)

    async def get(self, keys: set[str]) -> dict[str, Any]:
        document = await asyncio.to_thread(self._read)
        return {key: document[key] for key in keys if key in document}

    async def set(self, data: dict[str, Any]) -> None:
        await asyncio.to_thread(self._merge_and_write, data)

    def _read(self) -> dict[str, Any]:
        if not self.file_path.exists():
            return {}
        try:
            content = self.file_path.read_text(encoding="utf-8").strip()
            if not content:
                return {}
            document = json.loads(content)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.file_path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageError(f"{self.file_path} does not hold a JSON object")
        return document

    def _merge_and_write(self, data: dict[str, Any]) -> None:
        try:
            document = self._read()
        except StorageError:
            logger.warning("overwriting unreadable store %s", self.file_path)
            document = {}
        document.update(data)

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=".store-", suffix=".json", dir=self.file_path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_name, self.file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write {self.file_path}: {e}") from e
