"""Persistence adapter contract.

Adapters are plain key/value stores with no business logic. The sync
controller reads the whole snapshot with one ``get`` and writes it back with
one ``set``; backends only need to honour that batch contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class PersistenceAdapter(ABC):
    """Abstract base class for durable key/value storage."""

    name: str = "abstract"

    @abstractmethod
    async def get(self, keys: set[str]) -> dict[str, Any]:
        """Read several keys at once.

        Args:
            keys: Keys to read

        Returns:
            Mapping of the requested keys that exist in storage; missing
            keys are simply absent from the result

        Raises:
            StorageError: If the backend cannot be read
        """
        raise NotImplementedError(
            "PersistenceAdapter.get() must be implemented by adapter"
        )

    @abstractmethod
    async def set(self, data: dict[str, Any]) -> None:
        """Write several keys at once.

        Args:
            data: Mapping of keys to JSON-serializable values

        Raises:
            StorageError: If the backend cannot be written
        """
        raise NotImplementedError(
            "PersistenceAdapter.set() must be implemented by adapter"
        )
