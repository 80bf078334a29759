"""Persistence port for todolist.

The task store never touches a storage medium directly. It hands an opaque
serialized snapshot of the whole collection to a PersistenceAdapter and
asks for it back once at startup. Concrete adapters live in
``todolist.adapters``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class PersistenceAdapter(ABC):
    """Abstract key-value storage for the serialized task collection.

    Every adapter stores exactly one value under a fixed key; ``save``
    overwrites it in full (last write wins).
    """

    def __init__(self, key: str):
        self.key = key

    @abstractmethod
    def load(self) -> str | None:
        """Return the stored payload.

        Returns:
            The serialized collection, or None if nothing has been stored yet

        Raises:
            PersistenceError: If the storage medium cannot be read
        """
        raise NotImplementedError(
            "PersistenceAdapter.load() must be implemented by adapter"
        )

    @abstractmethod
    def save(self, payload: str) -> None:
        """Overwrite the stored payload.

        Args:
            payload: Serialized collection

        Raises:
            PersistenceError: If the storage medium cannot be written
        """
        raise NotImplementedError(
            "PersistenceAdapter.save() must be implemented by adapter"
        )
