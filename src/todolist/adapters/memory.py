"""Dict-backed persistence adapter."""

from __future__ import annotations

from todolist.exceptions import PersistenceError
from todolist.models.config_models import STORAGE_KEY
from todolist.repositories.repository import PersistenceAdapter


class MemoryAdapter(PersistenceAdapter):
    """Keeps payloads in a plain dict, keyed like browser local storage.

    Several adapters may share one ``storage`` dict to emulate separate
    sessions against the same installation.
    """

    def __init__(self, key: str = STORAGE_KEY, storage: dict[str, str] | None = None):
        super().__init__(key)
        self.storage: dict[str, str] = storage if storage is not None else {}
        self.save_count = 0
        self.fail_saves = False

    def load(self) -> str | None:
        return self.storage.get(self.key)

    def save(self, payload: str) -> None:
        if self.fail_saves:
            raise PersistenceError("storage is not writable", key=self.key)
        self.storage[self.key] = payload
        self.save_count += 1
