"""JSON file persistence adapter.

One file per installation, named after the storage key, under the
platform data directory unless a path is given.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from platformdirs import user_data_dir

from todolist.exceptions import PersistenceError
from todolist.models.config_models import STORAGE_KEY
from todolist.repositories.repository import PersistenceAdapter

_APP_NAME = "todolist"


def default_tasks_path(key: str = STORAGE_KEY) -> Path:
    """Path of the tasks file in the platform data directory."""
    return Path(user_data_dir(_APP_NAME)) / f"{key}.json"


class JsonFileAdapter(PersistenceAdapter):
    """Stores the serialized collection in a single JSON file."""

    def __init__(self, path: Path | str | None = None, key: str = STORAGE_KEY):
        """Initialize the adapter.

        Args:
            path: Tasks file; defaults to ``<user_data_dir>/<key>.json``
            key: Storage key of the collection
        """
        super().__init__(key)
        self.path = Path(path) if path is not None else default_tasks_path(key)

    def load(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}", key=self.key) from e

    def save(self, payload: str) -> None:
        """Write *payload* atomically: temp file in the same dir, then replace."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.key}-", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}", key=self.key) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
