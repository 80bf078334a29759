"""Configuration service for todolist.

Loads and saves ``config.json`` under the platform config directory and
resolves where the task collection is stored. The ``TODOLIST_DATA``
environment variable overrides the configured tasks file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from todolist.adapters.json_file import JsonFileAdapter
from todolist.exceptions import ConfigError
from todolist.models.config_models import AppConfig

_APP_NAME = "todolist"
DATA_ENV_VAR = "TODOLIST_DATA"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(_APP_NAME))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage, writing defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config

    def get_value(self, dotted_key: str) -> Any:
        """Read a setting by dotted key, e.g. ``ui.timezone``."""
        node: Any = self.config
        for part in dotted_key.split("."):
            if not isinstance(node, BaseModel) or part not in type(node).model_fields:
                raise ConfigError(f"Unknown config key '{dotted_key}'")
            node = getattr(node, part)
        return node

    def set_value(self, dotted_key: str, value: str) -> AppConfig:
        """Update a setting by dotted key and save.

        The whole configuration is re-validated, so an invalid value leaves
        the saved file untouched.

        Raises:
            ConfigError: If the key is unknown or the value is invalid
        """
        self.get_value(dotted_key)
        data = self.config.model_dump(mode="json")
        section = data
        *parents, leaf = dotted_key.split(".")
        for part in parents:
            section = section[part]
        section[leaf] = value

        try:
            updated = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for '{dotted_key}': {e.errors()[0]['msg']}") from e

        self._config = updated
        self.save_config()
        return updated

    def tasks_path(self) -> Path:
        """Resolve the tasks file: env override, then config, then data dir."""
        override = os.environ.get(DATA_ENV_VAR)
        if override:
            return Path(override).expanduser()
        if self.config.storage.path:
            return Path(self.config.storage.path).expanduser()
        return self.data_dir / f"{self.config.storage.key}.json"

    def build_adapter(self) -> JsonFileAdapter:
        """Persistence adapter for the configured tasks file."""
        return JsonFileAdapter(self.tasks_path(), key=self.config.storage.key)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
