"""Configuration models.

The configuration lives in ``config.json`` under the platform config
directory and is validated with these models on load.
"""

from __future__ import annotations

from zoneinfo import available_timezones

from pydantic import BaseModel, Field, field_validator

from .task import SortKey, TaskFilter

STORAGE_KEY = "todo-tasks"


class StorageConfig(BaseModel):
    """Where the task collection is persisted."""

    path: str | None = Field(
        default=None, description="Tasks file; defaults to the platform data dir"
    )
    key: str = Field(default=STORAGE_KEY, description="Storage key of the collection")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("key cannot be empty")
        return v.strip()


class UIConfig(BaseModel):
    """View defaults."""

    timezone: str = Field(default="local")  # "local" or an IANA zone name
    default_filter: TaskFilter = Field(default=TaskFilter.ALL)
    default_sort: SortKey = Field(default=SortKey.DATE)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v == "local" or v in available_timezones():
            return v
        raise ValueError(f"unknown timezone '{v}'")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"invalid log level '{v}'")
        return v


class AppConfig(BaseModel):
    """Main todolist configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
