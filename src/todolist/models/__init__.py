"""todolist domain models.

Pydantic models for tasks, transient view state and configuration.
"""

from .config_models import AppConfig, LoggingConfig, StorageConfig, UIConfig
from .state import EditSlot, LoadReport, ViewState
from .task import PRIORITY_RANK, Priority, SortKey, Task, TaskFilter, parse_due_date

__all__ = [
    # Task models
    "Task",
    "Priority",
    "PRIORITY_RANK",
    "TaskFilter",
    "SortKey",
    "parse_due_date",
    # Transient state
    "EditSlot",
    "ViewState",
    "LoadReport",
    # Config models
    "AppConfig",
    "StorageConfig",
    "UIConfig",
    "LoggingConfig",
]
