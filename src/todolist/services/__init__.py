"""Service layer for todolist."""

from .task_store import TaskStore, TaskView

__all__ = ["TaskStore", "TaskView"]
