"""Persistence adapters for todolist."""

from .json_file import JsonFileAdapter, default_tasks_path
from .memory import MemoryAdapter

__all__ = ["JsonFileAdapter", "MemoryAdapter", "default_tasks_path"]
