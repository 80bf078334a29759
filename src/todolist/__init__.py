"""todolist - a personal task list with a small, persistent core."""

__version__ = "0.1.0"
