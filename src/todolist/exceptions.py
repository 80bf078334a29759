"""Exception hierarchy for todolist."""


class TodoListError(Exception):
    """Base class for all todolist errors."""


class PersistenceError(TodoListError):
    """Raised by persistence adapters when the storage medium fails."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class StateDecodeError(TodoListError):
    """Raised when a persisted payload cannot be decoded into tasks."""


class ConfigError(TodoListError):
    """Raised when the configuration file cannot be read or written."""


class AmbiguousTaskIdError(TodoListError):
    """Raised when a typed id matches more than one task."""
