"""Helpers for resolving task references typed on the command line."""

from __future__ import annotations

from todolist.exceptions import AmbiguousTaskIdError
from todolist.services.task_store import TaskId, TaskStore


def resolve_task_id(store: TaskStore, raw: str) -> TaskId | None:
    """Map a command-line id to the id of a resident task.

    Persisted ids may be integers or strings, while the shell only hands us
    strings, so ids are compared by their string form.

    Returns:
        The task's real id, or None if no task matches

    Raises:
        AmbiguousTaskIdError: If both an integer id and a string id read as *raw*
    """
    wanted = raw.strip()
    matches = [task.id for task in store.tasks if str(task.id) == wanted]
    if len(matches) > 1:
        raise AmbiguousTaskIdError(
            f"Task id '{wanted}' matches {len(matches)} tasks; fix the tasks file"
        )
    return matches[0] if matches else None
