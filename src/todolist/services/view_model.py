"""Render-ready projection of a task store.

A view controller builds one of these after every change and draws it; it
never needs to reach into the store for anything else.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from todolist.models import Task, TaskFilter, ViewState
from todolist.services.task_store import TaskStore


class TaskRow(BaseModel):
    """One task as it should be displayed."""

    task: Task
    overdue: bool = False
    selected: bool = False
    editing: bool = False
    draft: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = self.task.to_record()
        data["overdue"] = self.overdue
        data["selected"] = self.selected
        return data


class TaskListViewModel(BaseModel):
    """Everything a task list screen shows."""

    state: ViewState
    rows: list[TaskRow] = Field(default_factory=list)
    total_count: int = 0
    active_count: int = 0
    completed_count: int = 0
    tags: list[str] = Field(default_factory=list)
    selected_count: int = 0
    empty_message: str | None = None

    @property
    def can_clear_completed(self) -> bool:
        return self.completed_count > 0

    @property
    def remaining_summary(self) -> str:
        noun = "task" if self.active_count == 1 else "tasks"
        return f"{self.active_count} {noun} remaining"


def empty_message(state: ViewState, total_count: int) -> str:
    """Message shown when the current view has no rows."""
    if state.search:
        return "No tasks match your search"
    if state.filter is TaskFilter.COMPLETED and total_count > 0:
        return "No completed tasks yet"
    if state.filter is TaskFilter.ACTIVE and total_count > 0:
        return "No active tasks - great job!"
    return "No tasks yet. Add one above!"


def build_view_model(store: TaskStore, state: ViewState) -> TaskListViewModel:
    """Project *store* through *state* into a TaskListViewModel."""
    slot = store.editing
    rows = [
        TaskRow(
            task=task,
            overdue=store.is_overdue(task.due_date),
            selected=store.is_selected(task.id),
            editing=slot is not None and slot.task_id == task.id,
            draft=slot.draft if slot is not None and slot.task_id == task.id else None,
        )
        for task in store.view(state)
    ]
    total = store.total_count()
    return TaskListViewModel(
        state=state,
        rows=rows,
        total_count=total,
        active_count=store.active_count(),
        completed_count=store.completed_count(),
        tags=store.all_tags(),
        selected_count=len(store.selected_ids),
        empty_message=None if rows else empty_message(state, total),
    )
