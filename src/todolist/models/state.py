"""Transient view and load-state models.

None of these are persisted; they describe what a view controller is
currently showing and how the last load went.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .task import SortKey, TaskFilter


class EditSlot(BaseModel):
    """The single in-progress edit."""

    task_id: int | str
    draft: str = ""


class ViewState(BaseModel):
    """Filter, search and sort choices of the active view."""

    filter: TaskFilter = TaskFilter.ALL
    search: str = ""
    sort_by: SortKey = SortKey.DATE

    @field_validator("filter", mode="before")
    @classmethod
    def validate_filter(cls, v) -> TaskFilter:
        return TaskFilter.parse(v)

    @field_validator("sort_by", mode="before")
    @classmethod
    def validate_sort_by(cls, v) -> SortKey:
        return SortKey.parse(v)

    @field_validator("search", mode="before")
    @classmethod
    def validate_search(cls, v) -> str:
        return "" if v is None else str(v)


class LoadReport(BaseModel):
    """Outcome of loading persisted state at startup.

    Attributes:
        loaded: Number of tasks now resident in the store
        skipped: Number of persisted records that could not be repaired
        error: Description of a malformed payload, if the whole payload was discarded
    """

    loaded: int = 0
    skipped: int = 0
    error: str | None = Field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None
