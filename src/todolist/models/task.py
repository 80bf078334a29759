"""Task data models."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Priority(str, Enum):
    """Task priority level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort rank, most urgent first."""
        return PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: Any) -> Priority:
        """Parse a priority, falling back to MEDIUM for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MEDIUM


PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class TaskFilter(str, Enum):
    """Completion-status filter for derived views."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: Any) -> TaskFilter:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.ALL


class SortKey(str, Enum):
    """Ordering applied to derived views."""

    DATE = "date"
    PRIORITY = "priority"
    DUE_DATE = "dueDate"

    @classmethod
    def parse(cls, value: Any) -> SortKey:
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).lower() in (member.value.lower(), member.name.lower()):
                return member
        return cls.DATE


def parse_due_date(value: Any) -> date | None:
    """Coerce a persisted or user-supplied due date.

    Accepts ``date`` objects, datetimes and ISO strings. Empty or
    unparseable values yield ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        return None


class Task(BaseModel):
    """A single to-do item.

    Attributes:
        id: Identifier, unique among tasks resident in a store
        text: Display text, never empty
        completed: Completion status
        priority: Priority level
        due_date: Optional calendar due date (persisted as ``dueDate``)
        tag: Optional free-text label
        created_at: Creation time in epoch milliseconds (persisted as ``createdAt``)
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | str
    text: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: date | None = Field(default=None, alias="dueDate")
    tag: str | None = None
    created_at: int = Field(alias="createdAt")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text must not be empty")
        return v

    @field_validator("completed", mode="before")
    @classmethod
    def validate_completed(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v: Any) -> Priority:
        return Priority.parse(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Any) -> date | None:
        return parse_due_date(v)

    @field_validator("tag", mode="before")
    @classmethod
    def validate_tag(cls, v: Any) -> str | None:
        if v is None:
            return None
        v = str(v)
        return v if v.strip() else None

    @field_validator("created_at", mode="before")
    @classmethod
    def validate_created_at(cls, v: Any) -> Any:
        if isinstance(v, float):
            return int(v)
        return v

    @field_serializer("due_date")
    def serialize_due_date(self, v: date | None) -> str:
        return v.isoformat() if v else ""

    @field_serializer("tag")
    def serialize_tag(self, v: str | None) -> str:
        return v or ""

    def to_record(self) -> dict[str, Any]:
        """Return the persisted representation of this task."""
        return self.model_dump(mode="json", by_alias=True)
