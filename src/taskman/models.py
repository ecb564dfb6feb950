"""Data models for taskman."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        """Numeric rank used for sorting (High=3, Medium=2, Low=1)."""
        return {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}[self]


class TaskFilter(str, Enum):
    """Selection of tasks by completion state."""

    ALL = "all"
    COMPLETED = "completed"
    UNCOMPLETED = "uncompleted"

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.COMPLETED:
            return task.completed
        if self is TaskFilter.UNCOMPLETED:
            return not task.completed
        return True


class SortOrder(str, Enum):
    """Priority ordering applied to a displayed selection."""

    NONE = "none"
    HIGHEST = "highest"
    LOWEST = "lowest"


class Task(BaseModel):
    """A single to-do item.

    Serialised with the ``dueDate`` key so the data file stays compatible
    with the JSON layout ``{"id", "title", "priority", "completed", "dueDate"}``.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(min_length=1)
    title: str
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    due_date: date | None = Field(default=None, alias="dueDate")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    def is_overdue(self, today: date) -> bool:
        """Whether the task is pending with a due date strictly before today."""
        return self.due_date is not None and not self.completed and self.due_date < today

    def to_record(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class Summary:
    """Task counts for the summary report."""

    total: int
    pending: int
    completed: int
