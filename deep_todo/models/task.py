"""Task data models."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = "pending"
    COMPLETED = "completed"

    def toggled(self) -> 'TaskStatus':
        """Return the opposite status."""
        if self is TaskStatus.PENDING:
            return TaskStatus.COMPLETED
        return TaskStatus.PENDING


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    """A task record as returned by the task service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("_id", "id"), min_length=1)
    text: str = Field(..., min_length=1)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("dueDate", "due_date")
    )
    category: Optional[str] = None

    @field_validator("due_date", "category", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        # Forms submit empty strings for untouched optional inputs
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING


class TaskStats(BaseModel):
    """Aggregate completion counts."""

    model_config = ConfigDict(extra="ignore")

    total: int = 0
    completed: int = 0

    @property
    def ratio(self) -> float:
        """Completed share of all tasks, 0.0 when there are none."""
        return self.completed / (self.total or 1)


@dataclass(frozen=True)
class UndoSnapshot:
    """Fields of a deleted task needed to re-create it."""
    text: str
    due_date: Optional[datetime] = None
    category: Optional[str] = None

    @classmethod
    def from_task(cls, task: Task) -> 'UndoSnapshot':
        """Capture the re-creatable fields of a task."""
        return cls(text=task.text, due_date=task.due_date, category=task.category)
