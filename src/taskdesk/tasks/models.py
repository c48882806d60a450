"""
Task records and their status/priority enumerations.
"""

from datetime import datetime
from enum import Enum

from taskdesk.shared.schemas import CamelModel


class TaskStatus(str, Enum):
    """Task lifecycle states."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(CamelModel):
    """A unit of assignable work."""

    id: int
    uid: str
    title: str
    description: str | None = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: str | None = None
    created_by: str
    created_by_name: str
    due_date: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, uid={self.uid}, status={self.status.value})>"
