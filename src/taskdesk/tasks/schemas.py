"""
Pydantic request schemas for task management.

``completed_at`` is accepted for compatibility with existing clients but is
always recomputed by the server (see ``taskdesk.tasks.service``).
"""

from datetime import datetime

from pydantic import Field, model_validator

from taskdesk.shared.schemas import CamelModel, reject_explicit_nulls
from taskdesk.tasks.models import TaskPriority, TaskStatus


class TaskCreate(CamelModel):
    """Schema for creating a task (server-assigned fields omitted)."""

    uid: str = Field(..., min_length=1, description="Client-generated correlation key")
    title: str = Field(..., min_length=1, max_length=500, description="Task title")
    description: str | None = Field(default="", description="Task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    assigned_to: str | None = Field(default=None, description="Assignee user uid")
    created_by: str = Field(..., min_length=1, description="Creator user uid")
    created_by_name: str = Field(..., min_length=1, description="Creator display name")
    due_date: datetime | None = None
    completed_at: datetime | None = None


class TaskUpdate(CamelModel):
    """Schema for updating a task.

    All fields are optional to support partial updates.
    """

    uid: str | None = Field(None, min_length=1)
    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: str | None = None
    created_by: str | None = Field(None, min_length=1)
    created_by_name: str | None = Field(None, min_length=1)
    due_date: datetime | None = None
    completed_at: datetime | None = None

    @model_validator(mode="after")
    def validate_required_not_null(self) -> "TaskUpdate":
        reject_explicit_nulls(
            self,
            frozenset({"uid", "title", "status", "priority", "created_by", "created_by_name"}),
        )
        return self
