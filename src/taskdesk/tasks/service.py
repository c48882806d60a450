"""
Service layer for tasks.

The server owns ``completed_at``: it is stamped when a task enters the
``completed`` status, cleared when it leaves it, and any caller-supplied
value is discarded. Hence ``completed_at`` is set iff ``status == completed``.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from taskdesk.shared.exceptions import NotFoundError
from taskdesk.shared.logging import get_logger
from taskdesk.storage.memory import StorageProtocol
from taskdesk.storage.table import Clock, utcnow
from taskdesk.tasks.models import Task, TaskStatus
from taskdesk.tasks.schemas import TaskCreate, TaskUpdate

logger = get_logger(__name__)


def apply_completion_policy(
    changes: Mapping[str, Any],
    current: Task | None,
    now: datetime,
) -> dict[str, Any]:
    """Return ``changes`` with ``completed_at`` derived from the resulting status.

    Args:
        changes: Fields about to be written (create payload or patch).
        current: The stored task for updates, None for creates.
        now: Timestamp to use when the task becomes completed.
    """
    result = dict(changes)
    result.pop("completed_at", None)

    if "status" in result:
        status = result["status"]
    elif current is not None:
        status = current.status
    else:
        status = TaskStatus.PENDING

    already_completed = (
        current is not None
        and current.status == TaskStatus.COMPLETED
        and current.completed_at is not None
    )

    if status == TaskStatus.COMPLETED:
        if not already_completed:
            result["completed_at"] = now
    elif current is None or current.completed_at is not None:
        result["completed_at"] = None

    return result


class TaskService:
    """Service for task operations."""

    def __init__(self, storage: StorageProtocol, clock: Clock = utcnow) -> None:
        self._storage = storage
        self._clock = clock

    def list_tasks(self, created_by: str | None = None) -> list[Task]:
        if created_by is not None:
            return self._storage.get_tasks_by_creator(created_by)
        return self._storage.get_all_tasks()

    def list_assigned_to(self, uid: str) -> list[Task]:
        return self._storage.get_tasks_by_assignee(uid)

    def list_created_by(self, uid: str) -> list[Task]:
        return self._storage.get_tasks_by_creator(uid)

    def get_task(self, task_id: int) -> Task:
        task = self._storage.get_task(task_id)
        if task is None:
            raise NotFoundError("Task")
        return task

    def get_task_by_uid(self, uid: str) -> Task:
        task = self._storage.get_task_by_uid(uid)
        if task is None:
            raise NotFoundError("Task")
        return task

    def create_task(self, payload: TaskCreate) -> Task:
        """Create a task.

        Raises:
            ConflictError: If the task uid is already taken.
        """
        fields = apply_completion_policy(payload.model_dump(), None, self._clock())
        task = self._storage.create_task(fields)
        logger.info(
            "Task created",
            extra={
                "task_id": task.id,
                "uid": task.uid,
                "created_by": task.created_by,
                "assigned_to": task.assigned_to,
            },
        )
        return task

    def update_task(self, task_id: int, payload: TaskUpdate) -> Task:
        """Apply the fields present in ``payload`` to a task.

        Raises:
            NotFoundError: If no task has this id.
            ConflictError: If the change would duplicate a task uid.
        """
        current = self.get_task(task_id)
        changes = apply_completion_policy(
            payload.model_dump(exclude_unset=True), current, self._clock()
        )
        task = self._storage.update_task(task_id, changes)
        if task is None:
            raise NotFoundError("Task")

        logger.info(
            "Task updated",
            extra={
                "task_id": task_id,
                "fields": sorted(changes),
                "status": task.status.value,
            },
        )
        return task

    def delete_task(self, task_id: int) -> None:
        if not self._storage.delete_task(task_id):
            raise NotFoundError("Task")
        logger.info("Task deleted", extra={"task_id": task_id})
