"""
API router for tasks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from taskdesk.shared.schemas import MessageResponse
from taskdesk.storage.dependencies import get_clock, get_storage
from taskdesk.storage.memory import StorageProtocol
from taskdesk.storage.table import Clock
from taskdesk.tasks.models import Task
from taskdesk.tasks.schemas import TaskCreate, TaskUpdate
from taskdesk.tasks.service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_task_service(
    storage: Annotated[StorageProtocol, Depends(get_storage)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> TaskService:
    """Dependency for task service."""
    return TaskService(storage, clock=clock)


@router.get(
    "",
    response_model=list[Task],
    summary="List tasks",
)
async def list_tasks(
    service: Annotated[TaskService, Depends(get_task_service)],
    created_by: Annotated[
        str | None,
        Query(alias="createdBy", description="Only tasks created by this uid"),
    ] = None,
) -> list[Task]:
    return service.list_tasks(created_by)


@router.get(
    "/assignedTo/{uid}",
    response_model=list[Task],
    summary="List tasks assigned to a user",
)
async def list_assigned_tasks(
    uid: str,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> list[Task]:
    return service.list_assigned_to(uid)


@router.get(
    "/createdBy/{uid}",
    response_model=list[Task],
    summary="List tasks created by a user",
)
async def list_created_tasks(
    uid: str,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> list[Task]:
    return service.list_created_by(uid)


@router.get(
    "/uid/{uid}",
    response_model=Task,
    summary="Get task by uid",
)
async def get_task_by_uid(
    uid: str,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Task:
    return service.get_task_by_uid(uid)


@router.get(
    "/{task_id}",
    response_model=Task,
    summary="Get task by id",
)
async def get_task(
    task_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Task:
    return service.get_task(task_id)


@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    description="Create a task. completedAt is assigned by the server from the status.",
)
async def create_task(
    payload: TaskCreate,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Task:
    return service.create_task(payload)


@router.put(
    "/{task_id}",
    response_model=Task,
    summary="Update task",
    description="Partially update a task; omitted fields are left unchanged.",
)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Task:
    return service.update_task(task_id, payload)


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete task",
)
async def delete_task(
    task_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> MessageResponse:
    service.delete_task(task_id)
    return MessageResponse(message="Task deleted successfully")
