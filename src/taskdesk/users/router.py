"""
API router for user profiles.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from taskdesk.shared.schemas import MessageResponse
from taskdesk.storage.dependencies import get_storage
from taskdesk.storage.memory import StorageProtocol
from taskdesk.users.models import User, UserRole
from taskdesk.users.schemas import UserCreate, UserUpdate
from taskdesk.users.service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_service(
    storage: Annotated[StorageProtocol, Depends(get_storage)],
) -> UserService:
    """Dependency for user service."""
    return UserService(storage)


@router.get(
    "",
    response_model=list[User],
    summary="List users",
)
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    role: Annotated[UserRole | None, Query(description="Only users with this role")] = None,
) -> list[User]:
    return service.list_users(role)


@router.get(
    "/uid/{uid}",
    response_model=User,
    summary="Get user by identity uid",
)
async def get_user_by_uid(
    uid: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.get_user_by_uid(uid)


@router.delete(
    "/uid/{uid}",
    response_model=MessageResponse,
    summary="Delete user by identity uid",
)
async def delete_user_by_uid(
    uid: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> MessageResponse:
    service.delete_user_by_uid(uid)
    return MessageResponse(message="User deleted successfully")


@router.get(
    "/{user_id}",
    response_model=User,
    summary="Get user by id",
)
async def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.get_user(user_id)


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    summary="Create user profile",
    description="Create a user profile. uid and email must be unique.",
)
async def create_user(
    payload: UserCreate,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.create_user(payload)


@router.put(
    "/{user_id}",
    response_model=User,
    summary="Update user",
    description="Partially update a user; omitted fields are left unchanged.",
)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.update_user(user_id, payload)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
)
async def delete_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> MessageResponse:
    service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
