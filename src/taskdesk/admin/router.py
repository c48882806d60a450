"""
API router for admin privilege profiles.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from taskdesk.admin.models import AdminProfile
from taskdesk.admin.schemas import AdminProfileCreate, AdminProfileUpdate
from taskdesk.admin.service import AdminProfileService
from taskdesk.storage.dependencies import get_storage
from taskdesk.storage.memory import StorageProtocol

router = APIRouter(prefix="/api/admin", tags=["admin"])


def get_admin_profile_service(
    storage: Annotated[StorageProtocol, Depends(get_storage)],
) -> AdminProfileService:
    return AdminProfileService(storage)


@router.get(
    "/profile/{user_id}",
    response_model=AdminProfile,
    summary="Get admin profile for a user",
)
async def get_admin_profile(
    user_id: str,
    service: Annotated[AdminProfileService, Depends(get_admin_profile_service)],
) -> AdminProfile:
    return service.get_profile(user_id)


@router.post(
    "/profile",
    response_model=AdminProfile,
    status_code=status.HTTP_201_CREATED,
    summary="Create admin profile",
)
async def create_admin_profile(
    payload: AdminProfileCreate,
    service: Annotated[AdminProfileService, Depends(get_admin_profile_service)],
) -> AdminProfile:
    return service.create_profile(payload)


@router.put(
    "/profile/{user_id}",
    response_model=AdminProfile,
    summary="Update admin privileges",
)
async def update_admin_profile(
    user_id: str,
    payload: AdminProfileUpdate,
    service: Annotated[AdminProfileService, Depends(get_admin_profile_service)],
) -> AdminProfile:
    return service.update_profile(user_id, payload)
