"""
Service layer for admin privilege profiles.
"""

from taskdesk.admin.models import AdminProfile
from taskdesk.admin.schemas import AdminProfileCreate, AdminProfileUpdate
from taskdesk.shared.exceptions import NotFoundError
from taskdesk.shared.logging import get_logger
from taskdesk.storage.memory import StorageProtocol

logger = get_logger(__name__)


class AdminProfileService:
    """Service for admin profile operations."""

    def __init__(self, storage: StorageProtocol) -> None:
        self._storage = storage

    def get_profile(self, user_id: str) -> AdminProfile:
        profile = self._storage.get_admin_profile(user_id)
        if profile is None:
            raise NotFoundError("Admin profile")
        return profile

    def create_profile(self, payload: AdminProfileCreate) -> AdminProfile:
        """Create the admin profile for a user.

        Raises:
            ConflictError: If the user already has an admin profile.
        """
        profile = self._storage.create_admin_profile(payload.model_dump())
        logger.info(
            "Admin profile created",
            extra={"user_id": profile.user_id, "privileges": profile.privileges},
        )
        return profile

    def update_profile(self, user_id: str, payload: AdminProfileUpdate) -> AdminProfile:
        profile = self._storage.update_admin_profile(
            user_id, payload.model_dump(exclude_unset=True)
        )
        if profile is None:
            raise NotFoundError("Admin profile")
        logger.info(
            "Admin profile updated",
            extra={"user_id": user_id, "privileges": profile.privileges},
        )
        return profile
