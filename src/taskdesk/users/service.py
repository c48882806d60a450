"""
Service layer for user profiles.
"""

from taskdesk.shared.exceptions import NotFoundError
from taskdesk.shared.logging import get_logger
from taskdesk.storage.memory import StorageProtocol
from taskdesk.users.models import User, UserRole
from taskdesk.users.schemas import UserCreate, UserUpdate

logger = get_logger(__name__)


class UserService:
    """Service for user management operations."""

    def __init__(self, storage: StorageProtocol) -> None:
        """Initialize service with a storage backend.

        Args:
            storage: Storage holding user records.
        """
        self._storage = storage

    def list_users(self, role: UserRole | None = None) -> list[User]:
        """List all users, optionally restricted to one role."""
        if role is not None:
            return self._storage.get_users_by_role(role.value)
        return self._storage.get_all_users()

    def get_user(self, user_id: int) -> User:
        """Get a user by numeric id.

        Raises:
            NotFoundError: If no user has this id.
        """
        user = self._storage.get_user(user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    def get_user_by_uid(self, uid: str) -> User:
        """Get a user by external identity key.

        Raises:
            NotFoundError: If no user has this uid.
        """
        user = self._storage.get_user_by_uid(uid)
        if user is None:
            logger.debug("User lookup by uid missed", extra={"uid": uid})
            raise NotFoundError("User")
        return user

    def create_user(self, payload: UserCreate) -> User:
        """Create a user profile.

        Raises:
            ConflictError: If the uid or email is already registered.
        """
        user = self._storage.create_user(payload.model_dump())
        logger.info(
            "User created",
            extra={"user_id": user.id, "uid": user.uid, "role": user.role.value},
        )
        return user

    def update_user(self, user_id: int, payload: UserUpdate) -> User:
        """Apply the fields present in ``payload`` to a user.

        Raises:
            NotFoundError: If no user has this id.
            ConflictError: If the change would duplicate a uid or email.
        """
        changes = payload.model_dump(exclude_unset=True)
        user = self._storage.update_user(user_id, changes)
        if user is None:
            raise NotFoundError("User")
        logger.info(
            "User updated",
            extra={"user_id": user_id, "fields": sorted(changes)},
        )
        return user

    def delete_user(self, user_id: int) -> None:
        """Delete a user by id.

        Raises:
            NotFoundError: If no user has this id.
        """
        if not self._storage.delete_user(user_id):
            raise NotFoundError("User")
        logger.info("User deleted", extra={"user_id": user_id})

    def delete_user_by_uid(self, uid: str) -> None:
        """Delete a user by external identity key.

        Raises:
            NotFoundError: If no user has this uid.
        """
        user = self.get_user_by_uid(uid)
        self.delete_user(user.id)
