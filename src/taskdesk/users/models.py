"""
User records and the fixed role enumeration.
"""

from datetime import datetime
from enum import Enum

from taskdesk.shared.schemas import CamelModel


class UserRole(str, Enum):
    """Newsroom roles. The set is closed."""

    ADMIN = "Admin"
    ASSIGNMENT_EDITOR = "Assignment Editor"
    HEAD_OF_DEPARTMENT = "Head of Department"
    REPORTER = "Reporter"
    CAMERAMAN = "Cameraman"

    @property
    def is_elevated(self) -> bool:
        """True for the roles that land on the administrative dashboards."""
        return self in ELEVATED_ROLES


ELEVATED_ROLES = frozenset(
    {UserRole.ADMIN, UserRole.ASSIGNMENT_EDITOR, UserRole.HEAD_OF_DEPARTMENT}
)


class User(CamelModel):
    """Application profile linking an external identity to a role."""

    id: int
    uid: str
    full_name: str
    email: str
    role: UserRole
    photo_url: str | None = ""
    fcm_token: str | None = ""
    profile_complete: bool = False
    is_active: bool = True
    last_active: datetime | None = None
    created_at: datetime
    updated_at: datetime

    def __repr__(self) -> str:
        return f"<User(id={self.id}, uid={self.uid}, role={self.role.value})>"
