"""
Demo accounts for trying the application without an identity provider.

Each demo account has a matching server-side profile (see
:func:`demo_profiles`) so the session resolves straight to ``Ready``.
"""

from dataclasses import dataclass

from taskdesk.client.override import OverrideSession, OverrideSessionStore
from taskdesk.client.routing import landing_path
from taskdesk.shared.exceptions import NotFoundError
from taskdesk.shared.logging import get_logger
from taskdesk.users.models import UserRole
from taskdesk.users.schemas import UserCreate

logger = get_logger(__name__)


@dataclass(frozen=True)
class DemoUser:
    id: str
    name: str
    email: str
    role: UserRole
    description: str
    permissions: tuple[str, ...]


DEMO_USERS: tuple[DemoUser, ...] = (
    DemoUser(
        id="admin_user",
        name="John Administrator",
        email="admin@demo.com",
        role=UserRole.ADMIN,
        description="Full system access with user management capabilities",
        permissions=(
            "Create tasks",
            "Assign tasks",
            "Manage users",
            "View all tasks",
            "Admin dashboard",
        ),
    ),
    DemoUser(
        id="reporter_user",
        name="Sarah Reporter",
        email="sarah@demo.com",
        role=UserRole.REPORTER,
        description="Create and manage reporting tasks",
        permissions=(
            "Create tasks",
            "View assigned tasks",
            "Browse task archive",
            "Update task status",
        ),
    ),
    DemoUser(
        id="cameraman_user",
        name="Mike Camera",
        email="mike@demo.com",
        role=UserRole.CAMERAMAN,
        description="Manage video production tasks",
        permissions=(
            "Create video tasks",
            "View assigned tasks",
            "Browse task archive",
            "Update task status",
        ),
    ),
    DemoUser(
        id="editor_user",
        name="Lisa Editor",
        email="lisa@demo.com",
        role=UserRole.ASSIGNMENT_EDITOR,
        description="Editorial oversight and task assignment",
        permissions=(
            "Create tasks",
            "Assign tasks",
            "Manage team tasks",
            "View all tasks",
            "Admin access",
        ),
    ),
)


def get_demo_user(demo_user_id: str) -> DemoUser:
    """Look up a demo account.

    Raises:
        NotFoundError: If no demo account has this id.
    """
    for user in DEMO_USERS:
        if user.id == demo_user_id:
            return user
    raise NotFoundError("Demo user")


def enter_demo(store: OverrideSessionStore, demo_user_id: str) -> str:
    """Persist the override session for a demo account.

    Returns:
        The path the client should navigate to next.
    """
    user = get_demo_user(demo_user_id)
    store.save(
        OverrideSession(
            demo_mode=True,
            uid=user.id,
            email=user.email,
            display_name=user.name,
        )
    )
    logger.info("Entered demo mode", extra={"uid": user.id, "role": user.role.value})
    return landing_path(user.role)


def demo_profiles() -> list[UserCreate]:
    """Server-side profiles for the demo accounts, complete and active."""
    return [
        UserCreate(
            uid=user.id,
            full_name=user.name,
            email=user.email,
            role=user.role,
            profile_complete=True,
            is_active=True,
        )
        for user in DEMO_USERS
    ]
