"""
In-memory storage for users, tasks and admin profiles.

State lives for the lifetime of the process only. Access is single-actor:
operations are synchronous and run to completion on the event loop, so no
locking is performed.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from taskdesk.admin.models import AdminProfile
from taskdesk.shared.exceptions import ConflictError
from taskdesk.shared.logging import get_logger
from taskdesk.storage.table import Clock, MemoryTable, utcnow
from taskdesk.tasks.models import Task
from taskdesk.users.models import User

logger = get_logger(__name__)


class StorageProtocol(Protocol):
    """Protocol for storage operations used by the REST layer."""

    # Users
    def get_user(self, user_id: int) -> User | None: ...
    def get_user_by_uid(self, uid: str) -> User | None: ...
    def get_user_by_email(self, email: str) -> User | None: ...
    def create_user(self, fields: Mapping[str, Any]) -> User: ...
    def update_user(self, user_id: int, fields: Mapping[str, Any]) -> User | None: ...
    def delete_user(self, user_id: int) -> bool: ...
    def get_all_users(self) -> list[User]: ...
    def get_users_by_role(self, role: str) -> list[User]: ...

    # Tasks
    def get_task(self, task_id: int) -> Task | None: ...
    def get_task_by_uid(self, uid: str) -> Task | None: ...
    def create_task(self, fields: Mapping[str, Any]) -> Task: ...
    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> Task | None: ...
    def delete_task(self, task_id: int) -> bool: ...
    def get_all_tasks(self) -> list[Task]: ...
    def get_tasks_by_assignee(self, assigned_to: str) -> list[Task]: ...
    def get_tasks_by_creator(self, created_by: str) -> list[Task]: ...

    # Admin profiles
    def get_admin_profile(self, user_id: str) -> AdminProfile | None: ...
    def create_admin_profile(self, fields: Mapping[str, Any]) -> AdminProfile: ...
    def update_admin_profile(
        self, user_id: str, fields: Mapping[str, Any]
    ) -> AdminProfile | None: ...


def _ensure_unique(
    table: MemoryTable[Any],
    entity: str,
    field: str,
    value: Any,
    exclude_id: int | None = None,
) -> None:
    existing = table.find_first(field, value)
    if existing is not None and existing.id != exclude_id:
        logger.info(
            "Unique key conflict",
            extra={"entity": entity, "field": field},
        )
        raise ConflictError(entity, field, value)


class MemStorage:
    """Storage backed by one :class:`MemoryTable` per entity kind."""

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock
        self.users: MemoryTable[User] = MemoryTable(User, clock)
        self.tasks: MemoryTable[Task] = MemoryTable(Task, clock)
        self.admin_profiles: MemoryTable[AdminProfile] = MemoryTable(AdminProfile, clock)

    # ------------------------------------------------------------------ users

    def get_user(self, user_id: int) -> User | None:
        return self.users.get_by_id(user_id)

    def get_user_by_uid(self, uid: str) -> User | None:
        return self.users.find_first("uid", uid)

    def get_user_by_email(self, email: str) -> User | None:
        return self.users.find_first("email", email)

    def create_user(self, fields: Mapping[str, Any]) -> User:
        """Create a user.

        Raises:
            ConflictError: If the uid or email is already taken.
        """
        _ensure_unique(self.users, "User", "uid", fields.get("uid"))
        _ensure_unique(self.users, "User", "email", fields.get("email"))

        data = dict(fields)
        if data.get("last_active") is None:
            data["last_active"] = self._clock()
        return self.users.create(data)

    def update_user(self, user_id: int, fields: Mapping[str, Any]) -> User | None:
        """Merge ``fields`` onto a user; None if the id is unknown.

        Raises:
            ConflictError: If the change would duplicate another user's uid or email.
        """
        if self.users.get_by_id(user_id) is None:
            return None
        for key in ("uid", "email"):
            if key in fields:
                _ensure_unique(self.users, "User", key, fields[key], exclude_id=user_id)
        return self.users.update(user_id, fields)

    def delete_user(self, user_id: int) -> bool:
        return self.users.delete(user_id)

    def get_all_users(self) -> list[User]:
        return self.users.list_all()

    def get_users_by_role(self, role: str) -> list[User]:
        return self.users.filter_by("role", role)

    # ------------------------------------------------------------------ tasks

    def get_task(self, task_id: int) -> Task | None:
        return self.tasks.get_by_id(task_id)

    def get_task_by_uid(self, uid: str) -> Task | None:
        return self.tasks.find_first("uid", uid)

    def create_task(self, fields: Mapping[str, Any]) -> Task:
        """Create a task.

        Raises:
            ConflictError: If the uid is already taken.
        """
        _ensure_unique(self.tasks, "Task", "uid", fields.get("uid"))
        return self.tasks.create(fields)

    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> Task | None:
        if self.tasks.get_by_id(task_id) is None:
            return None
        if "uid" in fields:
            _ensure_unique(self.tasks, "Task", "uid", fields["uid"], exclude_id=task_id)
        return self.tasks.update(task_id, fields)

    def delete_task(self, task_id: int) -> bool:
        return self.tasks.delete(task_id)

    def get_all_tasks(self) -> list[Task]:
        return self.tasks.list_all()

    def get_tasks_by_assignee(self, assigned_to: str) -> list[Task]:
        return self.tasks.filter_by("assigned_to", assigned_to)

    def get_tasks_by_creator(self, created_by: str) -> list[Task]:
        return self.tasks.filter_by("created_by", created_by)

    # --------------------------------------------------------- admin profiles

    def get_admin_profile(self, user_id: str) -> AdminProfile | None:
        return self.admin_profiles.find_first("user_id", user_id)

    def create_admin_profile(self, fields: Mapping[str, Any]) -> AdminProfile:
        """Create an admin profile.

        Raises:
            ConflictError: If the user already has one.
        """
        _ensure_unique(self.admin_profiles, "Admin profile", "user_id", fields.get("user_id"))
        return self.admin_profiles.create(fields)

    def update_admin_profile(
        self, user_id: str, fields: Mapping[str, Any]
    ) -> AdminProfile | None:
        profile = self.get_admin_profile(user_id)
        if profile is None:
            return None
        if "user_id" in fields:
            _ensure_unique(
                self.admin_profiles,
                "Admin profile",
                "user_id",
                fields["user_id"],
                exclude_id=profile.id,
            )
        return self.admin_profiles.update(profile.id, fields)
