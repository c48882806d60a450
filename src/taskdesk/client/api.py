"""
Async REST client for the TaskDesk API.

Uses httpx. An ``httpx.AsyncClient`` may be injected (for example one built
on ``httpx.ASGITransport`` in tests); otherwise the client creates and owns
one configured from :class:`ClientSettings`.
"""

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from taskdesk.admin.models import AdminProfile
from taskdesk.admin.schemas import AdminProfileCreate
from taskdesk.client.config import ClientSettings, get_client_settings
from taskdesk.shared.correlation import inject_correlation_headers
from taskdesk.shared.exceptions import ApiError, TransportError
from taskdesk.shared.logging import get_logger
from taskdesk.stats.schemas import StatsBreakdownResponse, StatsResponse
from taskdesk.tasks.models import Task
from taskdesk.tasks.schemas import TaskCreate, TaskUpdate
from taskdesk.users.models import User, UserRole
from taskdesk.users.schemas import UserCreate, UserUpdate

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


class TaskDeskClient:
    """Client for the users, tasks, admin and stats endpoints."""

    def __init__(
        self,
        settings: ClientSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_client_settings()
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "TaskDeskClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._settings.api_base_url,
                timeout=httpx.Timeout(self._settings.request_timeout_seconds),
            )
        return self._http_client

    async def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    # ------------------------------------------------------------ transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        client = self._get_client()
        try:
            return await client.request(
                method,
                path,
                json=json,
                params=params,
                headers=inject_correlation_headers({}),
            )
        except httpx.TransportError as e:
            logger.warning(
                "API request failed",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise TransportError(details={"method": method, "path": path}) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message") if isinstance(body, dict) else None
        raise ApiError(
            response.status_code,
            message or f"Request failed with status {response.status_code}",
            details=body if isinstance(body, dict) else {},
        )

    @staticmethod
    def _parse(response: httpx.Response, path: str, parse: Callable[[Any], T]) -> T:
        """Decode a 2xx body; a body that is not the expected JSON raises ApiError."""
        try:
            return parse(response.json())
        # ValueError covers JSONDecodeError and pydantic's ValidationError
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(
                "Malformed API response",
                extra={"path": path, "status": response.status_code, "error": str(e)},
            )
            raise ApiError(
                response.status_code,
                "Malformed response body",
                details={"path": path},
            ) from e

    async def _get_one(self, path: str, model: type[M]) -> M | None:
        """GET a single record; None when the server answers 404."""
        response = await self._request("GET", path)
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return self._parse(response, path, model.model_validate)

    async def _get_many(
        self,
        path: str,
        model: type[M],
        params: dict[str, str] | None = None,
    ) -> list[M]:
        response = await self._request("GET", path, params=params)
        self._raise_for_status(response)
        return self._parse(
            response, path, lambda body: [model.model_validate(item) for item in body]
        )

    async def _send(self, method: str, path: str, body: BaseModel, model: type[M]) -> M:
        response = await self._request(
            method,
            path,
            json=body.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
        self._raise_for_status(response)
        return self._parse(response, path, model.model_validate)

    async def _delete(self, path: str) -> str:
        response = await self._request("DELETE", path)
        self._raise_for_status(response)
        return self._parse(response, path, lambda body: body["message"])

    # ---------------------------------------------------------------- users

    async def list_users(self, role: UserRole | None = None) -> list[User]:
        params = {"role": role.value} if role is not None else None
        return await self._get_many("/api/users", User, params)

    async def get_user(self, user_id: int) -> User | None:
        return await self._get_one(f"/api/users/{user_id}", User)

    async def get_user_by_uid(self, uid: str) -> User | None:
        return await self._get_one(f"/api/users/uid/{uid}", User)

    async def create_user(self, payload: UserCreate) -> User:
        return await self._send("POST", "/api/users", payload, User)

    async def update_user(self, user_id: int, payload: UserUpdate) -> User:
        return await self._send("PUT", f"/api/users/{user_id}", payload, User)

    async def delete_user(self, user_id: int) -> str:
        return await self._delete(f"/api/users/{user_id}")

    async def delete_user_by_uid(self, uid: str) -> str:
        return await self._delete(f"/api/users/uid/{uid}")

    # ---------------------------------------------------------------- tasks

    async def list_tasks(self, created_by: str | None = None) -> list[Task]:
        params = {"createdBy": created_by} if created_by is not None else None
        return await self._get_many("/api/tasks", Task, params)

    async def get_task(self, task_id: int) -> Task | None:
        return await self._get_one(f"/api/tasks/{task_id}", Task)

    async def get_task_by_uid(self, uid: str) -> Task | None:
        return await self._get_one(f"/api/tasks/uid/{uid}", Task)

    async def get_tasks_assigned_to(self, uid: str) -> list[Task]:
        return await self._get_many(f"/api/tasks/assignedTo/{uid}", Task)

    async def get_tasks_created_by(self, uid: str) -> list[Task]:
        return await self._get_many(f"/api/tasks/createdBy/{uid}", Task)

    async def create_task(self, payload: TaskCreate) -> Task:
        return await self._send("POST", "/api/tasks", payload, Task)

    async def update_task(self, task_id: int, payload: TaskUpdate) -> Task:
        return await self._send("PUT", f"/api/tasks/{task_id}", payload, Task)

    async def assign_task(self, task_id: int, assignee_uid: str | None) -> Task:
        """Set (or with None, clear) the assignee of a task."""
        return await self.update_task(task_id, TaskUpdate(assigned_to=assignee_uid))

    async def delete_task(self, task_id: int) -> str:
        return await self._delete(f"/api/tasks/{task_id}")

    # ------------------------------------------------------- admin and stats

    async def get_admin_profile(self, user_id: str) -> AdminProfile | None:
        return await self._get_one(f"/api/admin/profile/{user_id}", AdminProfile)

    async def create_admin_profile(self, payload: AdminProfileCreate) -> AdminProfile:
        return await self._send("POST", "/api/admin/profile", payload, AdminProfile)

    async def get_stats(self) -> StatsResponse:
        response = await self._request("GET", "/api/stats")
        self._raise_for_status(response)
        return self._parse(response, "/api/stats", StatsResponse.model_validate)

    async def get_stats_breakdown(self) -> StatsBreakdownResponse:
        response = await self._request("GET", "/api/stats/breakdown")
        self._raise_for_status(response)
        return self._parse(
            response, "/api/stats/breakdown", StatsBreakdownResponse.model_validate
        )
