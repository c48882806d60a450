"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from taskdesk.config import Settings
from taskdesk.main import create_app
from taskdesk.storage.memory import MemStorage


class TickingClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        self.calls += 1
        return current


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def storage(clock: TickingClock) -> MemStorage:
    """Fresh in-memory storage per test."""
    return MemStorage(clock)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        app_env="dev",
        debug=True,
        log_level="DEBUG",
        cors_origins="http://localhost:5173",
        seed_demo_users=False,
    )


@pytest.fixture
def app(storage: MemStorage, test_settings: Settings, clock: TickingClock) -> FastAPI:
    return create_app(storage=storage, settings=test_settings, clock=clock)


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def user_payload() -> dict[str, Any]:
    """Valid user creation body (camelCase, as sent by the web client)."""
    return {
        "uid": "firebase-uid-sarah",
        "fullName": "Sarah Reporter",
        "email": "sarah@example.com",
        "role": "Reporter",
        "profileComplete": True,
    }


@pytest.fixture
def admin_payload() -> dict[str, Any]:
    return {
        "uid": "firebase-uid-john",
        "fullName": "John Administrator",
        "email": "john@example.com",
        "role": "Admin",
        "profileComplete": True,
    }


@pytest.fixture
def task_payload() -> dict[str, Any]:
    """Valid task creation body."""
    return {
        "uid": "task-0001",
        "title": "Cover city council meeting",
        "description": "Budget vote at 6pm",
        "priority": "high",
        "assignedTo": "firebase-uid-sarah",
        "createdBy": "firebase-uid-john",
        "createdByName": "John Administrator",
    }
