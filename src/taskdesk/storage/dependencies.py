"""
FastAPI dependencies exposing the application's storage and clock.
"""

from fastapi import Request

from taskdesk.storage.memory import StorageProtocol
from taskdesk.storage.table import Clock, utcnow


def get_storage(request: Request) -> StorageProtocol:
    """Dependency for getting the storage attached to the running app."""
    return request.app.state.storage


def get_clock(request: Request) -> Clock:
    """Dependency for the clock used to stamp server-owned timestamps."""
    return getattr(request.app.state, "clock", utcnow)
