"""
API router for dashboard statistics.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskdesk.stats.schemas import StatsBreakdownResponse, StatsResponse
from taskdesk.stats.service import compute_breakdown, compute_stats
from taskdesk.storage.dependencies import get_clock, get_storage
from taskdesk.storage.memory import StorageProtocol
from taskdesk.storage.table import Clock

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=StatsResponse, summary="Headline counts")
async def get_stats(
    storage: Annotated[StorageProtocol, Depends(get_storage)],
) -> StatsResponse:
    return compute_stats(storage)


@router.get(
    "/breakdown",
    response_model=StatsBreakdownResponse,
    summary="Analytics breakdown",
    description="Task and user counts by role, priority and status.",
)
async def get_stats_breakdown(
    storage: Annotated[StorageProtocol, Depends(get_storage)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> StatsBreakdownResponse:
    return compute_breakdown(storage, clock)
