"""
Pydantic response schemas for statistics.
"""

from taskdesk.shared.schemas import CamelModel


class StatsResponse(CamelModel):
    """Headline counts for the admin dashboard."""

    total_users: int
    active_tasks: int
    pending_tasks: int
    completed_tasks: int


class StatsBreakdownResponse(CamelModel):
    """Analytics breakdown by role, priority and status."""

    total_tasks: int
    in_progress_tasks: int
    overdue_tasks: int
    active_users: int
    completion_rate: float
    by_role: dict[str, int]
    by_priority: dict[str, int]
    by_status: dict[str, int]
