"""
On-demand statistics over the current store contents.

Nothing is cached: every call reflects the store at the time of the call.
"""

from collections import Counter
from datetime import datetime

from taskdesk.stats.schemas import StatsBreakdownResponse, StatsResponse
from taskdesk.storage.memory import StorageProtocol
from taskdesk.storage.table import Clock, utcnow
from taskdesk.tasks.models import TaskPriority, TaskStatus
from taskdesk.users.models import UserRole


def compute_stats(storage: StorageProtocol) -> StatsResponse:
    users = storage.get_all_users()
    tasks = storage.get_all_tasks()

    return StatsResponse(
        total_users=len(users),
        active_tasks=sum(1 for t in tasks if t.status != TaskStatus.COMPLETED),
        pending_tasks=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        completed_tasks=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
    )


def _is_overdue(due_date: datetime | None, now: datetime) -> bool:
    if due_date is None:
        return False
    if due_date.tzinfo is None:
        # naive timestamps are taken as UTC
        return due_date < now.replace(tzinfo=None)
    return due_date < now


def compute_breakdown(storage: StorageProtocol, clock: Clock = utcnow) -> StatsBreakdownResponse:
    """Compute the analytics breakdown shown on the admin analytics page."""
    users = storage.get_all_users()
    tasks = storage.get_all_tasks()
    now = clock()

    by_status = Counter(t.status for t in tasks)
    by_priority = Counter(t.priority for t in tasks)
    by_role = Counter(u.role for u in users)

    total = len(tasks)
    completed = by_status[TaskStatus.COMPLETED]
    completion_rate = round(completed / total * 100, 1) if total else 0.0

    return StatsBreakdownResponse(
        total_tasks=total,
        in_progress_tasks=by_status[TaskStatus.IN_PROGRESS],
        overdue_tasks=sum(
            1
            for t in tasks
            if t.status != TaskStatus.COMPLETED and _is_overdue(t.due_date, now)
        ),
        active_users=sum(1 for u in users if u.is_active),
        completion_rate=completion_rate,
        by_role={role.value: by_role[role] for role in UserRole},
        by_priority={p.value: by_priority[p] for p in TaskPriority},
        by_status={s.value: by_status[s] for s in TaskStatus},
    )
