"""Task status predicates and dashboard analytics for planwise."""

from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from planwise.engine.dates import align, start_of_day
from planwise.models.constants import COMPLETION_RATE_WINDOW_DAYS
from planwise.models.stats import DashboardStats
from planwise.models.task import Priority, Task


_HIGH_PRIORITIES = {Priority.HIGH.value, Priority.CRITICAL.value}


def is_active(task: Task) -> bool:
    return task.completed_at is None


def is_time_blocked(task: Task) -> bool:
    return task.scheduled_at is not None and task.scheduled_end_at is not None


def is_overdue(task: Task, now: datetime, stale_after_days: Optional[int] = None) -> bool:
    """Check if a task is overdue at `now`.

    An active, unmuted task is overdue once its reminder has passed. Tasks
    without a reminder are never overdue unless `stale_after_days` is given,
    in which case they become overdue that many days after creation.

    Args:
        task: Task to check
        now: Evaluation instant
        stale_after_days: Optional age after which reminder-less tasks count as overdue

    Returns:
        True if the task is overdue
    """
    if not is_active(task) or task.is_muted:
        return False
    if task.reminder_at is not None:
        return align(task.reminder_at, now) < now
    if stale_after_days is None:
        return False
    return align(task.created_at, now) < now - timedelta(days=stale_after_days)


def _same_day(dt: Optional[datetime], now: datetime) -> bool:
    return dt is not None and align(dt, now).date() == now.date()


def is_due_today(task: Task, now: datetime) -> bool:
    """Active task whose time block or reminder falls on today's date."""
    if not is_active(task):
        return False
    return _same_day(task.scheduled_at or task.reminder_at, now)


def overdue_tasks(tasks: List[Task], now: datetime, stale_after_days: Optional[int] = None) -> List[Task]:
    return [task for task in tasks if is_overdue(task, now, stale_after_days)]


def due_today_tasks(tasks: List[Task], now: datetime) -> List[Task]:
    return [task for task in tasks if is_due_today(task, now)]


def subtasks_of(tasks: List[Task], parent_id: str) -> List[Task]:
    """Direct children of a task; the parent link is one level deep."""
    return [task for task in tasks if task.parent_id == parent_id]


def _priority_value(task: Task) -> str:
    return task.priority.value if isinstance(task.priority, Enum) else task.priority


def _completion_streak(completed: List[Task], now: datetime) -> int:
    completion_days = {align(task.completed_at, now).date() for task in completed}
    streak = 0
    day = now.date()
    while day in completion_days:
        streak += 1
        day = day - timedelta(days=1)
    return streak


def dashboard_stats(tasks: List[Task], now: datetime) -> DashboardStats:
    """Summarize a task list for the dashboard.

    Args:
        tasks: All of the user's tasks
        now: Evaluation instant; "today" is its calendar date

    Returns:
        DashboardStats
    """
    active = [task for task in tasks if is_active(task)]
    completed = [task for task in tasks if not is_active(task)]
    today_start = start_of_day(now)

    completed_today = [task for task in completed if _same_day(task.completed_at, now)]

    window_start = now - timedelta(days=COMPLETION_RATE_WINDOW_DAYS)
    recent = [task for task in tasks if align(task.created_at, now) >= window_start]
    recent_done = [task for task in recent if not is_active(task)]
    completion_rate = len(recent_done) / len(recent) * 100 if recent else 0.0

    return DashboardStats(
        total_active=len(active),
        today_tasks=len([task for task in active if _same_day(task.scheduled_at, now)]),
        today_completed=len(completed_today),
        overdue=len([
            task for task in active
            if task.scheduled_at is not None and align(task.scheduled_at, now) < today_start
        ]),
        time_spent_today=sum(task.duration or 0 for task in completed_today),
        streak=_completion_streak(completed, now),
        completion_rate=completion_rate,
        high_priority=len([task for task in active if _priority_value(task) in _HIGH_PRIORITIES]),
    )
