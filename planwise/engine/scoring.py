"""Priority scoring for planwise smart suggestions.

The score is the sum of four independent factors:
1. Priority weight (Critical 100, High 75, Medium 50, Low 25)
2. Due-date urgency (overdue 200, today 150, tomorrow 100, then decaying)
3. Time-of-day match with the current wall clock (+25)
4. Energy alignment (Critical at high energy +30, Low at low energy +20)

The weights make anything overdue outrank anything that is not, at equal
priority, and let an overdue Low task beat a Critical task due next week.
"""

import math
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from planwise.engine.dates import align
from planwise.engine.status import is_active, is_overdue
from planwise.models.constants import (
    AFTERNOON_START_HOUR,
    DEFAULT_ENERGY_LEVEL,
    DEFAULT_PRIORITY_WEIGHT,
    DUE_LATER_BASE,
    DUE_LATER_DECAY_PER_DAY,
    DUE_TODAY_BONUS,
    DUE_TOMORROW_BONUS,
    EVENING_START_HOUR,
    HIGH_ENERGY_CRITICAL_BONUS,
    HIGH_ENERGY_THRESHOLD,
    LOW_ENERGY_LOW_PRIORITY_BONUS,
    LOW_ENERGY_THRESHOLD,
    OVERDUE_BONUS,
    PRIORITY_WEIGHTS,
    TIME_OF_DAY_MATCH_BONUS,
)
from planwise.models.score import ScoreBreakdown, ScoredTask
from planwise.models.task import Priority, Task, TimeOfDay


def _enum_value(value) -> Optional[str]:
    return value.value if isinstance(value, Enum) else value


def time_of_day_for(hour: int) -> TimeOfDay:
    """Map a wall-clock hour to Morning (<12), Afternoon (12-16) or Evening (>=17)."""
    if hour < AFTERNOON_START_HOUR:
        return TimeOfDay.MORNING
    if hour < EVENING_START_HOUR:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


def due_at(task: Task) -> Optional[datetime]:
    """The instant a task is due: its time block start, else its reminder."""
    return task.scheduled_at or task.reminder_at


def days_until_due(due: datetime, now: datetime) -> int:
    """Signed whole days from now until due, rounded down.

    Anything already past is negative, so "overdue" never collapses into
    "due today". Truncating toward zero instead would score the last 24
    hours before now as due today.
    """
    return math.floor((align(due, now) - now) / timedelta(days=1))


def _priority_points(task: Task) -> int:
    return PRIORITY_WEIGHTS.get(_enum_value(task.priority), DEFAULT_PRIORITY_WEIGHT)


def _due_points(task: Task, now: datetime, stale_after_days: Optional[int] = None) -> int:
    # overdue even when the time block lies ahead
    if is_overdue(task, now, stale_after_days):
        return OVERDUE_BONUS
    due = due_at(task)
    if due is None:
        return 0
    days = days_until_due(due, now)
    if days < 0:
        return OVERDUE_BONUS
    if days == 0:
        return DUE_TODAY_BONUS
    if days == 1:
        return DUE_TOMORROW_BONUS
    return max(0, DUE_LATER_BASE - DUE_LATER_DECAY_PER_DAY * days)


def _time_match_points(task: Task, now: datetime) -> int:
    if _enum_value(task.time_of_day) == time_of_day_for(now.hour).value:
        return TIME_OF_DAY_MATCH_BONUS
    return 0


def _energy_points(task: Task, energy_level: int) -> int:
    priority = _enum_value(task.priority)
    if priority == Priority.CRITICAL.value and energy_level > HIGH_ENERGY_THRESHOLD:
        return HIGH_ENERGY_CRITICAL_BONUS
    if priority == Priority.LOW.value and energy_level < LOW_ENERGY_THRESHOLD:
        return LOW_ENERGY_LOW_PRIORITY_BONUS
    return 0


def _check_energy_level(energy_level: int) -> None:
    if not 0 <= energy_level <= 100:
        raise ValueError(f"energy_level must be between 0 and 100, got {energy_level}")


def score_breakdown(
    task: Task,
    now: datetime,
    energy_level: int = DEFAULT_ENERGY_LEVEL,
    stale_after_days: Optional[int] = None,
) -> ScoreBreakdown:
    """Compute each scoring factor for a task.

    Args:
        task: Task to score
        now: Evaluation instant (its wall-clock hour drives the time-of-day match)
        energy_level: User's reported energy, 0-100
        stale_after_days: Optional age after which reminder-less tasks count as overdue

    Returns:
        ScoreBreakdown whose total is the task's score
    """
    _check_energy_level(energy_level)
    return ScoreBreakdown(
        priority=_priority_points(task),
        due=_due_points(task, now, stale_after_days),
        time_match=_time_match_points(task, now),
        energy=_energy_points(task, energy_level),
    )


def score_task(
    task: Task,
    now: datetime,
    energy_level: int = DEFAULT_ENERGY_LEVEL,
    stale_after_days: Optional[int] = None,
) -> int:
    return score_breakdown(task, now, energy_level, stale_after_days).total


def rank_tasks(
    tasks: List[Task],
    now: datetime,
    energy_level: int = DEFAULT_ENERGY_LEVEL,
    limit: Optional[int] = None,
    stale_after_days: Optional[int] = None,
) -> List[ScoredTask]:
    """Rank active tasks for the smart suggestions list.

    Completed tasks are dropped. Ties on score are broken by creation time
    (oldest first), then by id, so the order never depends on input order.

    Args:
        tasks: Candidate tasks
        now: Evaluation instant
        energy_level: User's reported energy, 0-100
        limit: Keep only the first N results (None keeps all)
        stale_after_days: Optional age after which reminder-less tasks count as overdue

    Returns:
        ScoredTask list, highest score first
    """
    _check_energy_level(energy_level)
    scored = []
    for task in tasks:
        if not is_active(task):
            continue
        breakdown = score_breakdown(task, now, energy_level, stale_after_days)
        scored.append(ScoredTask(task=task, score=breakdown.total, breakdown=breakdown))

    scored.sort(key=lambda s: (-s.score, s.task.created_at.timestamp(), s.task.id))
    if limit is not None:
        scored = scored[:max(0, limit)]
    return scored
