"""Availability search for planwise.

Answers "is this window free?" and "when is the next free window?" against
the time blocks of already scheduled tasks. The search walks forward one day
at a time in fixed 15-minute steps and gives up after 30 days, which bounds
it to a few thousand probes for a single user's task list.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from planwise.engine.dates import align, end_of_day, start_of_day
from planwise.models.constants import MAX_SEARCH_DAYS, SLOT_INCREMENT_MINUTES
from planwise.models.task import Task
from planwise.models.working_hours import WorkingHours

logger = logging.getLogger(__name__)


def _check_duration(duration_minutes: int) -> None:
    if duration_minutes < 0:
        raise ValueError(f"duration_minutes must not be negative, got {duration_minutes}")


def is_slot_free(
    tasks: List[Task],
    start_time: datetime,
    duration_minutes: int,
    exclude_task_id: Optional[str] = None,
) -> bool:
    """Check whether [start_time, start_time + duration) is free.

    Only time-blocked tasks (both `scheduled_at` and `scheduled_end_at` set)
    occupy the calendar. Intervals are half-open, so a block ending exactly
    when the slot starts does not conflict.

    Args:
        tasks: Tasks to check against
        start_time: Slot start
        duration_minutes: Slot length in minutes
        exclude_task_id: Task to ignore, e.g. the one being moved

    Returns:
        True if no other task's block overlaps the slot
    """
    _check_duration(duration_minutes)
    end_time = start_time + timedelta(minutes=duration_minutes)

    for task in tasks:
        if exclude_task_id is not None and task.id == exclude_task_id:
            continue
        if task.scheduled_at is None or task.scheduled_end_at is None:
            continue
        if align(task.scheduled_at, start_time) < end_time and align(task.scheduled_end_at, start_time) > start_time:
            return False
    return True


def find_next_free_slot(
    tasks: List[Task],
    preferred_start: datetime,
    duration_minutes: int,
    working_hours: Optional[WorkingHours] = None,
) -> Optional[datetime]:
    """Find the earliest free slot at or after `preferred_start`.

    For each of the next 30 days the searchable window is the whole day,
    narrowed to `working_hours` when given. On the first day the window never
    starts before `preferred_start`. Candidates are probed every 15 minutes
    from the window start; a candidate is accepted only if the full duration
    fits before the window ends.

    Args:
        tasks: Existing tasks whose time blocks are occupied
        preferred_start: Earliest acceptable start
        duration_minutes: Required slot length in minutes
        working_hours: Optional daily window (local wall time)

    Returns:
        Start of the first free slot, or None if none exists within 30 days
    """
    _check_duration(duration_minutes)
    slot_length = timedelta(minutes=duration_minutes)
    increment = timedelta(minutes=SLOT_INCREMENT_MINUTES)

    current = preferred_start
    for day in range(MAX_SEARCH_DAYS):
        search_start = start_of_day(current)
        search_end = end_of_day(current)

        if working_hours is not None:
            work_start, work_end = working_hours.bounds_for(current)
            search_start = max(search_start, work_start)
            search_end = min(search_end, work_end)

        if day == 0:
            search_start = max(search_start, preferred_start)

        candidate = search_start
        while candidate + slot_length <= search_end:
            if is_slot_free(tasks, candidate, duration_minutes):
                logger.debug(f"Found free {duration_minutes}-minute slot at {candidate.isoformat()}")
                return candidate
            candidate = candidate + increment

        current = current + timedelta(days=1)

    logger.info(
        f"No free {duration_minutes}-minute slot within {MAX_SEARCH_DAYS} days of {preferred_start.isoformat()}"
    )
    return None
