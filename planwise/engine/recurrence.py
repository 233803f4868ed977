"""Recurring task rescheduling for planwise.

When a recurring task is completed, its reminder and time block move forward
by whole recurrence steps until they land after the completion instant.
Nothing is written back; the caller decides what to do with the new times.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from planwise.engine.dates import align
from planwise.models.task import OccurrenceTimes, RecurrenceFrequency, Task

logger = logging.getLogger(__name__)


_STEPS = {
    RecurrenceFrequency.DAILY.value: relativedelta(days=1),
    RecurrenceFrequency.WEEKLY.value: relativedelta(weeks=1),
    RecurrenceFrequency.MONTHLY.value: relativedelta(months=1),
}


def _frequency_value(task: Task) -> str:
    if task.recurrence is None:
        return RecurrenceFrequency.NONE.value
    frequency = task.recurrence.frequency
    return frequency.value if isinstance(frequency, Enum) else frequency


def is_recurring(task: Task) -> bool:
    return _frequency_value(task) in _STEPS


def next_occurrence(task: Task, completed_at: datetime) -> Optional[OccurrenceTimes]:
    """Compute where a recurring task moves after being completed.

    The anchor is the task's reminder, or its time block start when it has no
    reminder. Each timestamp is shifted by the same number of steps, counted
    from the original value so month-end dates do not drift (Jan 31 -> Feb 28
    -> Mar 31).

    Args:
        task: Task that was just completed
        completed_at: Completion instant

    Returns:
        OccurrenceTimes for the next occurrence, or None if the task does not
        recur, has nothing to anchor on, or its series has ended
    """
    step = _STEPS.get(_frequency_value(task))
    if step is None:
        return None

    anchor = task.reminder_at or task.scheduled_at
    if anchor is None:
        return None
    anchor = align(anchor, completed_at)

    steps = 1
    while anchor + step * steps <= completed_at:
        steps += 1
    next_anchor = anchor + step * steps

    end_date = task.recurrence.end_date
    if end_date is not None and next_anchor > align(end_date, completed_at):
        logger.debug(f"Recurring task {task.id} ended on {end_date.isoformat()}")
        return None

    def shift(value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        return align(value, completed_at) + step * steps

    return OccurrenceTimes(
        reminder_at=shift(task.reminder_at),
        scheduled_at=shift(task.scheduled_at),
        scheduled_end_at=shift(task.scheduled_end_at),
    )
