"""Data models for planwise."""

from planwise.models.task import Task, Priority, TimeOfDay, Recurrence, RecurrenceFrequency, OccurrenceTimes
from planwise.models.working_hours import WorkingHours

__all__ = [
    "Task",
    "Priority",
    "TimeOfDay",
    "Recurrence",
    "RecurrenceFrequency",
    "OccurrenceTimes",
    "WorkingHours",
]
