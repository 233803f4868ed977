"""Task data model for planwise.

Tasks are owned and persisted elsewhere; planwise only reads them.
Timestamps are parsed once here so the engine never sees raw epoch values.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class Priority(str, Enum):
    """Task priority, ordered Low < Medium < High < Critical."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TimeOfDay(str, Enum):
    """Preferred time of day for working on a task."""
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"


class RecurrenceFrequency(str, Enum):
    """How often a task repeats once completed."""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def parse_timestamp(value: Any) -> Any:
    """Accept epoch milliseconds in addition to what pydantic already parses.

    Integers and floats are read as milliseconds since the epoch (UTC).
    Anything else is handed back to pydantic's own datetime parsing.
    """
    if value is None or isinstance(value, (datetime, str)):
        return value
    if isinstance(value, bool):
        raise ValueError("timestamp must not be a boolean")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return value


def clean_text(value: Any) -> Any:
    """Replace lone UTF-16 surrogates with U+FFFD.

    JSON lets clients send them as `\\ud800` escapes, but they cannot be
    encoded back out as UTF-8.
    """
    if isinstance(value, str):
        return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return value


class Recurrence(BaseModel):
    """Repeat rule attached to a task."""

    frequency: RecurrenceFrequency = Field(RecurrenceFrequency.NONE, description="Repeat frequency")
    end_date: Optional[datetime] = Field(None, description="No occurrences after this instant")

    @field_validator("end_date", mode="before")
    @classmethod
    def _parse_end_date(cls, v):
        return parse_timestamp(v)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique task identifier")
    title: str = Field("", description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    created_at: datetime = Field(..., description="Task creation timestamp")
    completed_at: Optional[datetime] = Field(None, description="Completion timestamp (null while active)")
    reminder_at: Optional[datetime] = Field(None, description="User-set reminder timestamp")
    scheduled_at: Optional[datetime] = Field(None, description="Time block start")
    scheduled_end_at: Optional[datetime] = Field(None, description="Time block end")
    is_muted: bool = Field(False, description="Whether overdue treatment is suppressed")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority")
    category: str = Field("Personal", description="Free-form task category")
    time_of_day: TimeOfDay = Field(TimeOfDay.MORNING, description="Preferred time of day")
    duration: int = Field(30, ge=0, description="Estimated duration in minutes")
    parent_id: Optional[str] = Field(None, description="Parent task id for subtasks")
    recurrence: Optional[Recurrence] = Field(None, description="Repeat rule")

    @field_validator(
        "created_at",
        "completed_at",
        "reminder_at",
        "scheduled_at",
        "scheduled_end_at",
        mode="before",
    )
    @classmethod
    def _parse_timestamps(cls, v):
        return parse_timestamp(v)

    @field_validator("id", "title", "description", "category", "parent_id", mode="before")
    @classmethod
    def _clean_text(cls, v):
        return clean_text(v)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class OccurrenceTimes(BaseModel):
    """Timestamps of a recurring task's next occurrence."""

    reminder_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    scheduled_end_at: Optional[datetime] = None
