"""Computed calendar structures for planwise.

None of these have identity beyond the computation that produced them.
"""

from datetime import date, datetime
from enum import Enum
from typing import List
from pydantic import BaseModel, Field

from planwise.models.task import Task


class CalendarView(str, Enum):
    """Calendar view granularity."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    AGENDA = "agenda"


class BlockPosition(BaseModel):
    """Vertical placement of a time block on a 24-hour axis, in percent."""

    top: float = Field(..., description="Offset from midnight as a percentage of the day")
    height: float = Field(..., description="Block length as a percentage of the day")


class GridSlot(BaseModel):
    """One row of a day's time grid."""

    time: datetime
    label: str


class CalendarDay(BaseModel):
    """A single cell in a month grid."""

    date: date
    is_current_month: bool
    is_today: bool
    tasks: List[Task] = Field(default_factory=list)


class CalendarWeek(BaseModel):
    """A row of seven days in a month grid."""

    week_number: int = Field(..., description="ISO week number of the row's first day")
    days: List[CalendarDay]


class CalendarMonth(BaseModel):
    """A full month grid padded to whole weeks."""

    year: int
    month: int
    weeks: List[CalendarWeek]
