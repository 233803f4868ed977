"""Working hours model for planwise."""

import re
from datetime import datetime, time
from typing import Tuple
from pydantic import BaseModel, Field, field_validator


_HHMM_RE = re.compile(r"^(?P<h>\d{1,2}):(?P<m>\d{2})$")


def parse_hhmm(value: str) -> time:
    """Parse an "HH:MM" string into a time.

    Args:
        value: Time string in 24h format

    Returns:
        Parsed time

    Raises:
        ValueError: If the string is not a valid 24h time
    """
    m = _HHMM_RE.match((value or "").strip())
    if not m:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hour = int(m.group("h"))
    minute = int(m.group("m"))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return time(hour=hour, minute=minute)


class WorkingHours(BaseModel):
    """Daily window in which slots may be proposed (local wall time)."""

    start: str = Field(..., description="Start of the working day, HH:MM")
    end: str = Field(..., description="End of the working day, HH:MM")

    @field_validator("start", "end")
    @classmethod
    def _validate_hhmm(cls, v):
        parse_hhmm(v)
        return v.strip()

    @classmethod
    def parse(cls, text: str) -> "WorkingHours":
        """Build from a "HH:MM-HH:MM" range string."""
        start, sep, end = (text or "").partition("-")
        if not sep:
            raise ValueError(f"Invalid working hours {text!r}, expected HH:MM-HH:MM")
        return cls(start=start.strip(), end=end.strip())

    @property
    def start_time(self) -> time:
        return parse_hhmm(self.start)

    @property
    def end_time(self) -> time:
        return parse_hhmm(self.end)

    def bounds_for(self, day: datetime) -> Tuple[datetime, datetime]:
        """Working window on the calendar day of `day`, in its timezone."""
        start = day.replace(
            hour=self.start_time.hour, minute=self.start_time.minute, second=0, microsecond=0
        )
        end = day.replace(
            hour=self.end_time.hour, minute=self.end_time.minute, second=0, microsecond=0
        )
        return start, end
