"""Date helpers shared by the planwise engine.

Day boundaries are taken in the wall time of the reference datetime. When a
task timestamp carries a different timezone it is converted first, so that
"same day" means the same day as the caller sees it.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Union


DateLike = Union[date, datetime]


def as_datetime(value: DateLike) -> datetime:
    """Promote a date to midnight; datetimes pass through unchanged."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def align(dt: datetime, reference: datetime) -> datetime:
    """Express `dt` in the same timezone convention as `reference`.

    - both aware: convert to the reference's timezone
    - aware reference, naive dt: dt is assumed to already be in that timezone
    - naive reference, aware dt: convert to local time and drop tzinfo
    """
    if reference.tzinfo is not None:
        if dt.tzinfo is None:
            return dt.replace(tzinfo=reference.tzinfo)
        return dt.astimezone(reference.tzinfo)
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=999999)


def js_weekday(d: date) -> int:
    """Weekday with Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def check_week_starts_on(week_starts_on: int) -> None:
    if not 0 <= week_starts_on <= 6:
        raise ValueError(f"week_starts_on must be between 0 and 6, got {week_starts_on}")


def start_of_week(dt: datetime, week_starts_on: int) -> datetime:
    check_week_starts_on(week_starts_on)
    offset = (js_weekday(dt.date()) - week_starts_on) % 7
    return start_of_day(dt) - timedelta(days=offset)


def end_of_week(dt: datetime, week_starts_on: int) -> datetime:
    return end_of_day(start_of_week(dt, week_starts_on) + timedelta(days=6))


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(dt.replace(day=1))


def end_of_month(dt: datetime) -> datetime:
    last_day = calendar.monthrange(dt.year, dt.month)[1]
    return end_of_day(dt.replace(day=last_day))


def each_day(start: datetime, end: datetime) -> List[date]:
    """Every calendar date from start to end, inclusive."""
    days = []
    current = start.date()
    while current <= end.date():
        days.append(current)
        current = current + timedelta(days=1)
    return days
