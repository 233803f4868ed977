"""Calendar view resolution for planwise.

Works out which dates a day/week/month/agenda view shows and which tasks
belong on it, plus the small layout helpers calendar screens need
(block positions, time grids, colors).
"""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Optional, Union

from planwise.engine.dates import (
    DateLike,
    align,
    as_datetime,
    check_week_starts_on,
    each_day,
    end_of_day,
    end_of_month,
    end_of_week,
    start_of_day,
    start_of_month,
    start_of_week,
)
from planwise.models.calendar import (
    BlockPosition,
    CalendarDay,
    CalendarMonth,
    CalendarView,
    CalendarWeek,
    GridSlot,
)
from planwise.models.constants import (
    AGENDA_WINDOW_DAYS,
    CATEGORY_PALETTE,
    DEFAULT_GRID_INTERVAL_MINUTES,
    DEFAULT_PRIORITY_COLOR,
    DEFAULT_WEEK_STARTS_ON,
    MINUTES_IN_DAY,
    PRIORITY_COLORS,
)
from planwise.models.task import Priority, Task
from planwise.models.working_hours import WorkingHours


ViewLike = Union[CalendarView, str]


def _view_value(view: ViewLike) -> str:
    return view.value if isinstance(view, Enum) else str(view)


def dates_for_view(
    reference: DateLike,
    view: ViewLike,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
) -> List[date]:
    """Get the ordered dates a calendar view displays.

    Args:
        reference: Date the view is centred on
        view: "day", "week", "month" or "agenda"; anything else acts like "day"
        week_starts_on: First day of the week, 0 = Sunday ... 6 = Saturday

    Returns:
        List of dates. For "month" this is the whole grid, padded with days
        from the neighbouring months so its length is a multiple of 7.
    """
    check_week_starts_on(week_starts_on)
    ref = as_datetime(reference)
    value = _view_value(view)

    if value == CalendarView.WEEK.value:
        return each_day(start_of_week(ref, week_starts_on), end_of_week(ref, week_starts_on))

    if value == CalendarView.MONTH.value:
        grid_start = start_of_week(start_of_month(ref), week_starts_on)
        grid_end = end_of_week(end_of_month(ref), week_starts_on)
        return each_day(grid_start, grid_end)

    # day, agenda and unknown views all show the single reference date
    return [ref.date()]


def _scheduled_between(tasks: List[Task], start: datetime, end: datetime) -> List[Task]:
    return [
        task for task in tasks
        if task.scheduled_at is not None
        and start <= align(task.scheduled_at, start) <= end
    ]


def tasks_for_view(
    tasks: List[Task],
    reference: DateLike,
    view: ViewLike,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
) -> List[Task]:
    """Filter tasks down to those scheduled inside a calendar view.

    Tasks without `scheduled_at` never appear on any view. The month filter
    uses the calendar month, not the padded grid; the agenda filter covers
    the 30 days following `reference`.

    Args:
        tasks: Tasks to filter
        reference: Date or datetime the view is centred on
        view: Calendar view
        week_starts_on: First day of the week, 0 = Sunday ... 6 = Saturday

    Returns:
        Tasks in their original order
    """
    check_week_starts_on(week_starts_on)
    ref = as_datetime(reference)
    value = _view_value(view)

    if value == CalendarView.DAY.value:
        return _scheduled_between(tasks, start_of_day(ref), end_of_day(ref))
    if value == CalendarView.WEEK.value:
        return _scheduled_between(tasks, start_of_week(ref, week_starts_on), end_of_week(ref, week_starts_on))
    if value == CalendarView.MONTH.value:
        return _scheduled_between(tasks, start_of_month(ref), end_of_month(ref))
    if value == CalendarView.AGENDA.value:
        return _scheduled_between(tasks, ref, ref + timedelta(days=AGENDA_WINDOW_DAYS))
    return []


def position_in_day(task: Task, day_start: DateLike) -> Optional[BlockPosition]:
    """Place a time-blocked task on a 24-hour vertical axis.

    Returns:
        BlockPosition in percent of the day, or None if the task is not time-blocked
    """
    if task.scheduled_at is None or task.scheduled_end_at is None:
        return None
    origin = as_datetime(day_start)
    start = align(task.scheduled_at, origin)
    end = align(task.scheduled_end_at, origin)

    start_minutes = (start - origin).total_seconds() / 60
    duration_minutes = (end - start).total_seconds() / 60
    return BlockPosition(
        top=start_minutes / MINUTES_IN_DAY * 100,
        height=duration_minutes / MINUTES_IN_DAY * 100,
    )


def hours_in_day(day: DateLike, working_hours: Optional[WorkingHours] = None) -> List[datetime]:
    """Hourly marks for a day, limited to working hours when given."""
    base = as_datetime(day)
    if working_hours is not None:
        start, end = working_hours.bounds_for(base)
    else:
        start, end = start_of_day(base), end_of_day(base)

    hours = []
    current = start.replace(minute=0, second=0, microsecond=0)
    while current <= end:
        hours.append(current)
        current = current + timedelta(hours=1)
    return hours


def time_grid(day: DateLike, interval_minutes: int = DEFAULT_GRID_INTERVAL_MINUTES) -> List[GridSlot]:
    """Evenly spaced labelled rows covering a whole day."""
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")
    base = as_datetime(day)
    current = start_of_day(base)
    end = end_of_day(base)

    grid = []
    while current <= end:
        grid.append(GridSlot(time=current, label=current.strftime("%H:%M")))
        current = current + timedelta(minutes=interval_minutes)
    return grid


def overlapping_tasks(tasks: List[Task], slot_start: datetime, duration_minutes: int) -> List[Task]:
    """Time-blocked tasks whose interval overlaps [slot_start, slot_start + duration)."""
    slot_end = slot_start + timedelta(minutes=duration_minutes)
    return [
        task for task in tasks
        if task.scheduled_at is not None
        and task.scheduled_end_at is not None
        and align(task.scheduled_at, slot_start) < slot_end
        and align(task.scheduled_end_at, slot_start) > slot_start
    ]


def format_time_range(start: datetime, end: datetime) -> str:
    return f"{start.strftime('%H:%M')} - {end.strftime('%H:%M')}"


def color_for_priority(priority: Union[Priority, str, None]) -> str:
    value = priority.value if isinstance(priority, Enum) else priority
    return PRIORITY_COLORS.get(value, DEFAULT_PRIORITY_COLOR)


def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def color_for_category(category: str) -> str:
    """Pick a palette color for a category name.

    Uses the classic `hash * 31 + c` string hash over UTF-16 code units with
    32-bit shift semantics, so a name maps to the same color in every process.
    """
    encoded = (category or "").encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = code_unit + (_to_int32(_to_int32(h) << 5) - h)
    return CATEGORY_PALETTE[abs(h) % len(CATEGORY_PALETTE)]


def build_month(
    reference: DateLike,
    tasks: Optional[List[Task]] = None,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
    today: Optional[date] = None,
) -> CalendarMonth:
    """Assemble a month grid with each day's scheduled tasks attached.

    Args:
        reference: Any date inside the month to build
        tasks: Tasks to place on the grid (only `scheduled_at` is used)
        week_starts_on: First day of the week, 0 = Sunday ... 6 = Saturday
        today: Date flagged as today (defaults to the current local date)

    Returns:
        CalendarMonth whose weeks each hold seven CalendarDay cells
    """
    ref = as_datetime(reference)
    today = today or date.today()
    tasks = tasks or []

    days = []
    for d in dates_for_view(ref, CalendarView.MONTH, week_starts_on):
        day_ref = datetime.combine(d, time.min, tzinfo=ref.tzinfo)
        days.append(CalendarDay(
            date=d,
            is_current_month=(d.year, d.month) == (ref.year, ref.month),
            is_today=d == today,
            tasks=tasks_for_view(tasks, day_ref, CalendarView.DAY, week_starts_on),
        ))

    weeks = [
        CalendarWeek(week_number=days[i].date.isocalendar()[1], days=days[i:i + 7])
        for i in range(0, len(days), 7)
    ]
    return CalendarMonth(year=ref.year, month=ref.month, weeks=weeks)
