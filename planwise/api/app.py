"""FastAPI web application for planwise.

Stateless: every request carries the tasks it works on, and nothing is stored
between requests.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from planwise.config import Settings, configure_logging, get_settings
from planwise.engine.availability import find_next_free_slot, is_slot_free
from planwise.engine.calendar_view import (
    build_month,
    color_for_category,
    color_for_priority,
    dates_for_view,
    overlapping_tasks,
    position_in_day,
    tasks_for_view,
)
from planwise.engine.recurrence import next_occurrence
from planwise.engine.scoring import rank_tasks
from planwise.engine.status import dashboard_stats, overdue_tasks
from planwise.models.calendar import BlockPosition, CalendarMonth, CalendarView
from planwise.models.score import ScoredTask
from planwise.models.stats import DashboardStats
from planwise.models.task import OccurrenceTimes, Task
from planwise.models.working_hours import WorkingHours

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

configure_logging()

# Initialize FastAPI app
app = FastAPI(
    title="planwise API",
    description="Calendar views, free-slot search and smart task ranking over a task list",
    version=VERSION,
)


# Request models
class TasksRequest(BaseModel):
    """Base body: the task list to work on."""
    tasks: List[Task] = Field(default_factory=list)


class CalendarViewRequest(TasksRequest):
    reference: datetime
    view: CalendarView = CalendarView.WEEK
    week_starts_on: Optional[int] = Field(None, ge=0, le=6)


class CalendarMonthRequest(TasksRequest):
    reference: datetime
    week_starts_on: Optional[int] = Field(None, ge=0, le=6)


class SlotCheckRequest(TasksRequest):
    start: datetime
    duration_minutes: int = Field(..., ge=0)
    exclude_task_id: Optional[str] = None


class NextSlotRequest(TasksRequest):
    preferred_start: datetime
    duration_minutes: int = Field(..., ge=0)
    working_hours: Optional[WorkingHours] = None


class SuggestionsRequest(TasksRequest):
    now: Optional[datetime] = None
    energy_level: Optional[int] = Field(None, ge=0, le=100)
    limit: Optional[int] = Field(None, ge=0)


class NowRequest(TasksRequest):
    now: Optional[datetime] = None


class NextOccurrenceRequest(TasksRequest):
    completed_at: Optional[datetime] = None


# Response models
class CalendarTask(BaseModel):
    """A task as placed on a calendar view."""
    task: Task
    position: Optional[BlockPosition] = None
    priority_color: str
    category_color: str


class CalendarViewResponse(BaseModel):
    dates: List[date]
    tasks: List[CalendarTask]


class SlotCheckResponse(BaseModel):
    free: bool
    conflicts: List[str] = Field(default_factory=list, description="Ids of overlapping tasks")


class NextSlotResponse(BaseModel):
    slot: datetime
    end: datetime


class SuggestionsResponse(BaseModel):
    suggestions: List[ScoredTask]


class OverdueResponse(BaseModel):
    tasks: List[Task]


def _localize(dt: Optional[datetime], settings: Settings) -> Optional[datetime]:
    """Express a timestamp in the configured timezone, if one is set."""
    tz = settings.tzinfo
    if dt is None or tz is None:
        return dt
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def _localize_tasks(tasks: List[Task], settings: Settings) -> List[Task]:
    if settings.tzinfo is None:
        return tasks
    fields = ("created_at", "completed_at", "reminder_at", "scheduled_at", "scheduled_end_at")
    return [
        task.model_copy(update={name: _localize(getattr(task, name), settings) for name in fields})
        for task in tasks
    ]


def _now(settings: Settings) -> datetime:
    return datetime.now(settings.tzinfo) if settings.tzinfo else datetime.now()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.post("/calendar/view", response_model=CalendarViewResponse)
async def calendar_view(request: CalendarViewRequest, settings: Settings = Depends(get_settings)):
    """Dates and scheduled tasks for a day/week/month/agenda view."""
    reference = _localize(request.reference, settings)
    tasks = _localize_tasks(request.tasks, settings)
    week_starts_on = settings.week_starts_on if request.week_starts_on is None else request.week_starts_on

    try:
        dates = dates_for_view(reference, request.view, week_starts_on)
        visible = tasks_for_view(tasks, reference, request.view, week_starts_on)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    day_start = reference.replace(hour=0, minute=0, second=0, microsecond=0)
    return CalendarViewResponse(
        dates=dates,
        tasks=[
            CalendarTask(
                task=task,
                position=position_in_day(task, day_start) if request.view == CalendarView.DAY else None,
                priority_color=color_for_priority(task.priority),
                category_color=color_for_category(task.category),
            )
            for task in visible
        ],
    )


@app.post("/calendar/month", response_model=CalendarMonth)
async def calendar_month(request: CalendarMonthRequest, settings: Settings = Depends(get_settings)):
    """Month grid padded to whole weeks, with each day's tasks."""
    reference = _localize(request.reference, settings)
    week_starts_on = settings.week_starts_on if request.week_starts_on is None else request.week_starts_on
    try:
        return build_month(
            reference,
            _localize_tasks(request.tasks, settings),
            week_starts_on,
            today=_now(settings).date(),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/availability/check", response_model=SlotCheckResponse)
async def check_slot(request: SlotCheckRequest, settings: Settings = Depends(get_settings)):
    """Whether a candidate slot is free, and what it collides with."""
    start = _localize(request.start, settings)
    tasks = _localize_tasks(request.tasks, settings)
    others = [task for task in tasks if task.id != request.exclude_task_id]
    return SlotCheckResponse(
        free=is_slot_free(tasks, start, request.duration_minutes, request.exclude_task_id),
        conflicts=[task.id for task in overlapping_tasks(others, start, request.duration_minutes)],
    )


@app.post("/availability/next", response_model=NextSlotResponse)
async def next_slot(request: NextSlotRequest, settings: Settings = Depends(get_settings)):
    """Earliest free slot at or after the preferred start."""
    preferred_start = _localize(request.preferred_start, settings)
    working_hours = request.working_hours or settings.working_hours

    slot = find_next_free_slot(
        _localize_tasks(request.tasks, settings),
        preferred_start,
        request.duration_minutes,
        working_hours,
    )
    if slot is None:
        raise HTTPException(status_code=404, detail="No free slot available in the next 30 days. Pick a time manually.")

    return NextSlotResponse(slot=slot, end=slot + timedelta(minutes=request.duration_minutes))


@app.post("/suggestions", response_model=SuggestionsResponse)
async def suggestions(request: SuggestionsRequest, settings: Settings = Depends(get_settings)):
    """Active tasks ranked by priority score."""
    now = _localize(request.now, settings) or _now(settings)
    energy_level = settings.energy_level if request.energy_level is None else request.energy_level
    limit = settings.suggestion_limit if request.limit is None else request.limit

    ranked = rank_tasks(
        _localize_tasks(request.tasks, settings),
        now,
        energy_level,
        limit,
        stale_after_days=settings.stale_overdue_days,
    )
    logger.debug(f"Ranked {len(request.tasks)} tasks, returning {len(ranked)}")
    return SuggestionsResponse(suggestions=ranked)


@app.post("/tasks/overdue", response_model=OverdueResponse)
async def overdue(request: NowRequest, settings: Settings = Depends(get_settings)):
    """Active, unmuted tasks whose reminder has passed."""
    now = _localize(request.now, settings) or _now(settings)
    tasks = _localize_tasks(request.tasks, settings)
    return OverdueResponse(tasks=overdue_tasks(tasks, now, settings.stale_overdue_days))


@app.post("/dashboard", response_model=DashboardStats)
async def dashboard(request: NowRequest, settings: Settings = Depends(get_settings)):
    """Headline task statistics."""
    now = _localize(request.now, settings) or _now(settings)
    return dashboard_stats(_localize_tasks(request.tasks, settings), now)


@app.post("/tasks/{task_id}/next-occurrence", response_model=OccurrenceTimes)
async def task_next_occurrence(
    task_id: str,
    request: NextOccurrenceRequest,
    settings: Settings = Depends(get_settings),
):
    """Where a recurring task moves after completion."""
    tasks = {task.id: task for task in _localize_tasks(request.tasks, settings)}
    task = tasks.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")

    completed_at = _localize(request.completed_at, settings) or task.completed_at or _now(settings)
    times = next_occurrence(task, completed_at)
    if times is None:
        raise HTTPException(status_code=409, detail=f"Task {task_id} does not recur further")
    return times


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
