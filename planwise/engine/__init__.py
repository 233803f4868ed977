"""Scheduling engine for planwise."""

from planwise.engine.calendar_view import (
    dates_for_view,
    tasks_for_view,
    position_in_day,
    color_for_priority,
    color_for_category,
    build_month,
)
from planwise.engine.availability import is_slot_free, find_next_free_slot
from planwise.engine.scoring import score_task, score_breakdown, rank_tasks
from planwise.engine.status import is_active, is_overdue, dashboard_stats
from planwise.engine.recurrence import next_occurrence

__all__ = [
    "dates_for_view",
    "tasks_for_view",
    "position_in_day",
    "color_for_priority",
    "color_for_category",
    "build_month",
    "is_slot_free",
    "find_next_free_slot",
    "score_task",
    "score_breakdown",
    "rank_tasks",
    "is_active",
    "is_overdue",
    "dashboard_stats",
    "next_occurrence",
]
