"""Tests for planwise data models."""

import pytest
from datetime import datetime, time, timezone
from pydantic import ValidationError

from planwise.models.score import ScoreBreakdown
from planwise.models.task import Priority, Recurrence, Task, TimeOfDay
from planwise.models.working_hours import WorkingHours, parse_hhmm


class TestTask:
    """Test Task parsing and defaults."""

    def test_defaults(self, now):
        task = Task(id="t1", created_at=now)

        assert task.priority == Priority.MEDIUM
        assert task.time_of_day == TimeOfDay.MORNING
        assert task.category == "Personal"
        assert task.duration == 30
        assert task.completed_at is None
        assert task.is_muted is False

    def test_enums_stored_as_values(self, sample_task_base):
        task = Task(**{**sample_task_base, "priority": Priority.HIGH})
        assert task.priority == "High"
        assert task.model_dump(mode="json")["priority"] == "High"

    def test_epoch_milliseconds(self):
        task = Task(id="t1", created_at=1704877200000, reminder_at=1704880800000.0)

        assert task.created_at == datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)
        assert task.reminder_at == datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)

    def test_iso_strings(self):
        task = Task(id="t1", created_at="2024-01-10T09:00:00", scheduled_at="2024-01-10T10:00:00+00:00")

        assert task.created_at == datetime(2024, 1, 10, 9, 0)
        assert task.scheduled_at.tzinfo is not None

    def test_rejects_invalid_timestamps(self):
        with pytest.raises(ValidationError):
            Task(id="t1", created_at="not a date")
        with pytest.raises(ValidationError):
            Task(id="t1", created_at=True)

    def test_rejects_unknown_priority(self, sample_task_base):
        with pytest.raises(ValidationError):
            Task(**{**sample_task_base, "priority": "Urgent"})

    def test_rejects_negative_duration(self, sample_task_base):
        with pytest.raises(ValidationError):
            Task(**{**sample_task_base, "duration": -10})

    def test_lone_surrogates_are_replaced(self, sample_task_base):
        task = Task(**{**sample_task_base, "title": "\udc00Plan", "category": "Work\ud800"})

        assert task.title == "\ufffdPlan"
        assert task.category == "Work\ufffd"
        assert task.model_dump_json()

    def test_surrogate_pairs_are_kept(self, sample_task_base):
        task = Task(**{**sample_task_base, "title": "Launch \ud83d\ude80"})
        assert task.title == "Launch \U0001F680"

    def test_recurrence_end_date_accepts_epoch(self):
        recurrence = Recurrence(frequency="weekly", end_date=1704877200000)

        assert recurrence.frequency == "weekly"
        assert recurrence.end_date == datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


class TestWorkingHours:
    """Test WorkingHours parsing."""

    def test_parse_hhmm(self):
        assert parse_hhmm("09:30") == time(9, 30)
        assert parse_hhmm("7:05") == time(7, 5)

    @pytest.mark.parametrize("value", ["24:00", "09:60", "9", "nine", ""])
    def test_parse_hhmm_rejects(self, value):
        with pytest.raises(ValueError):
            parse_hhmm(value)

    def test_parse_range(self):
        hours = WorkingHours.parse("09:00 - 17:30")

        assert hours.start_time == time(9, 0)
        assert hours.end_time == time(17, 30)

    def test_parse_range_rejects_missing_separator(self):
        with pytest.raises(ValueError):
            WorkingHours.parse("09:00")

    def test_model_rejects_bad_time(self):
        with pytest.raises(ValidationError):
            WorkingHours(start="9am", end="17:00")

    def test_bounds_for_day(self):
        start, end = WorkingHours(start="09:00", end="17:00").bounds_for(datetime(2024, 1, 10, 13, 37, 12))

        assert start == datetime(2024, 1, 10, 9, 0)
        assert end == datetime(2024, 1, 10, 17, 0)

    def test_bounds_keep_timezone(self):
        day = datetime(2024, 1, 10, 13, 0, tzinfo=timezone.utc)
        start, _ = WorkingHours(start="09:00", end="17:00").bounds_for(day)
        assert start.tzinfo == timezone.utc


class TestScoreBreakdown:
    """Test ScoreBreakdown serialization."""

    def test_total_is_serialized(self):
        breakdown = ScoreBreakdown(priority=100, due=150, time_match=25, energy=30)

        assert breakdown.total == 305
        assert breakdown.model_dump()["total"] == 305
