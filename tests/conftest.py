"""Pytest fixtures and configuration for planwise tests."""

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
import uuid

from planwise.config import Settings, get_settings
from planwise.models.task import Task, Priority, TimeOfDay


# Wednesday 2024-01-10, 09:00 local time (Morning)
REFERENCE_NOW = datetime(2024, 1, 10, 9, 0, 0)


@pytest.fixture
def now():
    """Fixed evaluation instant so tests never depend on the wall clock."""
    return REFERENCE_NOW


@pytest.fixture
def sample_task_base(now):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "title": "Test Task",
        "description": "Test description",
        "created_at": now - timedelta(days=1),
        "completed_at": None,
        "reminder_at": None,
        "scheduled_at": None,
        "scheduled_end_at": None,
        "is_muted": False,
        "priority": Priority.MEDIUM,
        "category": "Work",
        "time_of_day": TimeOfDay.AFTERNOON,
        "duration": 30,
        "parent_id": None,
        "recurrence": None,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory for tasks: make_task(title="x", priority=Priority.HIGH, ...)."""
    def _make(**overrides):
        data = {**sample_task_base, "id": str(uuid.uuid4()), **overrides}
        return Task(**data)
    return _make


@pytest.fixture
def block_task(make_task):
    """Factory for time-blocked tasks: block_task(start, minutes)."""
    def _make(start: datetime, minutes: int, **overrides):
        return make_task(scheduled_at=start, scheduled_end_at=start + timedelta(minutes=minutes), **overrides)
    return _make


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def test_settings():
    """Settings with no timezone so naive test datetimes stay naive."""
    return Settings(week_starts_on=1, energy_level=80, suggestion_limit=6)


@pytest.fixture
def test_client(test_settings):
    """Create a FastAPI test client with overridden settings."""
    from planwise.api.app import app

    app.dependency_overrides[get_settings] = lambda: test_settings

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
