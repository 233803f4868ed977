"""Tests for priority scoring and smart suggestion ranking."""

import pytest
from datetime import timedelta

from planwise.engine.scoring import (
    days_until_due,
    due_at,
    rank_tasks,
    score_breakdown,
    score_task,
    time_of_day_for,
)
from planwise.models.task import Priority, TimeOfDay


class TestTimeOfDay:
    """Test the wall-clock hour to time-of-day mapping."""

    @pytest.mark.parametrize("hour,expected", [
        (0, TimeOfDay.MORNING),
        (11, TimeOfDay.MORNING),
        (12, TimeOfDay.AFTERNOON),
        (16, TimeOfDay.AFTERNOON),
        (17, TimeOfDay.EVENING),
        (23, TimeOfDay.EVENING),
    ])
    def test_hour_boundaries(self, hour, expected):
        assert time_of_day_for(hour) == expected


class TestDueDate:
    """Test due_at() and days_until_due()."""

    def test_time_block_wins_over_reminder(self, now, make_task):
        task = make_task(scheduled_at=now + timedelta(days=2), reminder_at=now + timedelta(days=5))
        assert due_at(task) == now + timedelta(days=2)

    def test_reminder_used_without_time_block(self, now, make_task):
        task = make_task(reminder_at=now + timedelta(days=5))
        assert due_at(task) == now + timedelta(days=5)

    def test_no_due_date(self, sample_task):
        assert due_at(sample_task) is None

    def test_just_passed_is_negative(self, now):
        assert days_until_due(now - timedelta(minutes=1), now) == -1

    def test_whole_days_ahead(self, now):
        assert days_until_due(now + timedelta(days=3), now) == 3
        assert days_until_due(now + timedelta(hours=2), now) == 0


class TestScoreFactors:
    """Test each scoring factor in isolation."""

    @pytest.mark.parametrize("priority,points", [
        (Priority.CRITICAL, 100),
        (Priority.HIGH, 75),
        (Priority.MEDIUM, 50),
        (Priority.LOW, 25),
    ])
    def test_priority_weight(self, now, make_task, priority, points):
        task = make_task(priority=priority)
        assert score_breakdown(task, now, energy_level=50).priority == points

    @pytest.mark.parametrize("offset,points", [
        (timedelta(days=-3), 200),
        (timedelta(minutes=-1), 200),
        (timedelta(hours=3), 150),
        (timedelta(days=1), 100),
        (timedelta(days=2), 40),
        (timedelta(days=5), 25),
        (timedelta(days=10), 0),
        (timedelta(days=40), 0),
    ])
    def test_due_urgency(self, now, make_task, offset, points):
        task = make_task(reminder_at=now + offset)
        assert score_breakdown(task, now).due == points

    def test_no_due_date_adds_nothing(self, now, sample_task):
        assert score_breakdown(sample_task, now).due == 0

    def test_time_of_day_match(self, now, make_task):
        morning = make_task(time_of_day=TimeOfDay.MORNING)
        evening = make_task(time_of_day=TimeOfDay.EVENING)

        assert score_breakdown(morning, now).time_match == 25
        assert score_breakdown(evening, now).time_match == 0
        assert score_breakdown(evening, now.replace(hour=19)).time_match == 25

    @pytest.mark.parametrize("priority,energy,points", [
        (Priority.CRITICAL, 71, 30),
        (Priority.CRITICAL, 70, 0),
        (Priority.CRITICAL, 20, 0),
        (Priority.LOW, 39, 20),
        (Priority.LOW, 40, 0),
        (Priority.LOW, 90, 0),
        (Priority.HIGH, 100, 0),
        (Priority.MEDIUM, 0, 0),
    ])
    def test_energy_alignment(self, now, make_task, priority, energy, points):
        task = make_task(priority=priority)
        assert score_breakdown(task, now, energy_level=energy).energy == points

    @pytest.mark.parametrize("energy", [-1, 101])
    def test_rejects_energy_out_of_range(self, now, sample_task, energy):
        with pytest.raises(ValueError):
            score_task(sample_task, now, energy_level=energy)


class TestScoreTask:
    """Test that the score is the sum of its factors."""

    def test_critical_due_today_in_matching_slot(self, now, make_task):
        """Critical (100) + due today (150) + time match (25) + energy (30) = 305."""
        task = make_task(
            priority=Priority.CRITICAL,
            time_of_day=TimeOfDay.MORNING,
            scheduled_at=now + timedelta(hours=2),
        )

        breakdown = score_breakdown(task, now, energy_level=80)

        assert (breakdown.priority, breakdown.due, breakdown.time_match, breakdown.energy) == (100, 150, 25, 30)
        assert score_task(task, now, energy_level=80) == 305

    def test_total_equals_sum_of_factors(self, now, make_task):
        for priority in Priority:
            for offset in (None, -2, 0, 1, 4, 12):
                task = make_task(
                    priority=priority,
                    reminder_at=None if offset is None else now + timedelta(days=offset),
                )
                b = score_breakdown(task, now, energy_level=30)
                assert score_task(task, now, energy_level=30) == b.priority + b.due + b.time_match + b.energy


class TestRankTasks:
    """Test rank_tasks() ordering and filtering."""

    def test_sample_scenario(self, now, make_task):
        """Low morning task scores 50; Critical evening task due in 3 days scores 165."""
        task_a = make_task(title="A", priority=Priority.LOW, time_of_day=TimeOfDay.MORNING)
        task_b = make_task(
            title="B",
            priority=Priority.CRITICAL,
            time_of_day=TimeOfDay.EVENING,
            reminder_at=now + timedelta(days=3),
        )

        ranked = rank_tasks([task_a, task_b], now, energy_level=80)

        assert [s.task.id for s in ranked] == [task_b.id, task_a.id]
        assert [s.score for s in ranked] == [165, 50]

    @pytest.mark.parametrize("priority", list(Priority))
    @pytest.mark.parametrize("energy", [10, 50, 90])
    def test_overdue_outranks_not_overdue_at_same_priority(self, now, make_task, priority, energy):
        overdue = make_task(
            priority=priority,
            time_of_day=TimeOfDay.EVENING,
            reminder_at=now - timedelta(minutes=5),
        )
        due_today = make_task(
            priority=priority,
            time_of_day=TimeOfDay.MORNING,
            reminder_at=now + timedelta(hours=1),
        )

        ranked = rank_tasks([due_today, overdue], now, energy_level=energy)

        assert ranked[0].task.id == overdue.id

    def test_passed_reminder_outranks_despite_future_time_block(self, now, make_task):
        """A missed reminder counts as overdue even if the block is days away."""
        missed = make_task(
            title="X",
            reminder_at=now - timedelta(hours=2),
            scheduled_at=now + timedelta(days=5),
            scheduled_end_at=now + timedelta(days=5, hours=1),
        )
        upcoming = make_task(title="Y", reminder_at=now + timedelta(hours=1))

        ranked = rank_tasks([upcoming, missed], now)

        assert [s.task.id for s in ranked] == [missed.id, upcoming.id]
        assert ranked[0].breakdown.due == 200

    def test_stale_task_outranks_when_rule_enabled(self, now, make_task):
        stale = make_task(priority=Priority.LOW, created_at=now - timedelta(days=10))
        upcoming = make_task(priority=Priority.LOW, reminder_at=now + timedelta(hours=1))

        ranked = rank_tasks([upcoming, stale], now, stale_after_days=3)

        assert [s.task.id for s in ranked] == [stale.id, upcoming.id]
        assert ranked[0].breakdown.due == 200

    def test_stale_task_scores_nothing_when_rule_disabled(self, now, make_task):
        stale = make_task(created_at=now - timedelta(days=10))
        assert score_breakdown(stale, now).due == 0

    def test_muted_task_with_future_block_is_not_overdue(self, now, make_task):
        muted = make_task(
            is_muted=True,
            reminder_at=now - timedelta(hours=2),
            scheduled_at=now + timedelta(days=5),
        )
        assert score_breakdown(muted, now).due == 25

    def test_completed_tasks_are_excluded(self, now, make_task):
        done = make_task(priority=Priority.CRITICAL, completed_at=now - timedelta(hours=1))
        open_task = make_task(priority=Priority.LOW)

        ranked = rank_tasks([done, open_task], now)

        assert [s.task.id for s in ranked] == [open_task.id]

    def test_limit(self, now, make_task):
        tasks = [make_task(priority=p) for p in Priority]

        assert len(rank_tasks(tasks, now, limit=2)) == 2
        assert len(rank_tasks(tasks, now, limit=0)) == 0
        assert len(rank_tasks(tasks, now)) == 4

    def test_ties_broken_by_creation_then_id(self, now, make_task):
        older = make_task(id="b", created_at=now - timedelta(days=3))
        newer = make_task(id="a", created_at=now - timedelta(days=1))
        same_time_b = make_task(id="d", created_at=now - timedelta(days=2))
        same_time_a = make_task(id="c", created_at=now - timedelta(days=2))

        ranked = rank_tasks([newer, same_time_b, older, same_time_a], now)

        assert [s.task.id for s in ranked] == ["b", "c", "d", "a"]

    def test_order_does_not_depend_on_input_order(self, now, make_task):
        tasks = [
            make_task(priority=Priority.HIGH, reminder_at=now + timedelta(days=2)),
            make_task(priority=Priority.LOW, reminder_at=now - timedelta(days=1)),
            make_task(priority=Priority.MEDIUM),
            make_task(priority=Priority.CRITICAL, time_of_day=TimeOfDay.MORNING),
        ]

        forward = [s.task.id for s in rank_tasks(tasks, now)]
        backward = [s.task.id for s in rank_tasks(list(reversed(tasks)), now)]

        assert forward == backward

    def test_empty_list(self, now):
        assert rank_tasks([], now) == []
