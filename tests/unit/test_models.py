"""
Unit tests for scheduler models.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from autoscheduler.models.auto_schedule import PlacedBlock, ScheduleReport, TaskEventBlock
from autoscheduler.models.calendar_event import CalendarEvent, TaskCalendarEvent, is_task_event
from autoscheduler.models.enums import Priority, TaskStatus
from autoscheduler.models.task import Task

BASE = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


class TestTask:
    def test_defaults(self):
        task = Task(id=uuid4(), user_id="test_user", title="Defaults")

        assert task.priority == Priority.MEDIUM
        assert task.status == TaskStatus.PENDING
        assert task.blocked_by == []
        assert not task.has_deadline
        assert task.remaining_minutes == 0

    def test_blocked_by_alias(self):
        blocker = uuid4()
        task = Task.model_validate(
            {"id": uuid4(), "user_id": "test_user", "title": "Alias", "blockedBy": [str(blocker)]}
        )

        assert task.blocked_by == [blocker]

    def test_status_values(self):
        task = Task(id=uuid4(), user_id="test_user", title="Status", status="in-progress")

        assert task.status == TaskStatus.IN_PROGRESS

    def test_actual_cannot_exceed_planned(self):
        with pytest.raises(ValidationError):
            Task(
                id=uuid4(),
                user_id="test_user",
                title="Over",
                planned_duration_minutes=30,
                actual_duration_minutes=60,
            )

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            Task(id=uuid4(), user_id="test_user", title="Negative", planned_duration_minutes=-1)

    def test_remaining_minutes(self):
        task = Task(
            id=uuid4(),
            user_id="test_user",
            title="Remaining",
            planned_duration_minutes=90,
            actual_duration_minutes=25,
        )

        assert task.remaining_minutes == 65


def test_priority_rank_order():
    assert [p.rank for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)] == [0, 1, 2]


def test_calendar_event_rejects_inverted_range():
    with pytest.raises(ValidationError):
        CalendarEvent(
            id="bad",
            user_id="test_user",
            start_time=BASE,
            end_time=BASE - timedelta(minutes=1),
        )


def test_task_event_detection():
    plain = CalendarEvent(id="plain", user_id="test_user", start_time=BASE, end_time=BASE)
    linked = TaskCalendarEvent(
        id="linked",
        user_id="test_user",
        start_time=BASE,
        end_time=BASE + timedelta(minutes=30),
        linked_task_id=uuid4(),
    )

    assert not is_task_event(plain)
    assert is_task_event(linked)
    assert not linked.is_completed
    assert linked.duration_minutes == 30


def test_report_helpers():
    task = Task(id=uuid4(), user_id="test_user", title="Report", planned_duration_minutes=90)
    blocks = [
        PlacedBlock(task_id=task.id, start=BASE, end=BASE + timedelta(hours=1)),
        PlacedBlock(
            task_id=task.id,
            start=BASE + timedelta(hours=1),
            end=BASE + timedelta(hours=1, minutes=30),
        ),
    ]
    entry = TaskEventBlock(task=task, events=blocks)
    report = ScheduleReport(task_events=[entry], total_events=2)

    assert entry.scheduled_minutes == 90
    assert entry.last_end == BASE + timedelta(hours=1, minutes=30)
    assert report.for_task(task.id) is entry
    assert report.for_task(uuid4()) is None
    assert not report.has_violations
