"""
Unit tests for check_project_scheduling_status.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from autoscheduler.models.calendar_event import CalendarEvent, TaskCalendarEvent
from autoscheduler.models.enums import TaskStatus
from autoscheduler.models.task import Task
from autoscheduler.services.project_scheduling_status import check_project_scheduling_status

BASE = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def make_task(planned=60, actual=0, due_date=None, status=TaskStatus.PENDING) -> Task:
    return Task(
        id=uuid4(),
        user_id="test_user",
        title="Project task",
        planned_duration_minutes=planned,
        actual_duration_minutes=actual,
        due_date=due_date,
        status=status,
    )


def make_task_event(task: Task, start_hour: float, hours: float, completed: bool = False):
    start = BASE + timedelta(hours=start_hour)
    end = start + timedelta(hours=hours)
    return TaskCalendarEvent(
        id=str(uuid4()),
        user_id="test_user",
        start_time=start,
        end_time=end,
        linked_task_id=task.id,
        completed_at=end if completed else None,
    )


def test_all_tasks_covered_before_deadline():
    first = make_task(planned=60, due_date=BASE + timedelta(hours=5))
    second = make_task(planned=90, actual=30)
    events = [make_task_event(first, 0, 1), make_task_event(second, 2, 1)]

    status = check_project_scheduling_status([first, second], events)

    assert status.all_tasks_scheduled
    assert not status.has_deadline_violations
    assert status.scheduled_tasks_count == 2
    assert status.incomplete_tasks_count == 2
    assert status.total_tasks_count == 2


def test_partially_covered_task_is_not_scheduled():
    task = make_task(planned=120)

    status = check_project_scheduling_status([task], [make_task_event(task, 0, 1)])

    assert not status.all_tasks_scheduled
    assert status.scheduled_tasks_count == 0


def test_event_after_deadline_is_a_violation():
    task = make_task(planned=60, due_date=BASE + timedelta(minutes=30))

    status = check_project_scheduling_status([task], [make_task_event(task, 0, 1)])

    assert status.has_deadline_violations
    assert status.scheduled_tasks_count == 1
    assert not status.all_tasks_scheduled


def test_completed_events_and_plain_events_are_ignored():
    task = make_task(planned=60)
    events = [
        make_task_event(task, 0, 1, completed=True),
        CalendarEvent(
            id="meeting",
            user_id="test_user",
            start_time=BASE,
            end_time=BASE + timedelta(hours=2),
        ),
    ]

    status = check_project_scheduling_status([task], events)

    assert status.scheduled_tasks_count == 0
    assert not status.all_tasks_scheduled


def test_completed_tasks_are_not_counted():
    done = make_task(status=TaskStatus.COMPLETED)
    pending = make_task(planned=30)

    status = check_project_scheduling_status([done, pending], [make_task_event(pending, 0, 0.5)])

    assert status.incomplete_tasks_count == 1
    assert status.total_tasks_count == 2
    assert status.all_tasks_scheduled


def test_project_without_incomplete_tasks():
    status = check_project_scheduling_status([make_task(status=TaskStatus.COMPLETED)], [])

    assert not status.all_tasks_scheduled
    assert status.incomplete_tasks_count == 0
