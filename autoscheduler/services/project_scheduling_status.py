"""
Project scheduling status.

Checks whether every incomplete task of a project already has enough pending
calendar time, and whether any of it sits after the task's deadline.
"""

from typing import Sequence
from uuid import UUID

from autoscheduler.models.auto_schedule import ProjectSchedulingStatus
from autoscheduler.models.calendar_event import CalendarEventUnion, TaskCalendarEvent, is_task_event
from autoscheduler.models.enums import TaskStatus
from autoscheduler.models.task import Task
from autoscheduler.services.interval_packer import is_deadline_violation
from autoscheduler.utils.datetime_utils import ensure_utc


def check_project_scheduling_status(
    project_tasks: Sequence[Task],
    all_calendar_events: Sequence[CalendarEventUnion],
) -> ProjectSchedulingStatus:
    """
    Check if all tasks in a project are scheduled within their deadlines.

    Args:
        project_tasks: All tasks belonging to the project
        all_calendar_events: All calendar events (task events are picked out)

    Returns:
        ProjectSchedulingStatus for the project
    """
    pending_events_by_task: dict[UUID, list[TaskCalendarEvent]] = {}
    for event in all_calendar_events:
        if not is_task_event(event) or event.completed_at is not None:
            continue
        pending_events_by_task.setdefault(event.linked_task_id, []).append(event)

    incomplete_tasks = [task for task in project_tasks if task.status != TaskStatus.COMPLETED]

    scheduled_tasks_count = 0
    has_deadline_violations = False
    for task in incomplete_tasks:
        events = pending_events_by_task.get(task.id, [])
        scheduled_minutes = sum(event.duration_minutes for event in events)
        if scheduled_minutes >= task.remaining_minutes:
            scheduled_tasks_count += 1

        if any(
            is_deadline_violation(ensure_utc(event.end_time), task.due_date)
            for event in events
        ):
            has_deadline_violations = True

    all_tasks_scheduled = (
        len(incomplete_tasks) > 0
        and scheduled_tasks_count == len(incomplete_tasks)
        and not has_deadline_violations
    )

    return ProjectSchedulingStatus(
        all_tasks_scheduled=all_tasks_scheduled,
        has_deadline_violations=has_deadline_violations,
        incomplete_tasks_count=len(incomplete_tasks),
        scheduled_tasks_count=scheduled_tasks_count,
        total_tasks_count=len(project_tasks),
    )
