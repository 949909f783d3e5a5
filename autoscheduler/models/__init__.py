"""Pydantic models (schemas) for the scheduling engine."""

from autoscheduler.models.enums import BusyOrigin, Priority, TaskStatus
from autoscheduler.models.task import Task
from autoscheduler.models.calendar_event import (
    CalendarEvent,
    CalendarEventUnion,
    TaskCalendarEvent,
    is_task_event,
)
from autoscheduler.models.schedule import Schedule, SchedulingConfig
from autoscheduler.models.auto_schedule import (
    EventDraft,
    PlacedBlock,
    ProjectSchedulingStatus,
    ScheduleReport,
    TaskEventBlock,
)

__all__ = [
    # Enums
    "TaskStatus",
    "Priority",
    "BusyOrigin",
    # Task
    "Task",
    # Calendar
    "CalendarEvent",
    "TaskCalendarEvent",
    "CalendarEventUnion",
    "is_task_event",
    # Schedule
    "Schedule",
    "SchedulingConfig",
    # Results
    "PlacedBlock",
    "TaskEventBlock",
    "ScheduleReport",
    "EventDraft",
    "ProjectSchedulingStatus",
]
