"""
Calendar event models.

The calendar feed mixes manual events, events synced from Google Calendar and
events linked to tasks. Task-linked events carry ``linked_task_id``.
"""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CalendarEvent(BaseModel):
    """Manual or synced calendar event."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str = ""
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    synced_from_google: bool = Field(False, description="Imported from Google Calendar")

    @model_validator(mode="after")
    def validate_range(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self

    @property
    def duration_minutes(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 60


class TaskCalendarEvent(CalendarEvent):
    """Calendar event materialized from a task's work block."""

    linked_task_id: UUID
    completed_at: Optional[datetime] = Field(None, description="Set once the block was done")

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


CalendarEventUnion = Union[TaskCalendarEvent, CalendarEvent]


def is_task_event(event: CalendarEvent) -> bool:
    """Check whether an event is linked to a task."""
    return isinstance(event, TaskCalendarEvent)
