"""
Task model definitions.

Only the fields the placement engine reads are modelled here; the task CRUD
service owns the full entity.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from autoscheduler.models.enums import Priority, TaskStatus


class Task(BaseModel):
    """Pending task as handed to the scheduler."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    user_id: str = Field(..., description="Owner user ID")
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    priority: Priority = Field(Priority.MEDIUM, description="Priority (high/medium/low)")
    status: TaskStatus = Field(TaskStatus.PENDING)
    due_date: Optional[datetime] = Field(None, description="Deadline")
    planned_duration_minutes: int = Field(0, ge=0, description="Total planned work")
    actual_duration_minutes: int = Field(0, ge=0, description="Work already logged")
    blocked_by: list[UUID] = Field(
        default_factory=list,
        alias="blockedBy",
        description="Tasks that must finish before this one can start",
    )
    project_id: Optional[UUID] = Field(None, description="Owning project (None for inbox)")

    @model_validator(mode="after")
    def validate_durations(self):
        """Logged work can never exceed planned work."""
        if self.actual_duration_minutes > self.planned_duration_minutes:
            raise ValueError("actual_duration_minutes cannot exceed planned_duration_minutes")
        return self

    @property
    def remaining_minutes(self) -> int:
        return max(0, self.planned_duration_minutes - self.actual_duration_minutes)

    @property
    def has_deadline(self) -> bool:
        return self.due_date is not None
