"""
Auto-schedule result models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from autoscheduler.models.task import Task


class PlacedBlock(BaseModel):
    """A contiguous block of work placed for one task."""

    model_config = ConfigDict(frozen=True)

    task_id: UUID
    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60


class TaskEventBlock(BaseModel):
    """Placement result for a single task."""

    task: Task
    events: list[PlacedBlock] = Field(default_factory=list)
    violations: list[PlacedBlock] = Field(
        default_factory=list, description="Placed blocks that end after the task's due date"
    )
    earliest_start: Optional[datetime] = Field(
        None, description="Cursor handed to the packer after dependency gating"
    )
    unresolved_blocker_ids: list[UUID] = Field(
        default_factory=list, description="Blockers that were not scheduled in this run"
    )

    @property
    def scheduled_minutes(self) -> float:
        return sum(block.duration_minutes for block in self.events)

    @property
    def last_end(self) -> Optional[datetime]:
        return self.events[-1].end if self.events else None


class ScheduleReport(BaseModel):
    """Full result of one auto-schedule run."""

    task_events: list[TaskEventBlock] = Field(default_factory=list)
    total_events: int = 0
    total_violations: int = 0
    tasks_with_deadline_count: int = 0
    tasks_without_deadline_count: int = 0
    base_start: Optional[datetime] = None
    generated_at: Optional[datetime] = Field(None, description="The frozen 'now' of the run")
    dependency_cycles: list[list[UUID]] = Field(default_factory=list)

    @property
    def has_violations(self) -> bool:
        return self.total_violations > 0

    def for_task(self, task_id: UUID) -> Optional[TaskEventBlock]:
        return next((entry for entry in self.task_events if entry.task.id == task_id), None)


class EventDraft(BaseModel):
    """Calendar event payload to create when a report is applied."""

    title: str
    start_time: datetime
    end_time: datetime
    description: Optional[str] = None
    linked_task_id: UUID
    user_id: str


class ProjectSchedulingStatus(BaseModel):
    """Whether every incomplete task of a project is covered before its deadline."""

    all_tasks_scheduled: bool
    has_deadline_violations: bool
    incomplete_tasks_count: int
    scheduled_tasks_count: int
    total_tasks_count: int
