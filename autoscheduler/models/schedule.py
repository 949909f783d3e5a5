"""
Working-hours models: the user's Schedule entity and the normalized
configuration the engine runs with.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Schedule(BaseModel):
    """User-defined working-hours schedule."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    user_id: Optional[str] = None
    name: str = "Default"
    working_hours_start: int = Field(9, ge=0, le=23)
    working_hours_end: int = Field(22, ge=1, le=24)
    is_default: bool = False

    @model_validator(mode="after")
    def validate_window(self):
        if self.working_hours_start >= self.working_hours_end:
            raise ValueError("working_hours_start must be before working_hours_end")
        return self


class SchedulingConfig(BaseModel):
    """
    Normalized configuration for one scheduling run.

    Built once per run by ``build_scheduling_config`` and immutable afterwards.
    """

    model_config = ConfigDict(frozen=True)

    working_hours_start: int = Field(..., ge=0, le=23)
    working_hours_end: int = Field(..., ge=1, le=24)
    block_duration_minutes: int = Field(..., ge=1, description="Size of one placed unit")
    gap_between_blocks_minutes: int = Field(
        ..., ge=0, description="Idle time between a blocker's last block and a dependent's first"
    )
    slot_granularity_minutes: int = Field(15, ge=1, le=60)
    non_working_weekdays: frozenset[int] = Field(
        default_factory=frozenset, description="Python weekday numbers (0 = Monday)"
    )
    timezone: str = "UTC"
    max_placement_iterations: int = Field(10_000, ge=1)

    @model_validator(mode="after")
    def validate_config(self):
        if self.working_hours_start >= self.working_hours_end:
            raise ValueError("working_hours_start must be before working_hours_end")
        if 60 % self.slot_granularity_minutes != 0:
            raise ValueError("slot_granularity_minutes must divide an hour")
        if any(day < 0 or day > 6 for day in self.non_working_weekdays):
            raise ValueError("non_working_weekdays must be between 0 and 6")
        if len(self.non_working_weekdays) >= 7:
            raise ValueError("at least one weekday must be workable")
        return self

    def is_working_day(self, weekday: int) -> bool:
        return weekday not in self.non_working_weekdays
