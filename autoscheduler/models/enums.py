"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Task priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, 0 for the most important level."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class BusyOrigin(str, Enum):
    """
    Where a busy interval comes from.

    EXTERNAL_EVENT = manual or synced calendar event not linked to a task
    COMPLETED_OCCURRENCE = task-linked event already marked completed
    PLACED_BLOCK = block placed earlier in the same scheduling run
    """

    EXTERNAL_EVENT = "external_event"
    COMPLETED_OCCURRENCE = "completed_occurrence"
    PLACED_BLOCK = "placed_block"
