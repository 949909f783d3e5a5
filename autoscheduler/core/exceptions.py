"""
Custom exceptions for the scheduling engine.
"""

from typing import Any, Optional


class SchedulerError(Exception):
    """Base exception for autoscheduler."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(SchedulerError):
    """Validation error."""

    pass


class ConfigurationError(ValidationError):
    """Scheduling configuration is malformed (e.g. empty working-hours window)."""

    pass


class SchedulingInvariantError(ValidationError):
    """Caller broke an input invariant the engine relies on."""

    def __init__(self, message: str, task_id: Optional[Any] = None):
        super().__init__(message, details={"task_id": task_id})
        self.task_id = task_id

