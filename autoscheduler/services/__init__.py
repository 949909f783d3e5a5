"""Scheduling services."""

from autoscheduler.services.auto_schedule_service import AutoScheduleService
from autoscheduler.services.project_scheduling_status import check_project_scheduling_status
from autoscheduler.services.scheduling_config import build_scheduling_config

__all__ = [
    "AutoScheduleService",
    "build_scheduling_config",
    "check_project_scheduling_status",
]
