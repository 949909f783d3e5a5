"""
Dependency gate: earliest permissible start for a task.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Mapping
from uuid import UUID

from autoscheduler.models.task import Task
from autoscheduler.utils.datetime_utils import ensure_utc


@dataclass
class GateResult:
    earliest_start: datetime
    unresolved_blocker_ids: list[UUID] = field(default_factory=list)


class DependencyGate:
    """
    Pushes a task's start past the last block of every scheduled blocker.

    Blockers without an entry in the latest-end map (outside the batch,
    filtered out, never placed, or part of a cycle) are ignored and reported
    as unresolved. The gate is best-effort, not a hard guarantee.
    """

    def __init__(self, gap_between_blocks_minutes: int):
        self.gap = timedelta(minutes=gap_between_blocks_minutes)

    def earliest_start(
        self,
        task: Task,
        latest_end_by_task: Mapping[UUID, datetime],
        base_cursor: datetime,
    ) -> GateResult:
        """
        Compute the earliest start for a task.

        Args:
            task: Task being scheduled
            latest_end_by_task: Last block end per task placed so far in this run
            base_cursor: Shared start cursor of the run

        Returns:
            GateResult with the start instant and the ignored blockers
        """
        start = base_cursor
        unresolved: list[UUID] = []
        for blocker_id in dict.fromkeys(task.blocked_by):
            blocker_end = latest_end_by_task.get(blocker_id)
            if blocker_end is None:
                unresolved.append(blocker_id)
                continue
            start = max(start, ensure_utc(blocker_end) + self.gap, key=ensure_utc)
        return GateResult(earliest_start=start, unresolved_blocker_ids=unresolved)
