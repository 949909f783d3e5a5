"""
Interval packer: places the work blocks of a single task.

Walks forward from a start cursor, skipping time outside the working-hours
window and anything already busy, until the task's remaining work is covered.
Blocks that end after the due date are reported as violations; placement
never stops because of a deadline.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional

from autoscheduler.core.exceptions import SchedulingInvariantError
from autoscheduler.core.logger import setup_logger
from autoscheduler.models.auto_schedule import PlacedBlock
from autoscheduler.models.calendar_event import TaskCalendarEvent
from autoscheduler.models.enums import BusyOrigin
from autoscheduler.models.schedule import SchedulingConfig
from autoscheduler.models.task import Task
from autoscheduler.services.busy_intervals import BusyInterval, BusyIntervalSet
from autoscheduler.utils.datetime_utils import at_hour, ceil_to_slot, ensure_utc, to_local_datetime

logger = setup_logger(__name__)


@dataclass
class TaskPlacement:
    events: list[PlacedBlock] = field(default_factory=list)
    violations: list[PlacedBlock] = field(default_factory=list)


def is_deadline_violation(block_end: datetime, due_date: Optional[datetime], tz_name: str = "UTC") -> bool:
    """A block violates the deadline when it ends after the due date."""
    if due_date is None:
        return False
    return ensure_utc(block_end) > ensure_utc(to_local_datetime(due_date, tz_name))


def remaining_work_minutes(task: Task, completed_occurrences: Iterable[TaskCalendarEvent] = ()) -> float:
    """
    Minutes of work still to place for a task.

    Logged work is the larger of ``actual_duration_minutes`` and the time
    covered by completed occurrences, so work recorded either way is never
    placed twice.

    Raises:
        SchedulingInvariantError: If the task's durations are malformed
    """
    if task.planned_duration_minutes < 0:
        raise SchedulingInvariantError(
            f"Task {task.id} has negative planned duration", task_id=task.id
        )
    if task.actual_duration_minutes < 0:
        raise SchedulingInvariantError(
            f"Task {task.id} has negative actual duration", task_id=task.id
        )
    if task.actual_duration_minutes > task.planned_duration_minutes:
        raise SchedulingInvariantError(
            f"Task {task.id} has more actual than planned work", task_id=task.id
        )

    covered = sum(
        event.duration_minutes
        for event in completed_occurrences
        if event.linked_task_id == task.id and event.completed_at is not None
    )
    logged = max(float(task.actual_duration_minutes), covered)
    return max(0.0, task.planned_duration_minutes - logged)


class IntervalPacker:
    """Places blocks for one task at a time against a shared busy set."""

    def __init__(self, config: SchedulingConfig):
        self.config = config
        self.block_length = timedelta(minutes=config.block_duration_minutes)

    def _window(self, cursor: datetime) -> tuple[datetime, datetime]:
        day = cursor.date()
        return (
            at_hour(day, self.config.working_hours_start, self.config.timezone),
            at_hour(day, self.config.working_hours_end, self.config.timezone),
        )

    def align_to_working_hours(self, cursor: datetime) -> datetime:
        """
        Move the cursor into the working-hours window.

        A cursor before today's window moves to its start; a cursor at or past
        the window end, or on a non-working day, moves to the start of the next
        working day.
        """
        while True:
            window_start, window_end = self._window(cursor)
            if self.config.is_working_day(cursor.date().weekday()):
                if ensure_utc(cursor) < ensure_utc(window_start):
                    return window_start
                if ensure_utc(cursor) < ensure_utc(window_end):
                    return cursor
            next_day = cursor.date() + timedelta(days=1)
            cursor = at_hour(next_day, self.config.working_hours_start, self.config.timezone)

    def pack(
        self,
        task: Task,
        completed_occurrences: Iterable[TaskCalendarEvent],
        busy: BusyIntervalSet,
        start_cursor: datetime,
    ) -> TaskPlacement:
        """
        Place the remaining work of a task.

        Accepted blocks are inserted into ``busy`` right away, so later
        iterations and later tasks see them.

        Args:
            task: Task to place
            completed_occurrences: Completed calendar events linked to the task
            busy: Shared busy set of the run
            start_cursor: Earliest instant the task may start

        Returns:
            TaskPlacement with the placed blocks and the deadline violations
        """
        placement = TaskPlacement()
        remaining_minutes = remaining_work_minutes(task, completed_occurrences)
        if remaining_minutes <= 0:
            return placement

        tz_name = self.config.timezone
        remaining = timedelta(minutes=remaining_minutes)
        cursor = ceil_to_slot(
            to_local_datetime(start_cursor, tz_name),
            self.config.slot_granularity_minutes,
        )
        iterations = 0

        while remaining > timedelta(0):
            iterations += 1
            if iterations > self.config.max_placement_iterations:
                logger.warning(
                    f"Task {task.id}: stopped after {self.config.max_placement_iterations} "
                    f"iterations with {remaining.total_seconds() / 60:.0f} min unplaced"
                )
                break

            cursor = self.align_to_working_hours(cursor)
            _, window_end = self._window(cursor)
            # Lengths and bounds are UTC durations
            start_utc = ensure_utc(cursor)
            length = min(self.block_length, remaining, ensure_utc(window_end) - start_utc)
            candidate = BusyInterval(
                start=start_utc,
                end=start_utc + length,
                origin=BusyOrigin.PLACED_BLOCK,
                task_id=task.id,
            )

            conflicts = busy.conflicts(candidate)
            if conflicts:
                # Jump past the conflict that frees up first
                cursor = to_local_datetime(min(item.end for item in conflicts), tz_name)
                continue

            busy.insert(candidate)
            block = PlacedBlock(
                task_id=task.id,
                start=cursor,
                end=to_local_datetime(candidate.end, tz_name),
            )
            placement.events.append(block)
            if is_deadline_violation(block.end, task.due_date, tz_name):
                placement.violations.append(block)
            remaining -= length
            cursor = block.end

        return placement
