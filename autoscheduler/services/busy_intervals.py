"""
Busy interval bookkeeping for a scheduling run.

Holds every time range a new block must not overlap: calendar events that are
not linked to tasks, task occurrences already completed, and blocks placed
earlier in the same run.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional
from uuid import UUID

from autoscheduler.core.logger import setup_logger
from autoscheduler.models.calendar_event import CalendarEventUnion, is_task_event
from autoscheduler.models.enums import BusyOrigin
from autoscheduler.models.schedule import SchedulingConfig
from autoscheduler.utils.datetime_utils import ensure_utc, to_local_datetime

logger = setup_logger(__name__)


@dataclass(frozen=True, order=True)
class BusyInterval:
    """Half-open ``[start, end)`` range (UTC) that new blocks must avoid."""

    start: datetime
    end: datetime
    origin: BusyOrigin = field(default=BusyOrigin.EXTERNAL_EVENT, compare=False)
    task_id: Optional[UUID] = field(default=None, compare=False)

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Busy interval must have start < end ({self.start} >= {self.end})")

    def overlaps(self, other: BusyInterval) -> bool:
        return self.start < other.end and other.start < self.end

    @property
    def length(self) -> timedelta:
        return self.end - self.start


class BusyIntervalSet:
    """
    Append-only set of busy intervals.

    Members are kept sorted by start. Together with the longest member length
    this bounds an overlap query to the members that start inside
    ``(candidate.start - longest, candidate.end)``.
    """

    def __init__(self, intervals: Iterable[BusyInterval] = ()):
        self._intervals: list[BusyInterval] = []
        self._starts: list[datetime] = []
        self._longest = timedelta(0)
        for interval in intervals:
            self.insert(interval)

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[BusyInterval]:
        return iter(self._intervals)

    def insert(self, interval: BusyInterval) -> None:
        index = bisect_right(self._starts, interval.start)
        self._starts.insert(index, interval.start)
        self._intervals.insert(index, interval)
        if interval.length > self._longest:
            self._longest = interval.length

    def conflicts(self, candidate: BusyInterval) -> list[BusyInterval]:
        """Return every member overlapping the candidate, ordered by start."""
        if not self._intervals:
            return []
        low = bisect_left(self._starts, candidate.start - self._longest)
        high = bisect_left(self._starts, candidate.end)
        return [
            interval
            for interval in self._intervals[low:high]
            if interval.overlaps(candidate)
        ]

    def intersects(self, candidate: BusyInterval) -> bool:
        return bool(self.conflicts(candidate))


def seed_busy_intervals(
    all_calendar_events: Iterable[CalendarEventUnion],
    config: SchedulingConfig,
) -> BusyIntervalSet:
    """
    Seed the busy set for a run.

    Non-task events are always busy. Task-linked events only count once
    completed; pending task events are about to be replaced by the new plan.

    Args:
        all_calendar_events: Calendar events (manual, synced and task events);
            an event listed twice is only counted once
        config: Scheduling configuration (timezone for naive datetimes)

    Returns:
        BusyIntervalSet with the seeded intervals
    """
    busy = BusyIntervalSet()
    skipped = 0
    seen_ids: set[str] = set()
    for event in all_calendar_events:
        if event.id in seen_ids:
            continue
        seen_ids.add(event.id)
        if is_task_event(event):
            if event.completed_at is None:
                continue
            origin = BusyOrigin.COMPLETED_OCCURRENCE
            task_id = event.linked_task_id
        else:
            origin = BusyOrigin.EXTERNAL_EVENT
            task_id = None

        start = ensure_utc(to_local_datetime(event.start_time, config.timezone))
        end = ensure_utc(to_local_datetime(event.end_time, config.timezone))
        if end <= start:
            skipped += 1
            logger.warning(f"Skipping zero-length calendar event {event.id} at {start.isoformat()}")
            continue
        busy.insert(BusyInterval(start=start, end=end, origin=origin, task_id=task_id))

    logger.debug(f"Seeded {len(busy)} busy intervals ({skipped} skipped)")
    return busy
