"""
Auto-schedule service.

Drives a single forward pass over the pending tasks: order them, gate each
one on its blockers, pack its blocks around everything already busy, and
aggregate the results into a ScheduleReport. Pure function of its inputs;
the wall clock is read once per run.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from autoscheduler.core.config import Settings, get_settings
from autoscheduler.core.logger import setup_logger
from autoscheduler.models.auto_schedule import EventDraft, ScheduleReport, TaskEventBlock
from autoscheduler.models.calendar_event import CalendarEventUnion, TaskCalendarEvent
from autoscheduler.models.enums import TaskStatus
from autoscheduler.models.schedule import Schedule, SchedulingConfig
from autoscheduler.models.task import Task
from autoscheduler.services.busy_intervals import seed_busy_intervals
from autoscheduler.services.dependency_gate import DependencyGate
from autoscheduler.services.interval_packer import IntervalPacker
from autoscheduler.services.scheduling_config import build_scheduling_config
from autoscheduler.services.task_orderer import SortStrategy, sort_tasks_for_scheduling
from autoscheduler.utils.datetime_utils import (
    at_hour,
    ceil_to_slot,
    ensure_utc,
    now_utc,
    to_local_datetime,
)
from autoscheduler.utils.dependency_graph import DependencyGraph

logger = setup_logger(__name__)


class AutoScheduleService:
    """
    Service for placing pending tasks on the calendar.

    Provides:
    - Deadline-first ordering with dependency awareness
    - Conflict-free block placement inside working hours
    - Deadline violation reporting
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        sort_strategy: Optional[SortStrategy] = None,
    ):
        """
        Initialize auto-schedule service.

        Args:
            settings: Settings used for configuration defaults (None = app settings)
            sort_strategy: Optional replacement for the default task ordering
        """
        self.settings = settings or get_settings()
        self.sort_strategy = sort_strategy

    def build_config(
        self,
        active_schedule: Optional[Schedule],
        block_duration_minutes: Optional[int] = None,
    ) -> SchedulingConfig:
        return build_scheduling_config(active_schedule, block_duration_minutes, settings=self.settings)

    def compute_base_start(self, now: datetime, config: SchedulingConfig) -> datetime:
        """
        Shared start cursor of a run.

        The later of "now" rounded to the next slot boundary and today's
        working-hours start.
        """
        local_now = to_local_datetime(now, config.timezone)
        rounded_now = ceil_to_slot(local_now, config.slot_granularity_minutes, strict=True)
        working_start = at_hour(local_now.date(), config.working_hours_start, config.timezone)
        return max(rounded_now, working_start, key=ensure_utc)

    def calculate(
        self,
        tasks: Sequence[Task],
        existing_task_events: Sequence[TaskCalendarEvent],
        all_calendar_events: Sequence[CalendarEventUnion],
        active_schedule: Optional[Schedule],
        block_duration_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
        config: Optional[SchedulingConfig] = None,
    ) -> ScheduleReport:
        """
        Build an auto-schedule report.

        Args:
            tasks: Tasks from the task service; completed ones are skipped
            existing_task_events: Calendar events already linked to tasks
            all_calendar_events: Full calendar feed (busy time)
            active_schedule: Working-hours schedule (None = default window)
            block_duration_minutes: Requested block length
            now: Frozen current instant (None = read the wall clock once)
            config: Prebuilt configuration, overrides active_schedule

        Returns:
            ScheduleReport with one TaskEventBlock per pending task
        """
        run_now = now or now_utc()
        config = config or self.build_config(active_schedule, block_duration_minutes)

        candidates = [task for task in tasks if task.status != TaskStatus.COMPLETED]
        ordered = sort_tasks_for_scheduling(candidates, self.sort_strategy, config.timezone)
        graph = DependencyGraph(ordered)
        processing_order = graph.topological_order()
        cycles = graph.find_cycles()
        if cycles:
            logger.warning(
                f"Dependency cycles detected ({len(cycles)}); blockers inside a cycle are ignored"
            )

        busy = seed_busy_intervals([*all_calendar_events, *existing_task_events], config)
        completed_by_task: dict[UUID, list[TaskCalendarEvent]] = {}
        for event in existing_task_events:
            if event.completed_at is None:
                continue
            completed_by_task.setdefault(event.linked_task_id, []).append(event)

        base_start = self.compute_base_start(run_now, config)
        gate = DependencyGate(config.gap_between_blocks_minutes)
        packer = IntervalPacker(config)

        logger.info(
            f"Auto-schedule run: {len(candidates)}/{len(tasks)} pending tasks, "
            f"{len(busy)} busy intervals, base start {base_start.isoformat()}"
        )

        latest_end_by_task: dict[UUID, datetime] = {}
        task_events: list[TaskEventBlock] = []

        for task in processing_order:
            gate_result = gate.earliest_start(task, latest_end_by_task, base_start)
            placement = packer.pack(
                task,
                completed_by_task.get(task.id, []),
                busy,
                gate_result.earliest_start,
            )
            task_events.append(
                TaskEventBlock(
                    task=task,
                    events=placement.events,
                    violations=placement.violations,
                    earliest_start=gate_result.earliest_start,
                    unresolved_blocker_ids=gate_result.unresolved_blocker_ids,
                )
            )
            if placement.events:
                latest_end_by_task[task.id] = placement.events[-1].end

            logger.debug(
                f"Task {task.id} ({task.title[:30]}): {len(placement.events)} blocks, "
                f"{len(placement.violations)} after deadline, "
                f"start >= {gate_result.earliest_start.isoformat()}"
            )

        report = ScheduleReport(
            task_events=task_events,
            total_events=sum(len(entry.events) for entry in task_events),
            total_violations=sum(len(entry.violations) for entry in task_events),
            tasks_with_deadline_count=sum(1 for task in candidates if task.due_date is not None),
            tasks_without_deadline_count=sum(1 for task in candidates if task.due_date is None),
            base_start=base_start,
            generated_at=run_now,
            dependency_cycles=cycles,
        )

        logger.info(
            f"Auto-schedule result: {report.total_events} blocks for {len(task_events)} tasks, "
            f"{report.total_violations} after deadline"
        )
        return report

    @staticmethod
    def summarize(report: ScheduleReport) -> str:
        """
        Generate a human-friendly preview line for a report.

        Args:
            report: Result of calculate()

        Returns:
            Summary message
        """
        task_count = len(report.task_events)
        event_word = "event" if report.total_events == 1 else "events"
        task_word = "task" if task_count == 1 else "tasks"
        message = f"{report.total_events} {event_word} will be created for {task_count} {task_word}"
        if report.total_violations > 0:
            violation_word = "event" if report.total_violations == 1 else "events"
            message += f"; {report.total_violations} {violation_word} scheduled after deadline"
        return message

    @staticmethod
    def build_event_drafts(report: ScheduleReport) -> list[EventDraft]:
        """
        Turn placed blocks into calendar event payloads.

        The drafts are what an apply step hands to the calendar API; nothing
        is persisted here.
        """
        return [
            EventDraft(
                title=entry.task.title,
                start_time=block.start,
                end_time=block.end,
                description=entry.task.description,
                linked_task_id=entry.task.id,
                user_id=entry.task.user_id,
            )
            for entry in report.task_events
            for block in entry.events
        ]
