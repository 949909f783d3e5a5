"""
Processing order for auto-scheduling.

Deadline risk dominates: tasks with a due date go first (earliest first),
priority only breaks ties. Tasks without a due date follow, most important
first. Python's sort is stable, so remaining ties keep input order.
"""

from typing import Callable, Optional, Sequence

from autoscheduler.models.task import Task
from autoscheduler.utils.datetime_utils import to_local_datetime

SortStrategy = Callable[[list[Task]], list[Task]]


def default_sort_strategy(tasks: list[Task], tz_name: str = "UTC") -> list[Task]:
    # Naive and aware due dates only compare once both are aware
    with_deadline = sorted(
        (task for task in tasks if task.due_date is not None),
        key=lambda task: (to_local_datetime(task.due_date, tz_name), task.priority.rank),
    )
    without_deadline = sorted(
        (task for task in tasks if task.due_date is None),
        key=lambda task: task.priority.rank,
    )
    return with_deadline + without_deadline


def sort_tasks_for_scheduling(
    tasks: Sequence[Task],
    sort_strategy: Optional[SortStrategy] = None,
    tz_name: str = "UTC",
) -> list[Task]:
    """
    Sort tasks for scheduling.

    Args:
        tasks: Candidate tasks
        sort_strategy: Optional replacement for the default ordering. It
            receives a copy of the list and may sort it in place or return
            a new one.
        tz_name: Timezone naive due dates are expressed in

    Returns:
        New list in processing order
    """
    if sort_strategy is None:
        return default_sort_strategy(list(tasks), tz_name)
    return list(sort_strategy(list(tasks)))
