"""
Task dependency graph utilities.

Builds an explicit directed graph (blocker -> dependent) over one scheduling
batch so ordering guarantees are explicit and cycles are detectable instead
of being silently ignored.
"""

import heapq
from typing import Sequence
from uuid import UUID

from autoscheduler.models.task import Task


class DependencyGraph:
    """Directed graph over the tasks of a single scheduling batch."""

    def __init__(self, tasks: Sequence[Task]):
        """
        Initialize the graph.

        Args:
            tasks: Tasks in their preferred processing order. The position of
                each task is used to break ties in topological_order.
        """
        self.tasks = list(tasks)
        self.rank: dict[UUID, int] = {task.id: index for index, task in enumerate(self.tasks)}
        self.blockers: dict[UUID, list[UUID]] = {}
        self.dependents: dict[UUID, list[UUID]] = {task.id: [] for task in self.tasks}
        self.external: dict[UUID, list[UUID]] = {}

        for task in self.tasks:
            in_batch: list[UUID] = []
            outside: list[UUID] = []
            # dict.fromkeys drops duplicate references while keeping order
            for blocker_id in dict.fromkeys(task.blocked_by):
                if blocker_id in self.rank:
                    in_batch.append(blocker_id)
                    self.dependents[blocker_id].append(task.id)
                else:
                    outside.append(blocker_id)
            self.blockers[task.id] = in_batch
            self.external[task.id] = outside

    def external_blocker_ids(self, task_id: UUID) -> list[UUID]:
        """Blockers referenced by the task that are not part of this batch."""
        return list(self.external.get(task_id, []))

    def topological_order(self) -> list[Task]:
        """
        Order tasks so every blocker precedes its dependents.

        Among tasks that are ready at the same time the one that came first in
        the input wins, so a batch without dependencies keeps its order
        exactly. When only tasks held up by a cycle remain, the earliest
        member of a cycle whose other blockers are all done is released and
        its unfinished blockers are ignored. Tasks that merely depend on a
        cycle wait for it.

        Returns:
            Tasks in processing order
        """
        component_of: dict[UUID, int] = {}
        for number, members in enumerate(self.strongly_connected_components()):
            for member in members:
                component_of[member] = number

        indegree = {task_id: len(blockers) for task_id, blockers in self.blockers.items()}
        ready = [self.rank[task_id] for task_id, count in indegree.items() if count == 0]
        heapq.heapify(ready)
        emitted: set[UUID] = set()
        order: list[Task] = []

        while len(order) < len(self.tasks):
            if not ready:
                # Only blockers inside the task's own cycle may be pending
                stuck = min(
                    self.rank[task_id]
                    for task_id in indegree
                    if task_id not in emitted
                    and all(
                        blocker_id in emitted or component_of[blocker_id] == component_of[task_id]
                        for blocker_id in self.blockers[task_id]
                    )
                )
                heapq.heappush(ready, stuck)

            index = heapq.heappop(ready)
            task = self.tasks[index]
            if task.id in emitted:
                continue
            emitted.add(task.id)
            order.append(task)
            for dependent_id in self.dependents[task.id]:
                if dependent_id in emitted:
                    continue
                indegree[dependent_id] -= 1
                if indegree[dependent_id] == 0:
                    heapq.heappush(ready, self.rank[dependent_id])

        return order

    def strongly_connected_components(self) -> list[list[UUID]]:
        """
        Tarjan's strongly connected components over the blocker graph.

        Returns:
            Every component (single tasks included), members in processing
            order, components sorted by their earliest member
        """
        index_of: dict[UUID, int] = {}
        lowlink: dict[UUID, int] = {}
        stack: list[UUID] = []
        on_stack: set[UUID] = set()
        components: list[list[UUID]] = []
        counter = 0

        def visit(task_id: UUID) -> None:
            nonlocal counter
            index_of[task_id] = lowlink[task_id] = counter
            counter += 1
            stack.append(task_id)
            on_stack.add(task_id)

            for dependent_id in self.dependents[task_id]:
                if dependent_id not in index_of:
                    visit(dependent_id)
                    lowlink[task_id] = min(lowlink[task_id], lowlink[dependent_id])
                elif dependent_id in on_stack:
                    lowlink[task_id] = min(lowlink[task_id], index_of[dependent_id])

            if lowlink[task_id] == index_of[task_id]:
                component: list[UUID] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == task_id:
                        break
                components.append(sorted(component, key=self.rank.__getitem__))

        for task in self.tasks:
            if task.id not in index_of:
                visit(task.id)

        components.sort(key=lambda members: self.rank[members[0]])
        return components

    def find_cycles(self) -> list[list[UUID]]:
        """
        Find dependency cycles.

        Returns:
            One list of task IDs per cycle, members in processing order.
            Self-dependencies count as a cycle of one.
        """
        return [
            members
            for members in self.strongly_connected_components()
            if len(members) > 1 or members[0] in self.blockers[members[0]]
        ]
