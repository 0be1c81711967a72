"""Tick orchestration over execution groups.

Usage:
    # One shared snapshot for all systems, dev systems first and alone
    world = World(execution=SimpleScheduler())

    # Each system sees the writes of the systems registered before it
    world = World(execution=SequentialScheduler())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fpcontrol.core.system import SystemDescriptor
from fpcontrol.scheduling.merge_strategies import merge_error_on_conflict, merge_last_writer_wins
from fpcontrol.scheduling.models import (
    ExecutionGroup,
    ExecutionGroupBuilder,
    ExecutionPlan,
    MergeStrategy,
    PerSystemGroupBuilder,
    SchedulerConfig,
    SingleGroupBuilder,
)

if TYPE_CHECKING:
    from fpcontrol.world.world import World

logger = logging.getLogger(__name__)

_MERGERS = {
    MergeStrategy.LAST_WRITER_WINS: merge_last_writer_wins,
    MergeStrategy.ERROR: merge_error_on_conflict,
}


class SimpleScheduler:
    """Runs groups in plan order; each group's merged writes land before the next group.

    Args:
        config: Merge strategy selection.
        group_builder: Turns registered systems into a plan. SingleGroupBuilder
            by default.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        group_builder: ExecutionGroupBuilder | None = None,
    ) -> None:
        self._config = config or SchedulerConfig()
        self._group_builder = group_builder or SingleGroupBuilder()
        self._systems: list[SystemDescriptor] = []
        self._plan: ExecutionPlan | None = None

    def register_system(self, descriptor: SystemDescriptor) -> None:
        self._systems.append(descriptor)
        self._plan = None
        logger.debug("Registered system %s (phase=%s)", descriptor.name, descriptor.phase)

    def build_execution_plan(self) -> ExecutionPlan:
        return self._group_builder.build(list(self._systems))

    def _current_plan(self) -> ExecutionPlan:
        if self._plan is None:
            self._plan = self.build_execution_plan()
        return self._plan

    def tick(self, world: World) -> None:
        for group in self._current_plan():
            self._run_group(world, group)

    def _run_group(self, world: World, group: ExecutionGroup) -> None:
        if not group.systems:
            return
        # Every system runs before anything is applied: one shared snapshot
        results = [world.execute_system(descriptor) for descriptor in group.systems]
        merge = _MERGERS[self._config.merge_strategy]
        world.apply_result(merge(results, [s.name for s in group.systems]))

    def get_execution_plan_info(self) -> list[list[str]]:
        """System names per group, in execution order."""
        return [[s.name for s in group.systems] for group in self._current_plan()]


def SequentialScheduler() -> SimpleScheduler:  # noqa: N802
    """Scheduler with one group per system, in registration order."""
    return SimpleScheduler(group_builder=PerSystemGroupBuilder())
