"""Scheduling models and configuration.

Types for execution planning, merge strategies, and scheduler configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fpcontrol.core.system import SystemDescriptor


class MergeStrategy(Enum):
    """How to resolve two systems of one group writing the same (entity, component).

    Under snapshot isolation, all systems in an execution group see the same
    initial state. Conflicts are resolved at merge time using registration order.
    """

    LAST_WRITER_WINS = auto()
    """Later system (by registration order) overwrites earlier. Default, deterministic."""

    ERROR = auto()
    """Raise ConflictError on conflict. Useful for debugging."""


@dataclass
class ExecutionGroup:
    """Group of systems sharing one snapshot.

    All systems in a group see the same initial state. Results are merged and
    applied after the whole group has run.
    """

    systems: list[SystemDescriptor] = field(default_factory=list)


ExecutionPlan = list[ExecutionGroup]
"""Ordered list of execution groups. Each group is applied before the next runs."""


@dataclass
class SchedulerConfig:
    """Configuration for scheduler behavior."""

    merge_strategy: MergeStrategy = MergeStrategy.LAST_WRITER_WINS
    """How to resolve write conflicts within a group."""


@runtime_checkable
class ExecutionGroupBuilder(Protocol):
    """Protocol for building execution plans from registered systems."""

    def build(self, systems: list[SystemDescriptor]) -> ExecutionPlan:
        """Build execution plan from systems in registration order."""
        ...


class SingleGroupBuilder:
    """Default builder: all systems in one group, dev systems isolated.

    Creates two kinds of groups:
    1. One group per dev system (runs alone, first)
    2. One group for all normal systems (shared snapshot)
    """

    def build(self, systems: list[SystemDescriptor]) -> ExecutionPlan:
        """Build plan with dev systems isolated, others grouped."""
        dev_systems = [s for s in systems if s.is_dev_mode()]
        normal_systems = [s for s in systems if not s.is_dev_mode()]

        groups: ExecutionPlan = [ExecutionGroup(systems=[s]) for s in dev_systems]
        if normal_systems:
            groups.append(ExecutionGroup(systems=normal_systems))
        return groups


class PerSystemGroupBuilder:
    """Every system in its own group: each sees all earlier systems' writes."""

    def build(self, systems: list[SystemDescriptor]) -> ExecutionPlan:
        """Build one group per system, in registration order."""
        return [ExecutionGroup(systems=[s]) for s in systems]
