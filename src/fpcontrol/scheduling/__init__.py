"""System scheduling and execution."""

from fpcontrol.scheduling.models import (
    ExecutionGroup,
    ExecutionGroupBuilder,
    ExecutionPlan,
    MergeStrategy,
    PerSystemGroupBuilder,
    SchedulerConfig,
    SingleGroupBuilder,
)
from fpcontrol.scheduling.scheduler import (
    SequentialScheduler,
    SimpleScheduler,
)

__all__ = [
    # Schedulers
    "SimpleScheduler",
    "SequentialScheduler",
    # Models
    "ExecutionGroup",
    "ExecutionPlan",
    "MergeStrategy",
    "SchedulerConfig",
    # Group Builders
    "ExecutionGroupBuilder",
    "SingleGroupBuilder",
    "PerSystemGroupBuilder",
]
