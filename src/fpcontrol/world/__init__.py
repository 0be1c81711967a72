"""World state and access management.

Architecture Note:
    world/ is a stateful service layer that coordinates entities, components,
    and systems. Unlike core/ (stateless functionalities), world/ maintains
    runtime state and orchestrates the ECS execution model.
"""

from fpcontrol.world.access import (
    EntityHandle,
    QueryResult,
    ScopedAccess,
)
from fpcontrol.world.clock import Clock
from fpcontrol.world.result import (
    AccessViolationError,
    ConflictError,
    SystemResult,
    SystemReturn,
    normalize_result,
)
from fpcontrol.world.world import World

__all__ = [
    "ScopedAccess",
    "EntityHandle",
    "AccessViolationError",
    "QueryResult",
    "SystemResult",
    "SystemReturn",
    "normalize_result",
    "ConflictError",
    "Clock",
    "World",
]
