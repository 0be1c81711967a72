"""Core functionalities: stateless protocols and primitives.

Architecture Note:
    core/ contains pure, stateless building blocks with no runtime state
    mutation. For stateful services, see world/, storage/, and scheduling/.
"""

from fpcontrol.core.component import (
    ComponentRegistry,
    component,
    get_registry,
)
from fpcontrol.core.identity import EntityId, SystemEntity
from fpcontrol.core.query import (
    AccessPattern,
    AllAccess,
    NoAccess,
    TypeAccess,
    normalize_access,
)
from fpcontrol.core.system import (
    ExecutionStrategy,
    SystemDescriptor,
    SystemMode,
    system,
)
from fpcontrol.core.types import Copy

__all__ = [
    # Types
    "Copy",
    # Identity
    "EntityId",
    "SystemEntity",
    # Component
    "component",
    "get_registry",
    "ComponentRegistry",
    # System
    "system",
    "SystemDescriptor",
    "SystemMode",
    "ExecutionStrategy",
    # Query
    "AccessPattern",
    "AllAccess",
    "NoAccess",
    "TypeAccess",
    "normalize_access",
]
