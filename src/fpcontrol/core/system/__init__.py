"""System functionality: decorators, descriptors, and execution strategies."""

from fpcontrol.core.system.core import system
from fpcontrol.core.system.models import ExecutionStrategy, SystemDescriptor, SystemMode

__all__ = [
    # Models
    "SystemDescriptor",
    "SystemMode",
    "ExecutionStrategy",
    # Core
    "system",
]
