"""System models: descriptors, modes, and the execution strategy protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from fpcontrol.core.query.models import AllAccess, TypeAccess

if TYPE_CHECKING:
    from fpcontrol.core.query import AccessPattern


class SystemMode(Enum):
    """Execution mode controlling access capabilities."""

    INTERACTIVE = auto()  # Full ScopedAccess, writes during execution
    READONLY = auto()  # No writes allowed


@dataclass(frozen=True)
class SystemDescriptor:
    """Metadata about a registered system."""

    name: str
    run: Callable[..., Any]
    reads: AccessPattern
    writes: AccessPattern
    mode: SystemMode
    phase: str = "update"
    runs_alone: bool = False  # If True, runs in its own execution group (dev mode)

    def can_read_type(self, component_type: type) -> bool:
        """Check declared read access. Write access implies read access."""
        return self._allows(self.reads, component_type) or self._allows(
            self.writes, component_type
        )

    def can_write_type(self, component_type: type) -> bool:
        """Check declared write access."""
        if self.mode == SystemMode.READONLY:
            return False
        return self._allows(self.writes, component_type)

    def writable_types(self) -> frozenset[type] | None:
        """Get all component types this system can write.

        Returns:
            Set of writable types, or None when writes are unrestricted.
        """
        if isinstance(self.writes, AllAccess):
            return None
        if isinstance(self.writes, TypeAccess):
            return self.writes.types
        return frozenset()

    @staticmethod
    def _allows(pattern: AccessPattern, component_type: type) -> bool:
        if isinstance(pattern, AllAccess):
            return True
        if isinstance(pattern, TypeAccess):
            return component_type in pattern.types
        return False

    def is_dev_mode(self) -> bool:
        """Check if system should run in isolation (dev mode)."""
        return self.runs_alone


@runtime_checkable
class ExecutionStrategy(Protocol):
    """Protocol for pluggable system execution strategies.

    The strategy is injected into World and owns system registration and
    per-tick orchestration.
    """

    def register_system(self, descriptor: SystemDescriptor) -> None:
        """Register a system for execution."""
        ...

    def tick(self, world: Any) -> None:
        """Execute all registered systems once.

        Args:
            world: World instance providing execute_system() and apply_result()
        """
        ...
