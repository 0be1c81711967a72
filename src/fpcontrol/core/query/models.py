"""Access patterns for system declarations.

Usage:
    # Type-level (all entities with these components)
    @system(reads=(ControllerState, Transform), writes=(Transform,))

    # Unrestricted
    @system(reads=AllAccess(), writes=AllAccess())
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AllAccess:
    """Unrestricted component access."""

    pass


@dataclass(frozen=True)
class NoAccess:
    """No component access."""

    pass


@dataclass(frozen=True)
class TypeAccess:
    """Access to all entities with certain component types."""

    types: frozenset[type]

    def __init__(self, types: tuple[type, ...] | frozenset[type]):
        object.__setattr__(self, "types", frozenset(types))


AccessPattern = AllAccess | TypeAccess | NoAccess
