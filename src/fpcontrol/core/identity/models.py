"""Entity identity models.

Usage:
    player = EntityId(index=1000, generation=0)
    clock = SystemEntity.CLOCK
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EntityId:
    """Lightweight entity identifier with generation for safe handle reuse.

    A recycled index gets a new generation, so a stale id held by another
    component (a controller's camera reference, for instance) stops resolving
    instead of silently pointing at whatever reused the slot.
    """

    index: int = 0
    generation: int = 0

    def __hash__(self) -> int:
        return hash((self.index, self.generation))

    def __str__(self) -> str:
        return f"Entity({self.index}v{self.generation})"


class SystemEntity:
    """Reserved entity IDs for singletons."""

    WORLD = EntityId(index=0, generation=0)
    CLOCK = EntityId(index=1, generation=0)

    _RESERVED_COUNT = 16  # First 16 indices reserved
