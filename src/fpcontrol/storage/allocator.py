"""Entity allocation service.

EntityAllocator is a stateful service that manages entity ID lifecycle.
"""

from __future__ import annotations

from fpcontrol.core.identity import EntityId, SystemEntity


class EntityAllocator:
    """Allocates entity IDs with generation tracking for recycling.

    Maintains a free list of deallocated entity indices with incremented
    generations to safely reuse entity IDs. Starts allocation after reserved
    system entities.
    """

    def __init__(self) -> None:
        self._next_index = SystemEntity._RESERVED_COUNT
        self._free_list: list[tuple[int, int]] = []  # (index, generation)
        self._generations: dict[int, int] = {}

    def allocate(self) -> EntityId:
        """Allocate new entity ID, reusing recycled slots when available.

        Returns:
            Newly allocated EntityId.
        """
        if self._free_list:
            index, gen = self._free_list.pop()
            return EntityId(index=index, generation=gen)

        index = self._next_index
        self._next_index += 1
        self._generations[index] = 0
        return EntityId(index=index, generation=0)

    def deallocate(self, entity: EntityId) -> None:
        """Return entity ID for reuse with incremented generation.

        Args:
            entity: Entity ID to deallocate.

        Raises:
            ValueError: If entity is not currently alive.
        """
        if not self.is_alive(entity):
            raise ValueError(f"Cannot deallocate {entity}: not alive")

        new_gen = entity.generation + 1
        self._generations[entity.index] = new_gen
        self._free_list.append((entity.index, new_gen))

    def is_alive(self, entity: EntityId) -> bool:
        """Check if entity ID is still valid (not recycled).

        Args:
            entity: Entity ID to check.

        Returns:
            True if entity is alive, False if recycled or never issued.
        """
        if entity.index < SystemEntity._RESERVED_COUNT:
            return False
        current_gen = self._generations.get(entity.index, -1)
        return current_gen == entity.generation and (
            (entity.index, entity.generation) not in self._free_list
        )

    def state(self) -> dict[str, object]:
        """Picklable allocator state for snapshots."""
        return {
            "next_index": self._next_index,
            "free_list": list(self._free_list),
            "generations": dict(self._generations),
        }

    def load(self, state: dict[str, object]) -> None:
        """Restore state produced by `state()`."""
        self._next_index = state["next_index"]  # type: ignore[assignment]
        self._free_list = list(state["free_list"])  # type: ignore[call-overload]
        self._generations = dict(state["generations"])  # type: ignore[call-overload]
