"""In-memory storage: one dict of components per entity.

The default backend of World. Fine for a single game process and for tests.
"""

from __future__ import annotations

import copy as cp
import logging
import pickle  # nosec B403 - snapshots are produced and consumed by the same host
from collections.abc import Iterator
from typing import Any, TypeVar

from fpcontrol.core.identity import EntityId, SystemEntity
from fpcontrol.core.types import Copy
from fpcontrol.storage.allocator import EntityAllocator

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _is_reserved(entity: EntityId) -> bool:
    return entity.index < SystemEntity._RESERVED_COUNT


class LocalStorage:
    """``_components[entity][type] -> instance``, in entity creation order.

    Reserved SystemEntity singletons live in the same dict but never pass
    through the allocator, so they cannot be destroyed or recycled.
    """

    def __init__(self) -> None:
        self._allocator = EntityAllocator()
        self._components: dict[EntityId, dict[type, Any]] = {}

    def ensure_reserved(self, entity: EntityId) -> None:
        if not _is_reserved(entity):
            raise ValueError(f"{entity} is not a reserved entity")
        self._components.setdefault(entity, {})

    def create_entity(self) -> EntityId:
        entity = self._allocator.allocate()
        self._components[entity] = {}
        return entity

    def destroy_entity(self, entity: EntityId) -> None:
        """Drop the entity. Unknown, already destroyed and reserved ids are ignored."""
        if _is_reserved(entity) or self._components.pop(entity, None) is None:
            return
        self._allocator.deallocate(entity)
        logger.debug("Destroyed %s", entity)

    def entity_exists(self, entity: EntityId) -> bool:
        if entity not in self._components:
            return False
        return _is_reserved(entity) or self._allocator.is_alive(entity)

    def all_entities(self) -> Iterator[EntityId]:
        yield from (e for e in list(self._components) if self.entity_exists(e))

    def _components_of(self, entity: EntityId) -> dict[type, Any] | None:
        return self._components[entity] if self.entity_exists(entity) else None

    def get_component(
        self, entity: EntityId, component_type: type[T], copy: bool = True
    ) -> Copy[T] | T | None:
        """The stored component (a deep copy unless ``copy`` is False), or None."""
        components = self._components_of(entity)
        found = None if components is None else components.get(component_type)
        if found is None or not copy:
            return found
        return cp.deepcopy(found)

    def set_component(self, entity: EntityId, component: Any) -> None:
        """Store ``component`` under its type.

        A write to an entity that is gone is dropped: a buffered system write can
        target an entity destroyed earlier in the same batch.
        """
        components = self._components_of(entity)
        if components is None:
            logger.debug("Dropped %s write to missing %s", type(component).__name__, entity)
            return
        components[type(component)] = component

    def remove_component(self, entity: EntityId, component_type: type) -> bool:
        """Returns whether there was a component to remove."""
        components = self._components_of(entity)
        return components is not None and components.pop(component_type, None) is not None

    def has_component(self, entity: EntityId, component_type: type) -> bool:
        components = self._components_of(entity)
        return components is not None and component_type in components

    def get_component_types(self, entity: EntityId) -> frozenset[type]:
        return frozenset(self._components_of(entity) or ())

    def query(
        self,
        *component_types: type,
        copy: bool = True,
    ) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        """Linear scan in creation order for entities carrying every listed type."""
        for entity in list(self._components):
            components = self._components_of(entity)
            if components is None or not all(t in components for t in component_types):
                continue
            found = tuple(components[t] for t in component_types)
            yield entity, cp.deepcopy(found) if copy else found

    def apply_updates(
        self,
        updates: dict[EntityId, dict[type, Any]],
        inserts: dict[EntityId, list[Any]],
        removes: dict[EntityId, list[type]],
        destroys: list[EntityId],
    ) -> None:
        for entity, written in updates.items():
            for comp in written.values():
                self.set_component(entity, comp)
        for entity, added in inserts.items():
            for comp in added:
                self.set_component(entity, comp)
        for entity, dropped in removes.items():
            for comp_type in dropped:
                self.remove_component(entity, comp_type)
        for entity in destroys:
            self.destroy_entity(entity)

    def snapshot(self) -> bytes:
        """Pickle components and allocator state.

        Component classes must be importable wherever the snapshot is restored.
        """
        return pickle.dumps({"components": self._components, "allocator": self._allocator.state()})

    def restore(self, data: bytes) -> None:
        state = pickle.loads(data)  # nosec B301 - trusted, host-produced payload
        self._components = state["components"]
        self._allocator = EntityAllocator()
        self._allocator.load(state["allocator"])
        logger.debug("Restored storage with %d entities", len(self._components))
