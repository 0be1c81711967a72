"""Storage backend contract.

World talks to storage only through this protocol, so a host can back the
controller's components with something other than the in-memory default:

    world = World(storage=LocalStorage())
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, TypeVar, runtime_checkable

from fpcontrol.core.identity import EntityId

T = TypeVar("T")


@runtime_checkable
class Storage(Protocol):
    """Entity lifetimes plus one component per type per entity.

    Ids of destroyed entities must stop resolving in every lookup below, even
    after their index is handed out again.
    """

    # Entities

    def ensure_reserved(self, entity: EntityId) -> None:
        """Make a SystemEntity singleton available; no-op when it already is."""
        ...

    def create_entity(self) -> EntityId: ...

    def destroy_entity(self, entity: EntityId) -> None:
        """Drop the entity with its components. Unknown ids are ignored."""
        ...

    def entity_exists(self, entity: EntityId) -> bool: ...

    def all_entities(self) -> Iterator[EntityId]: ...

    # Components

    def get_component(
        self, entity: EntityId, component_type: type[T], copy: bool = True
    ) -> T | None:
        """The component, a deep copy of it unless ``copy`` is False, or None."""
        ...

    def set_component(self, entity: EntityId, component: Any) -> None: ...

    def remove_component(self, entity: EntityId, component_type: type) -> bool: ...

    def has_component(self, entity: EntityId, component_type: type) -> bool: ...

    def get_component_types(self, entity: EntityId) -> frozenset[type]: ...

    def query(
        self,
        *component_types: type,
        copy: bool = True,
    ) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        """Yield ``(entity, components)`` for entities carrying every listed type."""
        ...

    # Batches and persistence

    def apply_updates(
        self,
        updates: dict[EntityId, dict[type, Any]],
        inserts: dict[EntityId, list[Any]],
        removes: dict[EntityId, list[type]],
        destroys: list[EntityId],
    ) -> None:
        """Apply one merged SystemResult: updates, inserts, removes, then destroys."""
        ...

    def snapshot(self) -> bytes: ...

    def restore(self, data: bytes) -> None: ...
