"""The view of the world a system receives.

Usage inside a system:

    state = access[player, ControllerState]           # deep copy, KeyError if absent
    access[camera, Transform] = Transform(rotation)   # buffered write
    if (player, RigidBody) in access:                 # capability probe
        ...
    for entity, state in access(ControllerState):     # query, flat unpacking
        ...
    body = access.entity(player)[RigidBody]           # None if absent
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from fpcontrol.core.identity import EntityId, SystemEntity
from fpcontrol.core.system import SystemDescriptor, SystemMode
from fpcontrol.core.types import Copy
from fpcontrol.world.clock import Clock
from fpcontrol.world.result import AccessViolationError

if TYPE_CHECKING:
    from fpcontrol.world.result import SystemResult
    from fpcontrol.world.world import World

T = TypeVar("T")


class QueryResult:
    """Lazy query; every iteration re-runs it against the current buffer."""

    def __init__(self, access: ScopedAccess, component_types: tuple[type, ...]):
        self._access = access
        self._types = component_types

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        for entity, components in self._access._query_raw(*self._types):
            yield (entity, *components)

    def __len__(self) -> int:
        return sum(1 for _ in self.entities())

    def entities(self) -> Iterator[EntityId]:
        for entity, _ in self._access._query_raw(*self._types):
            yield entity


class EntityHandle:
    """One entity's components keyed by type: ``handle[RigidBody]``, ``RigidBody in handle``."""

    def __init__(self, access: ScopedAccess, entity: EntityId):
        self._access = access
        self._entity = entity

    @property
    def id(self) -> EntityId:
        return self._entity

    def __getitem__(self, component_type: type[T]) -> Copy[T] | None:
        if not self._access.has(self._entity, component_type):
            return None
        return self._access.get(self._entity, component_type)

    def __setitem__(self, component_type: type, value: Any) -> None:
        self._access.update(self._entity, value)

    def __delitem__(self, component_type: type) -> None:
        self._access.remove(self._entity, component_type)

    def __contains__(self, component_type: type) -> bool:
        return self._access.has(self._entity, component_type)


class ScopedAccess:
    """World access limited to a system's declared reads and writes.

    Reads see storage as of the start of the system's execution group,
    overlaid with the system's own pending writes. Writes go to ``buffer``
    and reach storage when the scheduler applies the group. Dev-mode systems
    skip the access checks.
    """

    def __init__(self, world: World, descriptor: SystemDescriptor, buffer: SystemResult):
        self._world = world
        self._descriptor = descriptor
        self._buffer = buffer

    # Access checks

    def _check_readable(self, *types: type) -> None:
        if self._descriptor.is_dev_mode():
            return
        for component_type in types:
            if not self._descriptor.can_read_type(component_type):
                raise AccessViolationError(
                    f"System '{self._descriptor.name}' cannot read {component_type.__name__}: "
                    f"not in readable types"
                )

    def _check_writable(self, component: type | Any) -> None:
        descriptor = self._descriptor
        if descriptor.is_dev_mode():
            return

        component_type = component if isinstance(component, type) else type(component)
        name = component_type.__name__
        if descriptor.mode == SystemMode.READONLY:
            raise AccessViolationError(
                f"System '{descriptor.name}' is READONLY; cannot write {name}"
            )
        if descriptor.can_write_type(component_type):
            return
        if descriptor.can_read_type(component_type):
            reason = "declared as read-only"
        else:
            reason = "not in writable types"
        raise AccessViolationError(f"System '{descriptor.name}' cannot write {name}: {reason}")

    # Pending writes overlay

    def _buffered(self, entity: EntityId, component_type: type) -> Any | None:
        pending = self._buffer.updates.get(entity, {}).get(component_type)
        if pending is not None:
            return pending
        return next(
            (c for c in self._buffer.inserts.get(entity, ()) if type(c) is component_type),
            None,
        )

    def _removed(self, entity: EntityId, component_type: type) -> bool:
        return entity in self._buffer.destroys or component_type in self._buffer.removes.get(
            entity, ()
        )

    def _query_raw(self, *component_types: type) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        seen: set[EntityId] = set()

        for entity, stored in self._world._query_components(*component_types):
            if any(self._removed(entity, t) for t in component_types):
                continue
            current = []
            for comp_type, comp in zip(component_types, stored, strict=True):
                pending = self._buffered(entity, comp_type)
                current.append(copy.deepcopy(comp if pending is None else pending))
            seen.add(entity)
            yield entity, tuple(current)

        # Entities that only match because of this system's own writes
        for entity in dict.fromkeys([*self._buffer.updates, *self._buffer.inserts]):
            if entity in seen or not self._world._entity_exists(entity):
                continue
            if all(self.has(entity, t) for t in component_types):
                seen.add(entity)
                yield entity, tuple(self.get(entity, t) for t in component_types)

    # Reads

    def get(self, entity: EntityId, component_type: type[T]) -> Copy[T]:
        """Deep copy of the component; write it back to change anything.

        Raises:
            KeyError: If the entity does not resolve or lacks the component.
                Probe with ``(entity, Type) in access`` when absence is normal.
        """
        self._check_readable(component_type)

        found = None
        if not self._removed(entity, component_type):
            found = self._buffered(entity, component_type)
            if found is None:
                found = self._world._get_component(entity, component_type)
        if found is None:
            raise KeyError(f"{entity} has no component {component_type.__name__}")
        return copy.deepcopy(found)

    def has(self, entity: EntityId, component_type: type) -> bool:
        self._check_readable(component_type)

        if self._removed(entity, component_type):
            return False
        if self._buffered(entity, component_type) is not None:
            return self._world._entity_exists(entity)
        return self._world._has_component(entity, component_type)

    def query(self, *component_types: type) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        """Nested form of ``access(...)``: yields ``(entity, (comp1, comp2, ...))``."""
        self._check_readable(*component_types)
        return self._query_raw(*component_types)

    def singleton(self, component_type: type[T]) -> Copy[T]:
        """Component stored on SystemEntity.WORLD."""
        if not self.has(SystemEntity.WORLD, component_type):
            raise KeyError(f"No singleton {component_type.__name__} registered")
        return self.get(SystemEntity.WORLD, component_type)

    def clock(self) -> Clock:
        """Timing of the tick in progress. Needs Clock in the system's reads."""
        return self.get(SystemEntity.CLOCK, Clock)

    def entities(self) -> Iterator[EntityId]:
        return self._world._all_entities()

    def entity(self, entity_id: EntityId) -> EntityHandle:
        return EntityHandle(self, entity_id)

    # Writes

    def update(self, entity: EntityId, component: Any) -> None:
        """Set the component of ``type(component)``, replacing any current one."""
        self._check_writable(component)
        self._buffer.updates.setdefault(entity, {})[type(component)] = component

    def update_singleton(self, component: Any) -> None:
        self.update(SystemEntity.WORLD, component)

    def insert(self, entity: EntityId, component: Any) -> None:
        self._check_writable(component)
        self._buffer.inserts.setdefault(entity, []).append(component)

    def remove(self, entity: EntityId, component_type: type) -> None:
        self._check_writable(component_type)
        self._buffer.removes.setdefault(entity, []).append(component_type)

    def destroy(self, entity: EntityId) -> None:
        descriptor = self._descriptor
        if descriptor.mode == SystemMode.READONLY and not descriptor.is_dev_mode():
            raise AccessViolationError(
                f"System '{descriptor.name}' is READONLY; cannot destroy {entity}"
            )
        self._buffer.destroys.append(entity)

    # Operators

    def __getitem__(self, key: tuple[EntityId, type[T]]) -> Copy[T]:
        return self.get(*key)

    def __setitem__(self, key: tuple[EntityId, type], value: Any) -> None:
        self.update(key[0], value)

    def __delitem__(self, key: tuple[EntityId, type]) -> None:
        self.remove(*key)

    def __contains__(self, key: tuple[EntityId, type]) -> bool:
        return self.has(*key)

    def __call__(self, *component_types: type) -> QueryResult:
        self._check_readable(*component_types)
        return QueryResult(self, component_types)

    def __iter__(self) -> Iterator[EntityId]:
        return self.entities()
