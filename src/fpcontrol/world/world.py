"""World: entities, components and the systems that run over them.

Usage:
    world = World()

    camera = world.spawn(Transform())
    player = world.spawn(ControllerState(camera=camera), RigidBody())

    world.register_system(motion_integrator)
    world.tick(1 / 60)
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from fpcontrol.core.identity import EntityId, SystemEntity
from fpcontrol.core.system import SystemDescriptor, SystemMode
from fpcontrol.core.types import Copy
from fpcontrol.storage.local import LocalStorage
from fpcontrol.storage.protocol import Storage
from fpcontrol.world.access import ScopedAccess
from fpcontrol.world.clock import Clock
from fpcontrol.world.result import SystemResult, normalize_result, validate_result_access

if TYPE_CHECKING:
    from fpcontrol.core.system import ExecutionStrategy

C = TypeVar("C")

logger = logging.getLogger(__name__)


class World:
    """Owns a storage backend and an execution strategy.

    The public methods are for host code between ticks (spawning, input
    handling, inspection). Systems never see the World; they get a
    ScopedAccess. Single-threaded: input and ticks must not overlap.

    Args:
        storage: Component storage, LocalStorage by default.
        execution: Scheduler, SimpleScheduler by default.
    """

    def __init__(
        self,
        storage: Storage | None = None,
        execution: ExecutionStrategy | None = None,
    ):
        if execution is None:
            # scheduling imports world.result; resolve lazily
            from fpcontrol.scheduling import SimpleScheduler

            execution = SimpleScheduler()
        self._storage = storage or LocalStorage()
        self._execution = execution
        self._tick_count = 0
        self._ensure_system_entities()

    def _ensure_system_entities(self) -> None:
        self._storage.ensure_reserved(SystemEntity.WORLD)
        self._storage.ensure_reserved(SystemEntity.CLOCK)

    @property
    def tick_count(self) -> int:
        return self._tick_count

    # Host-side entity and component access

    def spawn(self, *components: Any) -> EntityId:
        """New entity carrying ``components``. Repeating a type keeps the last one and warns."""
        entity = self._storage.create_entity()
        seen: list[type] = []
        for comp in components:
            if type(comp) in seen:
                warnings.warn(
                    f"spawn() received multiple components of type {type(comp).__name__}. "
                    f"Only the last one will be kept.",
                    stacklevel=2,
                )
            seen.append(type(comp))
            self._storage.set_component(entity, comp)
        logger.debug("Spawned %s with %s", entity, [t.__name__ for t in seen])
        return entity

    def destroy(self, entity: EntityId) -> None:
        self._storage.destroy_entity(entity)

    def exists(self, entity: EntityId) -> bool:
        """Whether ``entity`` still resolves. False forever once destroyed."""
        return self._storage.entity_exists(entity)

    def get_copy(self, entity: EntityId, component_type: type[C]) -> Copy[C] | None:
        """Detached copy of a component, or None. Write changes back with ``set``."""
        return self._storage.get_component(entity, component_type, copy=True)

    def set(self, entity: EntityId, component: Any) -> None:
        self._storage.set_component(entity, component)

    def remove(self, entity: EntityId, component_type: type) -> bool:
        return self._storage.remove_component(entity, component_type)

    def has(self, entity: EntityId, component_type: type) -> bool:
        return self._storage.has_component(entity, component_type)

    def singleton_copy(self, component_type: type[C]) -> Copy[C] | None:
        return self.get_copy(SystemEntity.WORLD, component_type)

    def set_singleton(self, component: Any) -> None:
        self.set(SystemEntity.WORLD, component)

    def query_copies(self, *component_types: type) -> Iterator[tuple[Any, ...]]:
        """``(entity, comp1, comp2, ...)`` copies for entities carrying every type."""
        for entity, components in self._storage.query(*component_types, copy=True):
            yield (entity, *components)

    # Uncopied reads backing ScopedAccess

    def _get_component(self, entity: EntityId, component_type: type[C]) -> C | None:
        return self._storage.get_component(entity, component_type, copy=False)

    def _has_component(self, entity: EntityId, component_type: type) -> bool:
        return self._storage.has_component(entity, component_type)

    def _entity_exists(self, entity: EntityId) -> bool:
        return self._storage.entity_exists(entity)

    def _query_components(
        self, *component_types: type
    ) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        return self._storage.query(*component_types, copy=False)

    def _all_entities(self) -> Iterator[EntityId]:
        return self._storage.all_entities()

    # Systems

    def register_system(self, descriptor: SystemDescriptor) -> None:
        self._execution.register_system(descriptor)

    def register_systems(self, *descriptors: SystemDescriptor) -> None:
        for descriptor in descriptors:
            self._execution.register_system(descriptor)

    def execute_system(self, descriptor: SystemDescriptor) -> SystemResult:
        """Run one system against current storage and return its changes unapplied.

        Raises:
            AccessViolationError: If the system read or wrote undeclared types.
            TypeError: If the system returned an unsupported value.
        """
        buffer = SystemResult()
        returned = descriptor.run(ScopedAccess(world=self, descriptor=descriptor, buffer=buffer))
        if returned is not None:
            buffer.merge(normalize_result(returned))
        validate_result_access(
            buffer,
            descriptor.writable_types(),
            descriptor.name,
            readonly=descriptor.mode == SystemMode.READONLY and not descriptor.is_dev_mode(),
        )
        return buffer

    def apply_result(self, result: SystemResult) -> None:
        self._storage.apply_updates(
            updates=result.updates,
            inserts=result.inserts,
            removes=result.removes,
            destroys=result.destroys,
        )

    def tick(self, dt: float) -> None:
        """Publish ``Clock(dt, tick)`` and run every registered system once.

        Args:
            dt: Seconds since the previous tick. Passed through unclamped, so a
                stalled host may hand systems a very large step.

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        self._tick_count += 1
        self._storage.set_component(SystemEntity.CLOCK, Clock(dt=dt, tick=self._tick_count))
        self._execution.tick(self)

    # Persistence

    def snapshot(self) -> bytes:
        return self._storage.snapshot()

    def restore(self, data: bytes) -> None:
        """Replace all component state with a ``snapshot()``; the tick count follows the Clock."""
        self._storage.restore(data)
        self._ensure_system_entities()
        clock = self._storage.get_component(SystemEntity.CLOCK, Clock, copy=False)
        self._tick_count = 0 if clock is None else clock.tick
