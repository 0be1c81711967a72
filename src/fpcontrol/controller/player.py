"""Host-facing first-person controller.

Usage:
    world = World()
    camera = world.spawn(Transform())
    player = FirstPersonController.spawn(world, camera=camera)

    # Whenever the OS reports input
    player.handle_event(PointerMotion(dx=3.0, dy=-1.0))
    player.handle_event(KeyboardInput(KeyCode.W, pressed=True))

    # Once per simulation step
    player.on_tick(1 / 60)
"""

from __future__ import annotations

import logging
import weakref

from fpcontrol.config import ControllerSettings
from fpcontrol.controller.components import ControllerState, RigidBody
from fpcontrol.controller.events import InputEvent
from fpcontrol.controller.input import handle_event
from fpcontrol.controller.motion import motion_integrator
from fpcontrol.core.identity import EntityId
from fpcontrol.core.types import Copy
from fpcontrol.world import World

logger = logging.getLogger(__name__)


_installed: weakref.WeakSet[World] = weakref.WeakSet()


def install(world: World) -> None:
    """Register the controller systems on ``world`` once.

    Registration lives in the world's scheduler, not in its storage, so a
    world restored from a snapshot still needs its own install.
    """
    if world in _installed:
        return
    world.register_system(motion_integrator)
    _installed.add(world)


class FirstPersonController:
    """One character's controller: an entity holding ControllerState.

    Input events mutate the state immediately. Ticks run every registered
    system of the world, so one on_tick() call advances every controller the
    world holds; hosts with several controllers usually call world.tick(dt)
    directly instead.
    """

    def __init__(self, world: World, entity: EntityId) -> None:
        install(world)
        self._world = world
        self._entity = entity

    @classmethod
    def spawn(
        cls,
        world: World,
        *,
        camera: EntityId | None = None,
        settings: ControllerSettings | None = None,
        body: RigidBody | None = None,
        rigid: bool = True,
    ) -> FirstPersonController:
        """Create the controller entity with a fresh ControllerState.

        Args:
            world: World to spawn into.
            camera: Camera entity to orient, if any.
            settings: Per-instance tuning; defaults apply when omitted.
            body: Initial rigid body state.
            rigid: Give the entity a RigidBody capability (default True).
        """
        components: list[object] = [ControllerState(camera=camera)]
        if settings is not None:
            components.append(settings)
        if rigid:
            components.append(body or RigidBody())
        return cls(world, world.spawn(*components))

    @property
    def entity(self) -> EntityId:
        return self._entity

    @property
    def world(self) -> World:
        return self._world

    @property
    def state(self) -> Copy[ControllerState] | None:
        """Copy of the current state, or None once the entity is gone."""
        return self._world.get_copy(self._entity, ControllerState)

    def attach_camera(self, camera: EntityId | None) -> None:
        """Point the controller at another camera entity (or none)."""
        state = self.state
        if state is None:
            return
        state.camera = camera
        self._world.set(self._entity, state)

    def handle_event(self, event: InputEvent) -> None:
        """Fold one input event into this controller's state.

        A controller whose entity was destroyed ignores input.
        """
        state = self.state
        if state is None:
            logger.debug("Input for destroyed controller %s ignored", self._entity)
            return
        settings = self._world.get_copy(self._entity, ControllerSettings)
        handle_event(state, event, settings)
        self._world.set(self._entity, state)

    def on_tick(self, dt: float) -> None:
        """Advance the world by ``dt`` seconds."""
        self._world.tick(dt)

    def despawn(self) -> None:
        """Destroy the controller entity. The camera entity is left alone."""
        self._world.destroy(self._entity)
