"""Drive a first-person controller from a scripted input stream.

Stands in for a game loop: a host physics system integrates position from the
velocity the controller sets, and a readonly observer prints where the player
ended up each tick.
"""

import logging
from dataclasses import dataclass

from fpcontrol import (
    FirstPersonController,
    KeyboardInput,
    KeyCode,
    PointerMotion,
    RigidBody,
    ScopedAccess,
    SequentialScheduler,
    Transform,
    World,
    component,
    system,
)
from fpcontrol.world import Clock

DT = 1 / 60


@component
@dataclass(frozen=True, slots=True)
class Position:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@system(reads=(Clock, RigidBody), writes=(Position,), phase="physics")
def integrate_position(world: ScopedAccess) -> None:
    """Move every body by its velocity. The controller only sets velocity."""
    dt = world.clock().dt
    for entity, body, pos in world(RigidBody, Position):
        vx, vy, vz = body.linear_velocity
        world[entity, Position] = Position(pos.x + vx * dt, pos.y + vy * dt, pos.z + vz * dt)


@system.readonly(reads=(Clock, Position))
def report(world: ScopedAccess) -> None:
    tick = world.clock().tick
    for entity, pos in world(Position):
        print(f"tick {tick:3d} {entity}: ({pos.x:7.3f}, {pos.y:7.3f}, {pos.z:7.3f})")


# (tick, event) pairs, as an OS event queue would deliver them between ticks
SCRIPT = [
    (1, KeyboardInput(KeyCode.W, pressed=True)),
    (10, PointerMotion(dx=-90.0 / 0.35, dy=0.0)),
    (20, KeyboardInput(KeyCode.A, pressed=True)),
    (30, KeyboardInput(KeyCode.W, pressed=False)),
    (40, PointerMotion(dx=0.0, dy=-40.0)),
    (50, KeyboardInput(KeyCode.A, pressed=False)),
]


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    world = World(execution=SequentialScheduler())
    camera = world.spawn(Transform())
    player = FirstPersonController.spawn(world, camera=camera)
    world.set(player.entity, Position())
    world.register_systems(integrate_position, report)

    for tick in range(1, 61):
        for _, event in (item for item in SCRIPT if item[0] == tick):
            player.handle_event(event)
        player.on_tick(DT)

    print(f"final state: {player.state}")


if __name__ == "__main__":
    main()
