"""Tests for EntityHandle wrapper."""

import pytest

from fpcontrol import RigidBody, ScopedAccess, Transform, system
from fpcontrol.core.spatial import IDENTITY

DT = 1 / 60


def test_entity_handle_getitem(world):
    """EntityHandle[Type] returns component or None."""
    entity = world.spawn(RigidBody(linear_velocity=(1.0, 2.0, 3.0)))
    results = []

    @system(reads=(RigidBody, Transform), writes=())
    def read_via_handle(access: ScopedAccess) -> None:
        handle = access.entity(entity)
        results.append(handle[RigidBody])
        results.append(handle[Transform])

    world.register_system(read_via_handle)
    world.tick(DT)

    assert results == [RigidBody(linear_velocity=(1.0, 2.0, 3.0)), None]


def test_entity_handle_setitem(world):
    entity = world.spawn(RigidBody())

    @system(reads=(), writes=(RigidBody,))
    def write_via_handle(access: ScopedAccess) -> None:
        access.entity(entity)[RigidBody] = RigidBody(linear_velocity=(0.0, -1.0, 0.0))

    world.register_system(write_via_handle)
    world.tick(DT)

    assert world.get_copy(entity, RigidBody).linear_velocity == (0.0, -1.0, 0.0)


def test_entity_handle_delitem(world):
    entity = world.spawn(RigidBody(), Transform())

    @system(reads=(), writes=(RigidBody,))
    def delete_via_handle(access: ScopedAccess) -> None:
        del access.entity(entity)[RigidBody]

    world.register_system(delete_via_handle)
    world.tick(DT)

    assert not world.has(entity, RigidBody)
    assert world.get_copy(entity, Transform).rotation == IDENTITY


def test_entity_handle_contains(world):
    """Capability probes read naturally through a handle."""
    rigid = world.spawn(RigidBody())
    plain = world.spawn(Transform())
    seen = {}

    @system(reads=(RigidBody,), writes=())
    def probe(access: ScopedAccess) -> None:
        seen["rigid"] = RigidBody in access.entity(rigid)
        seen["plain"] = RigidBody in access.entity(plain)

    world.register_system(probe)
    world.tick(DT)

    assert seen == {"rigid": True, "plain": False}


@pytest.mark.parametrize("index", [0, 3])
def test_entity_handle_id_property(world, index):
    entities = [world.spawn(Transform()) for _ in range(4)]
    handles = []

    @system(reads=(Transform,), writes=())
    def grab(access: ScopedAccess) -> None:
        handles.append(access.entity(entities[index]).id)

    world.register_system(grab)
    world.tick(DT)

    assert handles == [entities[index]]
