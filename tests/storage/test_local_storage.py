"""Unit tests for LocalStorage."""

from dataclasses import dataclass

import pytest

from fpcontrol import ControllerState, RigidBody, component
from fpcontrol.core.identity import EntityId, SystemEntity
from fpcontrol.storage import LocalStorage, Storage


@component
@dataclass(slots=True)
class Marker:
    name: str


@pytest.fixture
def storage() -> LocalStorage:
    storage = LocalStorage()
    storage.ensure_reserved(SystemEntity.WORLD)
    return storage


def test_local_storage_satisfies_protocol(storage: LocalStorage) -> None:
    assert isinstance(storage, Storage)


def test_get_component_copy_flag_controls_copy_vs_reference(storage: LocalStorage) -> None:
    entity = storage.create_entity()
    original = ControllerState(yaw=10.0)
    storage.set_component(entity, original)

    copied = storage.get_component(entity, ControllerState, copy=True)
    assert copied == original
    assert copied is not original

    assert storage.get_component(entity, ControllerState, copy=False) is original


def test_missing_component_and_entity_return_none(storage: LocalStorage) -> None:
    entity = storage.create_entity()
    assert storage.get_component(entity, Marker) is None
    assert storage.get_component(EntityId(index=999), Marker) is None


def test_write_to_missing_entity_is_dropped(storage: LocalStorage) -> None:
    """Buffered writes may target an entity destroyed earlier in the same apply."""
    ghost = EntityId(index=999)
    storage.set_component(ghost, Marker("ghost"))
    assert not storage.entity_exists(ghost)
    assert list(storage.query(Marker)) == []


def test_destroy_entity_removes_components(storage: LocalStorage) -> None:
    entity = storage.create_entity()
    storage.set_component(entity, Marker("a"))

    storage.destroy_entity(entity)
    storage.destroy_entity(entity)  # second call ignored

    assert not storage.entity_exists(entity)
    assert not storage.has_component(entity, Marker)
    assert storage.get_component_types(entity) == frozenset()


def test_reserved_entities_cannot_be_destroyed(storage: LocalStorage) -> None:
    storage.destroy_entity(SystemEntity.WORLD)
    assert storage.entity_exists(SystemEntity.WORLD)


def test_ensure_reserved_rejects_regular_entities(storage: LocalStorage) -> None:
    with pytest.raises(ValueError, match="not a reserved entity"):
        storage.ensure_reserved(EntityId(index=100))


def test_query_matches_all_types_in_creation_order(storage: LocalStorage) -> None:
    a = storage.create_entity()
    b = storage.create_entity()
    c = storage.create_entity()
    storage.set_component(a, Marker("a"))
    storage.set_component(a, RigidBody())
    storage.set_component(b, Marker("b"))
    storage.set_component(c, Marker("c"))
    storage.set_component(c, RigidBody())

    assert [e for e, _ in storage.query(Marker, RigidBody)] == [a, c]
    assert [comps[0].name for _, comps in storage.query(Marker)] == ["a", "b", "c"]


def test_remove_component(storage: LocalStorage) -> None:
    entity = storage.create_entity()
    storage.set_component(entity, Marker("a"))

    assert storage.remove_component(entity, Marker) is True
    assert storage.remove_component(entity, Marker) is False


def test_apply_updates_order(storage: LocalStorage) -> None:
    """Updates and inserts land before removes; destroys run last."""
    keep = storage.create_entity()
    doomed = storage.create_entity()

    storage.apply_updates(
        updates={keep: {Marker: Marker("updated")}, doomed: {Marker: Marker("x")}},
        inserts={keep: [RigidBody()]},
        removes={keep: [RigidBody]},
        destroys=[doomed],
    )

    assert storage.get_component(keep, Marker) == Marker("updated")
    assert not storage.has_component(keep, RigidBody)
    assert not storage.entity_exists(doomed)


def test_snapshot_restore_round_trip(storage: LocalStorage) -> None:
    entity = storage.create_entity()
    camera = storage.create_entity()
    storage.set_component(
        entity, ControllerState(move_left=True, yaw=-12.5, pitch=30.0, camera=camera)
    )
    data = storage.snapshot()

    storage.set_component(entity, ControllerState())
    storage.destroy_entity(camera)

    storage.restore(data)

    assert storage.entity_exists(camera)
    assert storage.get_component(entity, ControllerState) == ControllerState(
        move_left=True, yaw=-12.5, pitch=30.0, camera=camera
    )
    # Allocator state is restored too: the next id is fresh
    assert storage.create_entity() not in (entity, camera)
