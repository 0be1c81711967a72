"""Tests for motion integration.

Critical Invariants:
- Horizontal velocity is exactly zero without a usable direction
- Vertical velocity is never touched
- Movement uses the camera orientation from before this tick's rotation
- Missing camera or rigid body degrades to "no motion", never an error
"""

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from fpcontrol import (
    ControllerSettings,
    ControllerState,
    RigidBody,
    Transform,
    camera_rotation,
    motion_integrator,
    planar_velocity,
)
from fpcontrol.core.spatial import IDENTITY, X_AXIS, Z_AXIS, as_tuple

DT = 1 / 60
EPS = float(np.finfo(np.float32).eps)
FACING_NEG_Z = (0.0, 1.0, 0.0, 0.0)  # half turn about +Y


@pytest.fixture
def scene(world):
    """World with only the motion integrator registered."""
    world.register_system(motion_integrator)
    return world


def _rotated(rotation) -> Transform:
    return Transform(rotation=as_tuple(rotation))


# Pure helpers


def test_camera_rotation_identity():
    np.testing.assert_allclose(camera_rotation(0.0, 0.0), IDENTITY, atol=1e-12)


def test_camera_rotation_yaw_turns_about_up():
    transform = _rotated(camera_rotation(90.0, 0.0))
    np.testing.assert_allclose(transform.look_vector(), X_AXIS, atol=1e-12)
    np.testing.assert_allclose(transform.side_vector(), -Z_AXIS, atol=1e-12)


def test_camera_rotation_pitch_tilts_look_without_roll():
    transform = _rotated(camera_rotation(90.0, 30.0))
    look = transform.look_vector()
    side = transform.side_vector()

    assert look[1] == pytest.approx(-0.5)
    # Side axis stays horizontal: pitch never rolls the camera
    assert side[1] == pytest.approx(0.0, abs=1e-12)
    np.testing.assert_allclose(side, -Z_AXIS, atol=1e-12)


def test_no_keys_zeroes_horizontal_velocity():
    velocity = planar_velocity(
        ControllerState(), Z_AXIS, X_AXIS, (5.0, -3.0, 7.0), 240.0, DT, EPS
    )
    assert velocity.tolist() == [0.0, -3.0, 0.0]


def test_forward_and_backward_cancel():
    state = ControllerState(move_forward=True, move_backward=True)
    velocity = planar_velocity(state, Z_AXIS, X_AXIS, (5.0, -3.0, 7.0), 240.0, DT, EPS)
    assert velocity.tolist() == [0.0, -3.0, 0.0]


def test_forward_speed():
    state = ControllerState(move_forward=True)
    velocity = planar_velocity(state, -Z_AXIS, X_AXIS, (0.0, 2.0, 0.0), 240.0, DT, EPS)
    np.testing.assert_allclose(velocity, [0.0, 2.0, -4.0])


def test_left_adds_side_vector():
    state = ControllerState(move_left=True)
    velocity = planar_velocity(state, Z_AXIS, X_AXIS, (0.0, 0.0, 0.0), 240.0, DT, EPS)
    np.testing.assert_allclose(velocity, [4.0, 0.0, 0.0])


def test_diagonal_is_normalized():
    state = ControllerState(move_forward=True, move_right=True)
    velocity = planar_velocity(state, Z_AXIS, X_AXIS, (0.0, 0.0, 0.0), 240.0, DT, EPS)
    np.testing.assert_allclose(velocity, [-4.0 / np.sqrt(2), 0.0, 4.0 / np.sqrt(2)])


def test_pitched_look_shortens_planar_speed():
    """Y is dropped after normalization, so looking down slows walking."""
    look = _rotated(camera_rotation(0.0, 60.0)).look_vector()
    state = ControllerState(move_forward=True)
    velocity = planar_velocity(state, look, X_AXIS, (0.0, 0.0, 0.0), 240.0, DT, EPS)
    np.testing.assert_allclose(velocity, [0.0, 0.0, 2.0], atol=1e-9)


def test_zero_dt_gives_zero_horizontal_velocity():
    state = ControllerState(move_forward=True)
    velocity = planar_velocity(state, Z_AXIS, X_AXIS, (1.0, 1.0, 1.0), 240.0, 0.0, EPS)
    assert velocity.tolist() == [0.0, 1.0, 0.0]


@given(
    st.floats(min_value=-720.0, max_value=720.0, allow_nan=False),
    st.booleans(),
    st.booleans(),
    st.booleans(),
    st.booleans(),
    st.floats(min_value=-50.0, max_value=50.0, allow_nan=False),
)
def test_level_camera_speed_is_constant(yaw, forward, backward, left, right, vertical):
    """With a level camera, any held direction moves at movement_speed * dt."""
    transform = _rotated(camera_rotation(yaw, 0.0))
    state = ControllerState(
        move_forward=forward, move_backward=backward, move_left=left, move_right=right
    )

    velocity = planar_velocity(
        state,
        transform.look_vector(),
        transform.side_vector(),
        (9.0, vertical, 9.0),
        240.0,
        DT,
        EPS,
    )

    speed = float(np.hypot(velocity[0], velocity[2]))
    assert velocity[1] == vertical
    cancelled = forward == backward and left == right
    if cancelled:
        assert speed == 0.0
    else:
        assert speed == pytest.approx(4.0)


# Integrated through the world


def test_forward_through_world(scene):
    camera = scene.spawn(Transform(rotation=FACING_NEG_Z))
    player = scene.spawn(
        ControllerState(move_forward=True, yaw=180.0, camera=camera),
        RigidBody(linear_velocity=(5.0, -3.0, 7.0)),
    )

    scene.tick(DT)

    vx, vy, vz = scene.get_copy(player, RigidBody).linear_velocity
    assert vx == pytest.approx(0.0, abs=1e-9)
    assert vy == -3.0
    assert vz == pytest.approx(-4.0)


def test_velocity_uses_previous_orientation(scene):
    """CRITICAL: Movement follows the camera as it was before this tick's rotation.

    Why: The look and side vectors are sampled before the new rotation is
    written, so a turn affects movement one tick later.
    """
    camera = scene.spawn(Transform())
    player = scene.spawn(
        ControllerState(move_forward=True, yaw=180.0, camera=camera), RigidBody()
    )

    scene.tick(DT)
    _, _, vz = scene.get_copy(player, RigidBody).linear_velocity
    assert vz == pytest.approx(4.0), "first tick moves along the old +Z look"

    scene.tick(DT)
    _, _, vz = scene.get_copy(player, RigidBody).linear_velocity
    assert vz == pytest.approx(-4.0), "second tick sees the turned camera"


def test_camera_receives_orientation(scene):
    camera = scene.spawn(Transform())
    scene.spawn(ControllerState(yaw=90.0, pitch=30.0, camera=camera), RigidBody())

    scene.tick(DT)

    np.testing.assert_allclose(
        scene.get_copy(camera, Transform).rotation, camera_rotation(90.0, 30.0), atol=1e-12
    )


def test_unresolved_camera_is_skipped(scene):
    """No camera: no crash, no orientation written, and horizontal velocity is zeroed."""
    bystander = scene.spawn(Transform())
    before = scene.get_copy(bystander, Transform).rotation
    camera = scene.spawn(Transform())
    scene.destroy(camera)
    player = scene.spawn(
        ControllerState(move_forward=True, yaw=45.0, camera=camera),
        RigidBody(linear_velocity=(5.0, 1.5, 7.0)),
    )

    scene.tick(DT)

    assert scene.get_copy(player, RigidBody).linear_velocity == (0.0, 1.5, 0.0)
    assert not scene.exists(camera)
    np.testing.assert_array_equal(scene.get_copy(bystander, Transform).rotation, before)


def test_camera_without_transform_is_skipped(scene):
    not_a_camera = scene.spawn(RigidBody())
    player = scene.spawn(ControllerState(move_forward=True, camera=not_a_camera), RigidBody())

    scene.tick(DT)

    assert scene.get_copy(player, RigidBody).linear_velocity == (0.0, 0.0, 0.0)
    assert not scene.has(not_a_camera, Transform)


def test_non_rigid_body_still_rotates_camera(scene):
    camera = scene.spawn(Transform())
    player = scene.spawn(ControllerState(move_forward=True, yaw=90.0, camera=camera))

    scene.tick(DT)

    np.testing.assert_allclose(
        scene.get_copy(camera, Transform).look_vector(), X_AXIS, atol=1e-12
    )
    assert not scene.has(player, RigidBody)


def test_per_entity_settings(scene):
    camera = scene.spawn(Transform())
    player = scene.spawn(
        ControllerState(move_forward=True, camera=camera),
        RigidBody(),
        ControllerSettings(movement_speed=60.0),
    )

    scene.tick(DT)

    np.testing.assert_allclose(
        scene.get_copy(player, RigidBody).linear_velocity, (0.0, 0.0, 1.0), atol=1e-12
    )


def test_large_dt_is_not_clamped(scene):
    camera = scene.spawn(Transform())
    player = scene.spawn(ControllerState(move_left=True, camera=camera), RigidBody())

    scene.tick(2.0)

    np.testing.assert_allclose(
        scene.get_copy(player, RigidBody).linear_velocity, (480.0, 0.0, 0.0), atol=1e-9
    )


def test_state_is_not_modified_by_ticks(scene):
    camera = scene.spawn(Transform())
    state = ControllerState(move_forward=True, yaw=33.0, pitch=-12.0, camera=camera)
    player = scene.spawn(state, RigidBody())

    scene.tick(DT)

    assert scene.get_copy(player, ControllerState) == state
    assert np.linalg.norm(scene.get_copy(camera, Transform).rotation) == pytest.approx(1.0)
