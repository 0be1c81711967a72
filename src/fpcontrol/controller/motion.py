"""Motion integration: per-tick camera orientation and planar body velocity.

The camera's look and side vectors are read before this tick's rotation is
written, so movement follows the orientation of the previous tick.
"""

from __future__ import annotations

import logging

import numpy as np

from fpcontrol.config import ControllerSettings, default_settings
from fpcontrol.controller.components import ControllerState, RigidBody, Transform
from fpcontrol.core.spatial import (
    X_AXIS,
    Y_AXIS,
    Quat,
    Vec3,
    as_tuple,
    quat_from_axis_angle,
    quat_mul,
    quat_rotate,
    try_normalize,
    vec3,
)
from fpcontrol.core.system import system
from fpcontrol.world import Clock, ScopedAccess

logger = logging.getLogger(__name__)


def camera_rotation(yaw: float, pitch: float) -> Quat:
    """FPS look rotation without roll.

    Yaw turns about world up. Pitch turns about the yaw-adjusted side axis and
    is applied after yaw.
    """
    yaw_rotation = quat_from_axis_angle(Y_AXIS, yaw)
    pitch_axis = quat_rotate(yaw_rotation, X_AXIS)
    return quat_mul(quat_from_axis_angle(pitch_axis, pitch), yaw_rotation)


def planar_velocity(
    state: ControllerState,
    look: Vec3,
    side: Vec3,
    current: tuple[float, float, float] | Vec3,
    speed: float,
    dt: float,
    epsilon: float,
) -> Vec3:
    """New linear velocity for the held movement keys.

    The held directions are summed and normalized, scaled by speed * dt, and
    only X and Z are kept. Y always comes from ``current``. With no usable
    direction the horizontal velocity is exactly zero.
    """
    direction = np.zeros(3)
    if state.move_forward:
        direction += look
    if state.move_backward:
        direction -= look
    if state.move_left:
        direction += side
    if state.move_right:
        direction -= side

    vertical = float(vec3(current)[1])
    unit = try_normalize(direction, epsilon)
    if unit is None:
        return np.array([0.0, vertical, 0.0])

    scaled = unit * (speed * dt)
    return np.array([scaled[0], vertical, scaled[2]])


@system(
    reads=(Clock, ControllerState, ControllerSettings),
    writes=(Transform, RigidBody),
    phase="physics",
)
def motion_integrator(access: ScopedAccess) -> None:
    """Orient each controller's camera and drive its rigid body for this tick."""
    dt = access.clock().dt

    for entity, state in access(ControllerState):
        settings = (
            access[entity, ControllerSettings]
            if (entity, ControllerSettings) in access
            else default_settings()
        )

        look = np.zeros(3)
        side = np.zeros(3)
        camera = state.camera
        if camera is not None and (camera, Transform) in access:
            transform = access[camera, Transform]
            look = transform.look_vector()
            side = transform.side_vector()
            rotation = camera_rotation(state.yaw, state.pitch)
            rotated = Transform(rotation=as_tuple(rotation))  # type: ignore[arg-type]
            access[camera, Transform] = rotated
        else:
            logger.debug("Camera %s of %s unresolved; orientation skipped", camera, entity)

        if (entity, RigidBody) not in access:
            logger.debug("%s is not a rigid body; velocity skipped", entity)
            continue

        body = access[entity, RigidBody]
        velocity = planar_velocity(
            state,
            look,
            side,
            body.linear_velocity,
            settings.movement_speed,
            dt,
            settings.epsilon,
        )
        moved = RigidBody(linear_velocity=as_tuple(velocity))  # type: ignore[arg-type]
        access[entity, RigidBody] = moved
