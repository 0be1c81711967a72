"""Spatial math: numpy-backed vectors and quaternions."""

from fpcontrol.core.spatial.operations import (
    IDENTITY,
    X_AXIS,
    Y_AXIS,
    Z_AXIS,
    Quat,
    Vec3,
    as_tuple,
    quat_from_axis_angle,
    quat_mul,
    quat_rotate,
    try_normalize,
    vec3,
)

__all__ = [
    "Vec3",
    "Quat",
    "X_AXIS",
    "Y_AXIS",
    "Z_AXIS",
    "IDENTITY",
    "vec3",
    "as_tuple",
    "quat_from_axis_angle",
    "quat_mul",
    "quat_rotate",
    "try_normalize",
]
