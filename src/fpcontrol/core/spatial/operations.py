"""Pure vector and quaternion math on numpy arrays.

Quaternions are ``(x, y, z, w)`` arrays. Products follow the Hamilton
convention, so ``quat_mul(a, b)`` applies ``b`` first and ``a`` second.
World axes: +X right-hand side axis, +Y up, +Z forward.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

Vec3 = np.ndarray
Quat = np.ndarray

X_AXIS = np.array([1.0, 0.0, 0.0])
Y_AXIS = np.array([0.0, 1.0, 0.0])
Z_AXIS = np.array([0.0, 0.0, 1.0])
IDENTITY = (0.0, 0.0, 0.0, 1.0)


def vec3(values: Sequence[float] | np.ndarray) -> Vec3:
    """Coerce a 3-sequence into a float64 array."""
    array = np.asarray(values, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {array.shape}")
    return array


def quat_from_axis_angle(axis: Sequence[float] | np.ndarray, degrees: float) -> Quat:
    """Rotation of ``degrees`` about ``axis`` (normalized here).

    A zero-length axis yields the identity rotation.
    """
    direction = try_normalize(vec3(axis), 0.0)
    if direction is None:
        return np.array(IDENTITY)
    half = np.radians(degrees) / 2.0
    return np.append(direction * np.sin(half), np.cos(half))


def quat_mul(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> Quat:
    """Hamilton product ``a * b``."""
    ax, ay, az, aw = np.asarray(a, dtype=np.float64)
    bx, by, bz, bw = np.asarray(b, dtype=np.float64)
    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ]
    )


def quat_rotate(q: Sequence[float] | np.ndarray, v: Sequence[float] | np.ndarray) -> Vec3:
    """Rotate vector ``v`` by unit quaternion ``q``."""
    quat = np.asarray(q, dtype=np.float64)
    u, w = quat[:3], quat[3]
    vector = vec3(v)
    t = 2.0 * np.cross(u, vector)
    return vector + w * t + np.cross(u, t)


def try_normalize(v: Sequence[float] | np.ndarray, epsilon: float) -> Vec3 | None:
    """Unit vector along ``v``, or None when its length is not above ``epsilon``."""
    vector = vec3(v)
    length = float(np.linalg.norm(vector))
    if length <= epsilon:
        return None
    return vector / length


def as_tuple(array: np.ndarray) -> tuple[float, ...]:
    """Plain-float tuple for storing in components."""
    return tuple(float(x) for x in array)
