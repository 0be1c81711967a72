"""Controller components.

Capabilities are expressed by component presence: an entity is a rigid body
if it carries RigidBody, and a usable camera if it carries Transform.
"""

from __future__ import annotations

from dataclasses import dataclass

from fpcontrol.core.component import component
from fpcontrol.core.identity import EntityId
from fpcontrol.core.spatial import IDENTITY, X_AXIS, Z_AXIS, Vec3, quat_rotate


@component
@dataclass(slots=True)
class ControllerState:
    """Input state of one first-person character.

    Written by the input path between ticks, read by the motion integrator
    once per tick.

    Attributes:
        move_forward: W held.
        move_backward: S held.
        move_left: A held.
        move_right: D held.
        yaw: Heading in degrees, unbounded.
        pitch: Vertical look in degrees, kept within +/- pitch_limit.
        camera: Camera entity the controller orients. Not owned; may stop
            resolving at any time.
    """

    move_forward: bool = False
    move_backward: bool = False
    move_left: bool = False
    move_right: bool = False
    yaw: float = 0.0
    pitch: float = 0.0
    camera: EntityId | None = None


@component
@dataclass(frozen=True, slots=True)
class Transform:
    """Orientation of a scene node as a unit quaternion (x, y, z, w)."""

    rotation: tuple[float, float, float, float] = IDENTITY

    def look_vector(self) -> Vec3:
        """Forward axis (+Z) in world space."""
        return quat_rotate(self.rotation, Z_AXIS)

    def side_vector(self) -> Vec3:
        """Side axis (+X) in world space. Moving left adds this vector."""
        return quat_rotate(self.rotation, X_AXIS)


@component
@dataclass(frozen=True, slots=True)
class RigidBody:
    """Physics body handle. The controller only reads and replaces linear velocity."""

    linear_velocity: tuple[float, float, float] = (0.0, 0.0, 0.0)
