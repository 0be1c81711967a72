"""First-person controller: input aggregation and motion integration."""

from fpcontrol.controller.components import ControllerState, RigidBody, Transform
from fpcontrol.controller.events import InputEvent, KeyboardInput, KeyCode, PointerMotion
from fpcontrol.controller.input import MOVEMENT_BINDINGS, handle_event
from fpcontrol.controller.motion import camera_rotation, motion_integrator, planar_velocity
from fpcontrol.controller.player import FirstPersonController, install

__all__ = [
    # Components
    "ControllerState",
    "Transform",
    "RigidBody",
    # Events
    "InputEvent",
    "KeyCode",
    "KeyboardInput",
    "PointerMotion",
    # Input
    "MOVEMENT_BINDINGS",
    "handle_event",
    # Motion
    "camera_rotation",
    "planar_velocity",
    "motion_integrator",
    # Host
    "FirstPersonController",
    "install",
]
