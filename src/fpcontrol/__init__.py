"""fpcontrol: first-person character control on a small entity component system.

Usage:
    from fpcontrol import (
        FirstPersonController, KeyboardInput, KeyCode, PointerMotion, Transform, World,
    )

    world = World()
    camera = world.spawn(Transform())
    player = FirstPersonController.spawn(world, camera=camera)

    player.handle_event(PointerMotion(dx=12.0, dy=-3.0))
    player.handle_event(KeyboardInput(KeyCode.W, pressed=True))
    player.on_tick(1 / 60)
"""

__version__ = "0.1.0"

# Core primitives
from fpcontrol.core import (
    EntityId,
    SystemEntity,
    SystemMode,
    component,
    system,
)

# Configuration
from fpcontrol.config import ControllerSettings

# Controller
from fpcontrol.controller import (
    ControllerState,
    FirstPersonController,
    KeyboardInput,
    KeyCode,
    PointerMotion,
    RigidBody,
    Transform,
    camera_rotation,
    handle_event,
    motion_integrator,
    planar_velocity,
)

# Scheduling
from fpcontrol.scheduling import (
    MergeStrategy,
    SchedulerConfig,
    SequentialScheduler,
    SimpleScheduler,
)

# Storage
from fpcontrol.storage import (
    LocalStorage,
    Storage,
)

# World and access
from fpcontrol.world import (
    AccessViolationError,
    Clock,
    ConflictError,
    ScopedAccess,
    SystemResult,
    World,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "EntityId",
    "SystemEntity",
    "component",
    "system",
    "SystemMode",
    # Config
    "ControllerSettings",
    # Controller
    "ControllerState",
    "Transform",
    "RigidBody",
    "KeyCode",
    "KeyboardInput",
    "PointerMotion",
    "handle_event",
    "camera_rotation",
    "planar_velocity",
    "motion_integrator",
    "FirstPersonController",
    # World
    "World",
    "Clock",
    "ScopedAccess",
    "SystemResult",
    "AccessViolationError",
    "ConflictError",
    # Storage
    "Storage",
    "LocalStorage",
    # Scheduling
    "SimpleScheduler",
    "SequentialScheduler",
    "SchedulerConfig",
    "MergeStrategy",
]
