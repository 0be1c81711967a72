"""Input aggregation: raw device events into ControllerState.

Usage:
    state = ControllerState()
    handle_event(state, PointerMotion(dx=4.0, dy=-2.0))
    handle_event(state, KeyboardInput(KeyCode.W, pressed=True))
"""

from __future__ import annotations

from fpcontrol.config import ControllerSettings, default_settings
from fpcontrol.controller.components import ControllerState
from fpcontrol.controller.events import InputEvent, KeyboardInput, KeyCode, PointerMotion

MOVEMENT_BINDINGS: dict[KeyCode, str] = {
    KeyCode.W: "move_forward",
    KeyCode.S: "move_backward",
    KeyCode.A: "move_left",
    KeyCode.D: "move_right",
}
"""Physical key -> ControllerState flag."""


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def handle_event(
    state: ControllerState,
    event: InputEvent,
    settings: ControllerSettings | None = None,
) -> None:
    """Fold one input event into ``state`` in place.

    Pointer motion turns the view: vertical motion adds to pitch (clamped),
    horizontal motion subtracts from yaw (unbounded). A bound key sets its flag
    to the key's pressed state, so the latest event for a key always wins.
    Anything else is ignored.
    """
    settings = settings or default_settings()

    if isinstance(event, PointerMotion):
        limit = settings.pitch_limit
        state.pitch = clamp(state.pitch + event.dy * settings.sensitivity, -limit, limit)
        state.yaw -= event.dx * settings.sensitivity
    elif isinstance(event, KeyboardInput):
        flag = MOVEMENT_BINDINGS.get(event.code)
        if flag is not None:
            setattr(state, flag, bool(event.pressed))
