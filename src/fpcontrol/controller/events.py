"""Input events delivered by the host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class KeyCode(Enum):
    """Physical key codes the host may report. Only W/A/S/D are bound."""

    W = "KeyW"
    A = "KeyA"
    S = "KeyS"
    D = "KeyD"
    SPACE = "Space"
    SHIFT_LEFT = "ShiftLeft"
    CONTROL_LEFT = "ControlLeft"
    ESCAPE = "Escape"


@dataclass(frozen=True, slots=True)
class PointerMotion:
    """Raw relative pointer motion, in device units."""

    dx: float
    dy: float


@dataclass(frozen=True, slots=True)
class KeyboardInput:
    """Physical key press (pressed=True) or release (pressed=False)."""

    code: KeyCode
    pressed: bool


InputEvent = PointerMotion | KeyboardInput | Any
"""Anything the host delivers. Events other than the two above are ignored."""
