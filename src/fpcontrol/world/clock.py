"""Tick clock singleton."""

from __future__ import annotations

from dataclasses import dataclass

from fpcontrol.core.component import component


@component
@dataclass(frozen=True, slots=True)
class Clock:
    """Timing of the tick in progress, published on SystemEntity.CLOCK.

    Attributes:
        dt: Seconds elapsed since the previous tick, passed through unclamped.
        tick: Number of the tick in progress, starting at 1.
    """

    dt: float = 0.0
    tick: int = 0
