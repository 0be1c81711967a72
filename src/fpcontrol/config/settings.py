"""Configuration settings using Pydantic Settings.

Provides typed controller tuning with environment variable support.

Usage:
    from fpcontrol.config import ControllerSettings

    # Load from environment variables (FPCONTROL_*)
    settings = ControllerSettings()

    # Or override with explicit values
    settings = ControllerSettings(sensitivity=0.2, movement_speed=180.0)
"""

from __future__ import annotations

from functools import cache

import numpy as np
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fpcontrol.core.component import component


@component
class ControllerSettings(BaseSettings):  # type: ignore[misc]
    """Tuning for one first-person controller.

    Registered as a component: attach an instance to a controller entity to
    override the defaults for that character only.

    Attributes:
        sensitivity: Degrees of yaw/pitch per unit of pointer motion.
        movement_speed: Planar speed factor, multiplied by the tick's dt.
        pitch_limit: Symmetric pitch clamp in degrees, strictly below 90.
        epsilon: Direction vectors this short or shorter count as "no movement".

    Environment Variables:
        FPCONTROL_SENSITIVITY
        FPCONTROL_MOVEMENT_SPEED
        FPCONTROL_PITCH_LIMIT
        FPCONTROL_EPSILON
    """

    model_config = SettingsConfigDict(
        env_prefix="FPCONTROL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sensitivity: float = Field(default=0.35, ge=0.0)
    movement_speed: float = Field(default=240.0, ge=0.0)
    pitch_limit: float = Field(default=89.9, gt=0.0, lt=90.0)
    epsilon: float = Field(default=float(np.finfo(np.float32).eps), ge=0.0)


@cache
def default_settings() -> ControllerSettings:
    """Settings used by controllers that carry no ControllerSettings component.

    Built once per process from the environment.
    """
    return ControllerSettings()
