"""Configuration module using Pydantic Settings.

Usage:
    from fpcontrol.config import ControllerSettings

    settings = ControllerSettings(sensitivity=0.5)
"""

from fpcontrol.config.settings import ControllerSettings, default_settings

__all__ = [
    "ControllerSettings",
    "default_settings",
]
