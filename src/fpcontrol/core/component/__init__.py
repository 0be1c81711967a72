"""The @component decorator and the registry it records into."""

from fpcontrol.core.component.core import (
    ComponentRegistry,
    component,
    get_registry,
)

__all__ = [
    "component",
    "get_registry",
    "ComponentRegistry",
]
