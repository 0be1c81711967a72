"""Entity identity functionality: lightweight IDs and well-known entities."""

from fpcontrol.core.identity.models import EntityId, SystemEntity

__all__ = [
    "EntityId",
    "SystemEntity",
]
