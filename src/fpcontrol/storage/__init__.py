"""Storage backends for component data."""

from fpcontrol.storage.allocator import EntityAllocator
from fpcontrol.storage.local import LocalStorage
from fpcontrol.storage.protocol import Storage

__all__ = ["Storage", "LocalStorage", "EntityAllocator"]
