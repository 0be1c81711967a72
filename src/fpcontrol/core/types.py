"""Core type definitions for fpcontrol."""

from typing import TypeAlias, TypeVar

T = TypeVar("T")

Copy: TypeAlias = T
"""Type alias indicating a value is a copy that won't auto-persist.

Components read from a World or a ScopedAccess are deep copies. Mutating a
copy does NOT change world state; write it back via `world.set(entity, comp)`
or `access[entity, Type] = comp`.
"""
