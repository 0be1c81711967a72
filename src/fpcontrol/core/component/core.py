"""Component registration.

Usage:
    @component
    @dataclass(slots=True)
    class Stamina:
        value: float

    # Pydantic models (including settings models) work the same way:
    @component
    class Tuning(BaseModel):
        speed: float = 1.0

Storage keys components by class, so registration only validates the class
and records it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import is_dataclass
from typing import overload


class ComponentRegistry:
    """The set of classes decorated with ``@component``, in registration order."""

    def __init__(self) -> None:
        self._types: dict[type, None] = {}

    def register(self, cls: type) -> type:
        self._types.setdefault(cls, None)
        return cls

    def is_registered(self, cls: type) -> bool:
        return cls in self._types

    def __iter__(self) -> Iterator[type]:
        return iter(list(self._types))

    def __len__(self) -> int:
        return len(self._types)


_registry = ComponentRegistry()


def get_registry() -> ComponentRegistry:
    """The registry that ``@component`` writes to."""
    return _registry


def _is_pydantic(cls: type) -> bool:
    """True for subclasses of pydantic's BaseModel, checked without importing pydantic."""
    return any(
        base.__name__ == "BaseModel" and base.__module__.startswith("pydantic")
        for base in cls.__mro__
    )


@overload
def component(cls: type) -> type: ...


@overload
def component(cls: None = None) -> Callable[[type], type]: ...


def component(cls: type | None = None) -> type | Callable[[type], type]:
    """Mark a dataclass or pydantic model as a component type.

    Usable bare (``@component``) or called (``@component()``). Stack it above
    ``@dataclass`` so it sees the finished class.

    Raises:
        TypeError: If the class is neither a dataclass nor a pydantic model.
    """

    def register(target: type) -> type:
        if not (is_dataclass(target) or _is_pydantic(target)):
            raise TypeError(
                f"{target.__name__} cannot be a component: decorate it with @dataclass "
                f"or derive it from a pydantic BaseModel first"
            )
        return _registry.register(target)

    return register if cls is None else register(cls)
