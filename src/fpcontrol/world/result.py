"""Buffered changes produced by one system run.

A system either mutates through ScopedAccess, which records into a
SystemResult, or returns its changes. Accepted return shapes:

    None                                  # nothing to apply
    SystemResult(updates={...})
    {camera: {Transform: rotated}}        # per-entity, per-type
    {player: body}                        # per-entity, one component
    [(player, body), (camera, rotated)]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fpcontrol.core.identity import EntityId


class AccessViolationError(Exception):
    """A system touched a component type it did not declare."""


class ConflictError(Exception):
    """Two systems of one execution group wrote the same component of one entity."""


@dataclass
class SystemResult:
    """Pending writes, applied by the scheduler at the group boundary."""

    updates: dict[EntityId, dict[type, Any]] = field(default_factory=dict)
    inserts: dict[EntityId, list[Any]] = field(default_factory=dict)
    removes: dict[EntityId, list[type]] = field(default_factory=dict)
    destroys: list[EntityId] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.updates or self.inserts or self.removes or self.destroys)

    def merge(self, other: SystemResult) -> None:
        """Append ``other`` to this result. Updates to the same component keep the later value."""
        for entity, written in other.updates.items():
            self.updates.setdefault(entity, {}).update(written)
        for entity, added in other.inserts.items():
            self.inserts.setdefault(entity, []).extend(added)
        for entity, dropped in other.removes.items():
            self.removes.setdefault(entity, []).extend(dropped)
        self.destroys.extend(other.destroys)


SystemReturn = (
    None
    | SystemResult
    | dict[EntityId, dict[type, Any]]
    | dict[EntityId, Any]
    | list[tuple[EntityId, Any]]
)


def _require_entity(value: object, what: str) -> EntityId:
    if not isinstance(value, EntityId):
        raise TypeError(f"Expected EntityId {what}, got {type(value)}")
    return value


def normalize_result(raw: SystemReturn) -> SystemResult:
    """Turn a system's return value into a SystemResult.

    Raises:
        TypeError: For any shape other than the ones listed in the module docstring.
    """
    if raw is None:
        return SystemResult()
    if isinstance(raw, SystemResult):
        return raw

    result = SystemResult()
    if isinstance(raw, dict):
        for key, value in raw.items():
            entity = _require_entity(key, "key")
            result.updates[entity] = value if isinstance(value, dict) else {type(value): value}
        return result

    if isinstance(raw, list):
        for item in raw:
            if not (isinstance(item, tuple) and len(item) == 2):
                raise TypeError(f"Expected (EntityId, component) tuple, got {item!r}")
            entity = _require_entity(item[0], "in pair")
            result.updates.setdefault(entity, {})[type(item[1])] = item[1]
        return result

    raise TypeError(f"Invalid system return type: {type(raw)}")


def validate_result_access(
    result: SystemResult,
    writable: frozenset[type] | None,
    system_name: str,
    readonly: bool = False,
) -> None:
    """Check every change against the system's declaration.

    Args:
        result: Changes collected from one run.
        writable: Declared writable types; None means unrestricted.
        system_name: Used in the error message.
        readonly: Whether the system is READONLY, which also rules out destroys.

    Raises:
        AccessViolationError: On the first undeclared type, or any destroy
            from a READONLY system.
    """
    if readonly and result.destroys:
        raise AccessViolationError(
            f"System '{system_name}' is READONLY; cannot destroy {result.destroys[0]}"
        )
    if writable is None:
        return

    for written in result.updates.values():
        for comp_type in written:
            if comp_type not in writable:
                raise AccessViolationError(
                    f"System '{system_name}' wrote {comp_type.__name__}: not in writable types"
                )
    for added in result.inserts.values():
        for comp in added:
            if type(comp) not in writable:
                raise AccessViolationError(
                    f"System '{system_name}' inserted {type(comp).__name__}: "
                    f"not in writable types"
                )
    for dropped in result.removes.values():
        for comp_type in dropped:
            if comp_type not in writable:
                raise AccessViolationError(
                    f"System '{system_name}' removed {comp_type.__name__}: "
                    f"not in writable types"
                )
