"""Folding the results of one execution group into a single change set.

Every system in a group saw the same snapshot, so two of them may have written
the same (entity, component). The strategy decides what reaches storage.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from fpcontrol.core.identity import EntityId
from fpcontrol.world.result import ConflictError, SystemResult


def merge_last_writer_wins(results: Sequence[SystemResult], names: Sequence[str]) -> SystemResult:
    """Fold results in registration order; a later write replaces an earlier one."""
    folded = SystemResult()
    for result in results:
        folded.merge(result)
    return folded


def _touched(result: SystemResult) -> Iterator[tuple[EntityId, type]]:
    """Every (entity, component type) a result updates, inserts or removes."""
    for entity, written in result.updates.items():
        for comp_type in written:
            yield entity, comp_type
    for entity, added in result.inserts.items():
        for comp in added:
            yield entity, type(comp)
    for entity, dropped in result.removes.items():
        for comp_type in dropped:
            yield entity, comp_type


def merge_error_on_conflict(results: Sequence[SystemResult], names: Sequence[str]) -> SystemResult:
    """Fold results, refusing overlapping writes.

    Raises:
        ConflictError: If two systems wrote the same component of one entity,
            whether by update, insert or removal.
    """
    writers: dict[tuple[EntityId, type], int] = {}
    for position, result in enumerate(results):
        for entity, comp_type in _touched(result):
            earlier = writers.setdefault((entity, comp_type), position)
            if earlier != position:
                raise ConflictError(
                    f"Conflict: {names[position]} and {names[earlier]} both wrote "
                    f"{comp_type.__name__} on {entity}"
                )
    return merge_last_writer_wins(results, names)
