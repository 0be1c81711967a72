"""Access pattern normalization."""

from __future__ import annotations

from fpcontrol.core.query.models import AccessPattern, AllAccess, NoAccess, TypeAccess

AccessSpec = tuple[type, ...] | AllAccess | NoAccess | None


def normalize_access(spec: AccessSpec) -> AccessPattern:
    """Convert various access specifications to a normalized AccessPattern.

    - None or empty tuple -> NoAccess
    - AllAccess / NoAccess -> passthrough
    - Tuple of types -> TypeAccess

    Args:
        spec: Access specification in various formats.

    Returns:
        Normalized AccessPattern.

    Raises:
        TypeError: If spec is not a recognized access specification format.
    """
    if spec is None or spec == ():
        return NoAccess()
    if isinstance(spec, AllAccess | NoAccess):
        return spec
    if isinstance(spec, tuple) and all(isinstance(t, type) for t in spec):
        return TypeAccess(spec)
    raise TypeError(f"Invalid access specification: {spec}")


def normalize_reads_and_writes(
    reads: AccessSpec,
    writes: AccessSpec,
) -> tuple[AccessPattern, AccessPattern]:
    """Normalize a (reads, writes) pair.

    Omitting both grants full access. Declaring either one makes the omitted
    side default to no access.
    """
    if reads is None and writes is None:
        return AllAccess(), AllAccess()
    return normalize_access(reads), normalize_access(writes)
