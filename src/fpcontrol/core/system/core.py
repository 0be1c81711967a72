"""The ``system`` decorator.

Usage:
    # Declared access, enforced at runtime
    @system(reads=(ControllerState,), writes=(Transform,))
    def aim(access: ScopedAccess) -> None:
        ...

    # No declarations: unrestricted, but still shares a snapshot with others
    @system()
    def anything(access: ScopedAccess) -> None:
        ...

    # Observers
    @system.readonly(reads=(RigidBody,))
    def telemetry(access: ScopedAccess) -> None:
        ...

    # Debugging: unrestricted and isolated in its own group
    @system.dev()
    def inspector(access: ScopedAccess) -> None:
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fpcontrol.core.query import AllAccess, NoAccess, normalize_access, normalize_reads_and_writes
from fpcontrol.core.query.operations import AccessSpec
from fpcontrol.core.system.models import SystemDescriptor, SystemMode

SystemFn = Callable[..., Any]


class _SystemDecorator:
    def __call__(
        self,
        reads: AccessSpec = None,
        writes: AccessSpec = None,
        mode: SystemMode = SystemMode.INTERACTIVE,
        phase: str = "update",
    ) -> Callable[[SystemFn], SystemDescriptor]:
        """Describe a system and its component access.

        Leaving out both ``reads`` and ``writes`` grants full access. Giving
        only one leaves the other empty. Write access implies read access.

        Raises:
            ValueError: If a READONLY system declares writes.
        """
        if mode == SystemMode.READONLY and writes not in (None, (), NoAccess()):
            raise ValueError("READONLY systems cannot declare writes")
        reads_access, writes_access = normalize_reads_and_writes(reads, writes)
        if mode == SystemMode.READONLY:
            writes_access = NoAccess()

        def wrap(fn: SystemFn) -> SystemDescriptor:
            return SystemDescriptor(
                name=fn.__name__,
                run=fn,
                reads=reads_access,
                writes=writes_access,
                mode=mode,
                phase=phase,
            )

        return wrap

    def readonly(
        self, reads: AccessSpec = None, phase: str = "update"
    ) -> Callable[[SystemFn], SystemDescriptor]:
        """A system that may read (everything, when ``reads`` is omitted) but never write."""
        reads_access = AllAccess() if reads is None else normalize_access(reads)

        def wrap(fn: SystemFn) -> SystemDescriptor:
            return SystemDescriptor(
                name=fn.__name__,
                run=fn,
                reads=reads_access,
                writes=NoAccess(),
                mode=SystemMode.READONLY,
                phase=phase,
            )

        return wrap

    def dev(self, phase: str = "update") -> Callable[[SystemFn], SystemDescriptor]:
        """Unchecked access, run alone before the shared group."""

        def wrap(fn: SystemFn) -> SystemDescriptor:
            return SystemDescriptor(
                name=fn.__name__,
                run=fn,
                reads=AllAccess(),
                writes=AllAccess(),
                mode=SystemMode.INTERACTIVE,
                phase=phase,
                runs_alone=True,
            )

        return wrap


system = _SystemDecorator()
