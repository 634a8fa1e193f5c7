"""boottasks exceptions.

Construction-time errors (unknown dependency kinds, misuse of singleton tasks)
are raised synchronously to the code building the task graph. Errors raised by
a task's own ``run()`` are never wrapped; they propagate out of the scheduler
unchanged.
"""

from collections.abc import Iterable


class BootTasksError(Exception):
    """Base exception for all boottasks errors."""

    pass


class UnknownDependencyKindError(BootTasksError, LookupError):
    """No dependency kind is registered under the requested name.

    Attributes:
        kind: The name that was looked up.
        known: Names registered at the time of the lookup.
    """

    def __init__(self, kind: str, known: Iterable[str] = ()):
        self.kind = kind
        self.known = tuple(sorted(known))
        msg = f"No dependency named {kind!r}"
        if self.known:
            msg += f" (known kinds: {', '.join(self.known)})"
        super().__init__(msg)


class DuplicateDependencyKindError(BootTasksError):
    """A dependency kind name was registered twice."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(
            f"Dependency kind {kind!r} is already registered. "
            f"Pass replace=True to override it."
        )


class SingletonConstructionError(BootTasksError):
    """A singleton task was constructed outside its once-only factory.

    This is raised when:
    - A SingletonTask subclass is instantiated directly instead of via obtain()
    - The constructor of a singleton asks for its own instance (re-entrancy)
    """

    pass


class SchedulerStalledError(BootTasksError):
    """The configured sweep limit was reached with tasks still pending.

    Only raised when the scheduler runs with ``max_sweeps``; without a limit a
    stalled graph keeps the scheduler polling forever.

    Attributes:
        pending: Names of the tasks that had not run.
        sweeps: Number of sweeps performed.
    """

    def __init__(self, pending: Iterable[str], sweeps: int):
        self.pending = tuple(pending)
        self.sweeps = sweeps
        super().__init__(
            f"{len(self.pending)} task(s) still pending after {sweeps} sweep(s): "
            f"{', '.join(self.pending)}"
        )
