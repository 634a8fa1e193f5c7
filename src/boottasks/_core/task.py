import abc
import functools
import logging
from abc import abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, ClassVar

from boottasks._core.dependency import (
    DependencyABC,
    DependencyKinds,
    default_dependency_kinds,
)
from boottasks.exceptions import SingletonConstructionError

logger = logging.getLogger(__name__)


class Task(metaclass=abc.ABCMeta):
    """A unit of boot-time work, run at most once once its dependencies hold.

    Subclasses implement ``run()`` and declare what they wait on in their
    constructor:

        class MountRoot(Task):
            def __init__(self, device: str) -> None:
                super().__init__()
                self.device = device
                self.add_dependency("Devices", device)

            def run(self) -> None:
                ...

    Tasks are scheduled once registered in a ``TaskRegistry``.
    """

    # Ordering hint, lower sorts earlier. Reserved for tasks that improve the
    # boot UX (progress display and the like); never a correctness gate.
    ux_priority: ClassVar[int] = 0

    dependency_kinds: ClassVar[DependencyKinds] = default_dependency_kinds

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        logger.debug("%s created...", cls.__name__)

    def __init__(self) -> None:
        self._dependencies: list[DependencyABC] = []
        self._ran = False
        # Assigned by TaskRegistry.register, final ordering tie-break.
        self.sequence: int | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def ran(self) -> bool:
        return self._ran

    @property
    def dependencies(self) -> tuple[DependencyABC, ...]:
        return tuple(self._dependencies)

    @abstractmethod
    def run(self) -> None:
        """Perform the task's effect.

        Called at most once, and only after every dependency was fulfilled.
        Exceptions are not handled by the scheduler and abort the whole run.
        """
        ...

    def add_dependency(self, kind: str, *args: Any) -> DependencyABC:
        """Construct a dependency of the named kind and attach it to this task.

        Raises:
            UnknownDependencyKindError: If ``kind`` is not registered in
                ``dependency_kinds``. The task is left unchanged.
        """
        dependency = self.dependency_kinds.create(kind, *args)
        self._dependencies.append(dependency)
        return dependency

    def dependencies_fulfilled(self) -> bool:
        return all(dependency.fulfilled() for dependency in self._dependencies)

    def depends_on(self, other: "Task") -> bool:
        """Whether one of our dependencies requires ``other`` to have run."""
        return any(dependency.depends_on(other) for dependency in self._dependencies)

    def compare(self, other: "Task") -> int:
        return compare_tasks(self, other)

    def _try_run(self) -> bool:
        """Run the task if it has not run yet and its dependencies hold.

        Returns whether the task ran during this call.
        """
        logger.debug("Looking to run task %s...", self.name)
        if self._ran or not self.dependencies_fulfilled():
            return False
        logger.info("Running %s...", self.name)
        self.run()
        logger.debug("Finished %s...", self.name)
        self._ran = True
        return True

    def __repr__(self) -> str:
        return f"{self.name}(sequence={self.sequence}, ran={self._ran})"


def compare_tasks(a: Task, b: Task) -> int:
    """Comparison used to order tasks before the first sweep.

    Sort first by dependencies, then by UX priority, then by name, then by
    registration sequence (for a reproducible order). Cyclic dependency hints
    make this inconsistent and the resulting order undefined.

    The dependency rule only relates the two tasks compared, so this is not
    transitive across unrelated tasks; use ``order_tasks`` to sort a whole set.
    Each call walks the dependency graph of both tasks. ``order_tasks`` caches
    those walks, this function does not.
    """
    return _compare(a, b, _depends_on)


def _depends_on(a: Task, b: Task) -> bool:
    return a.depends_on(b)


def _compare(a: Task, b: Task, depends_on: Callable[[Task, Task], bool]) -> int:
    if a is b:
        return 0
    if depends_on(b, a):
        return -1
    if depends_on(a, b):
        return 1

    if a.ux_priority != b.ux_priority:
        return -1 if a.ux_priority < b.ux_priority else 1

    if a.name != b.name:
        return -1 if a.name < b.name else 1

    a_seq = -1 if a.sequence is None else a.sequence
    b_seq = -1 if b.sequence is None else b.sequence
    return (a_seq > b_seq) - (a_seq < b_seq)


def order_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Return ``tasks`` ordered so that every task follows the tasks it depends on.

    Tasks are picked one at a time: among the remaining tasks that wait on no
    other remaining task, the smallest by ``compare_tasks`` goes next. Between
    such tasks the comparison falls back to priority, name and sequence, which
    is a total order, so the result does not depend on the input order unless
    names and priorities tie. If every remaining task waits on another one (a
    cycle), the smallest remaining task goes next.

    ``depends_on`` answers are cached for the duration of the call.
    """
    remaining = list(tasks)
    depends_on = functools.cache(_depends_on)
    key = functools.cmp_to_key(functools.partial(_compare, depends_on=depends_on))

    ordered: list[Task] = []
    while remaining:
        ready = [
            task
            for task in remaining
            if not any(
                other is not task and depends_on(task, other) for other in remaining
            )
        ]
        task = min(ready or remaining, key=key)
        remaining = [other for other in remaining if other is not task]
        ordered.append(task)
    return ordered


def singleton_key(cls: type) -> str:
    """Identity of a singleton class that survives the module being loaded twice."""
    return f"{cls.__module__}.{cls.__qualname__}"


class _SingletonSlot:
    """Once-only storage for the instance of one SingletonTask subclass."""

    __slots__ = ("key", "instance", "constructing", "admit")

    def __init__(self, key: str) -> None:
        self.key = key
        self.instance: SingletonTask | None = None
        self.constructing = False
        # One __new__ call is allowed while get_or_create constructs.
        self.admit = False

    def get_or_create(self, cls: type["SingletonTask"]) -> tuple["SingletonTask", bool]:
        if self.instance is not None:
            return self.instance, False
        if self.constructing:
            raise SingletonConstructionError(
                f"Re-entrant construction of singleton task {self.key}"
            )
        logger.debug("New instance of %s...", cls.__name__)
        self.constructing = True
        self.admit = True
        try:
            instance = cls()
        finally:
            self.constructing = False
            self.admit = False
        self.instance = instance
        return instance, True


class SingletonTask(Task):
    """A task with at most one instance per concrete subclass.

    Declare the class with ``@registry.singleton``; the scheduler constructs the
    instance when it starts, so constructors may have side effects that should
    not happen while the task graph is still being set up. Singleton
    constructors take no arguments.
    """

    _singleton_slot: ClassVar[_SingletonSlot]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._singleton_slot = _SingletonSlot(singleton_key(cls))

    def __new__(cls, *args: Any, **kwargs: Any) -> "SingletonTask":
        slot = cls._singleton_slot
        if not slot.admit:
            raise SingletonConstructionError(
                f"{cls.__name__} is a singleton task; use {cls.__name__}.obtain()"
            )
        slot.admit = False
        return super().__new__(cls)

    @classmethod
    def obtain(cls) -> "SingletonTask":
        """Return the instance, constructing it on first use."""
        instance, _ = cls._singleton_slot.get_or_create(cls)
        return instance

    @classmethod
    def current(cls) -> "SingletonTask | None":
        """Return the instance if it has been constructed, else None."""
        return cls._singleton_slot.instance
