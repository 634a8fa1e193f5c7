"""Task registry.

A ``TaskRegistry`` is created once at process entry, filled during setup and
handed to the ``Scheduler``. It holds:

- every registered task, in registration order until the scheduler sorts it
- the singleton task classes declared but not constructed yet
"""

import itertools
import logging
from collections.abc import Iterator
from typing import Any, TypeVar

from boottasks._core.task import SingletonTask, Task, order_tasks, singleton_key

logger = logging.getLogger(__name__)

TaskT = TypeVar("TaskT", bound=Task)
SingletonT = TypeVar("SingletonT", bound=type[SingletonTask])


class TaskRegistry:
    """Holds all tasks of one boot sequence."""

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._pending_singletons: list[type[SingletonTask]] = []
        self._declared_singletons: dict[str, type[SingletonTask]] = {}
        self._sequence = itertools.count()

    # ---- setup ----

    def register(self, task: TaskT) -> TaskT:
        """Register a constructed task to be run."""
        if not isinstance(task, Task):
            raise TypeError(f"Expected a Task instance, got {task!r}")
        task.sequence = next(self._sequence)
        self._tasks.append(task)
        logger.debug("Task %s registered...", task.name)
        return task

    def add(self, task_cls: type[TaskT], *args: Any, **kwargs: Any) -> TaskT:
        """Construct ``task_cls(*args, **kwargs)`` and register it."""
        logger.debug("New instance of %s...", task_cls.__name__)
        logger.debug(" -> %r %r", args, kwargs)
        return self.register(task_cls(*args, **kwargs))

    def register_singleton_class(self, task_cls: type[SingletonTask]) -> None:
        """Declare a singleton task class, to be constructed when the scheduler starts.

        Declaring the same class again (e.g. its module was loaded twice) keeps
        the first declaration: the new class object shares its instance.
        """
        if not (isinstance(task_cls, type) and issubclass(task_cls, SingletonTask)):
            raise TypeError(f"Expected a SingletonTask subclass, got {task_cls!r}")

        key = singleton_key(task_cls)
        first = self._declared_singletons.get(key)
        if first is not None:
            if first is not task_cls:
                task_cls._singleton_slot = first._singleton_slot
            logger.debug("Task %s already registered, skipping...", task_cls.__name__)
            return

        self._declared_singletons[key] = task_cls
        self._pending_singletons.append(task_cls)
        logger.debug("Task %s registered...", task_cls.__name__)

    def singleton(self, task_cls: SingletonT) -> SingletonT:
        """Class decorator form of ``register_singleton_class``."""
        self.register_singleton_class(task_cls)
        return task_cls

    # ---- scheduler startup ----

    def materialize_singletons(self) -> list[Task]:
        """Construct and register the instance of every pending singleton class.

        Returns the newly registered instances. The pending list is cleared.
        An instance obtained earlier (e.g. through ``obtain()``) is registered
        here if it is not registered yet.
        """
        pending, self._pending_singletons = self._pending_singletons, []
        registered: list[Task] = []
        for task_cls in pending:
            instance = task_cls.obtain()
            if not any(task is instance for task in self._tasks):
                registered.append(self.register(instance))
        return registered

    def sort(self) -> None:
        """Sort tasks in place, to reduce the number of sweeps needed.

        Every task is placed after the tasks it depends on. This only reduces
        the number of sweeps: files, mounts and devices show up unpredictably.
        """
        self._tasks[:] = order_tasks(self._tasks)

    # ---- inspection ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def pending_singletons(self) -> tuple[type[SingletonTask], ...]:
        return tuple(self._pending_singletons)

    def pending(self) -> list[Task]:
        """Tasks that have not run, in current order."""
        return [task for task in self._tasks if not task.ran]

    def all_ran(self) -> bool:
        return all(task.ran for task in self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __repr__(self) -> str:
        return (
            f"TaskRegistry(tasks={len(self._tasks)}, "
            f"pending_singletons={len(self._pending_singletons)})"
        )
