"""Dependency interface and the kind map used to build dependencies by name."""

import abc
import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from boottasks.exceptions import DuplicateDependencyKindError, UnknownDependencyKindError

if TYPE_CHECKING:
    from boottasks._core.task import Task

logger = logging.getLogger(__name__)


class DependencyABC(metaclass=abc.ABCMeta):
    """Something a task waits on before it may run.

    A dependency answers two independent questions:

    - ``fulfilled()``: may the owning task run right now? Called on every sweep
      until the task has run, so it must be cheap and safe to repeat.
    - ``depends_on(task)``: does satisfying this dependency require ``task`` to
      have run first? Used only to order tasks before the first sweep.

    Dependencies on external conditions (files, devices, mounts) have no
    opinion on task order and keep the default ``depends_on``.
    """

    @abc.abstractmethod
    def fulfilled(self) -> bool:
        """Whether the dependency currently holds."""
        ...

    def depends_on(self, task: "Task") -> bool:
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


DependencyFactory = Callable[..., DependencyABC]


class DependencyKinds:
    """Closed map from a kind name to the callable constructing that kind.

    Tasks look kinds up here in ``Task.add_dependency(kind, *args)``. New kinds
    are added explicitly:

        @default_dependency_kinds.register("Network")
        class NetworkUp(DependencyABC):
            ...
    """

    def __init__(self, factories: dict[str, DependencyFactory] | None = None) -> None:
        self._factories: dict[str, DependencyFactory] = dict(factories or {})

    def register(
        self,
        name: str,
        factory: DependencyFactory | None = None,
        *,
        replace: bool = False,
    ) -> Any:
        """Register ``factory`` under ``name``.

        Without ``factory`` this returns a decorator.

        Raises:
            DuplicateDependencyKindError: If ``name`` is taken and ``replace`` is
                False.
        """
        if factory is None:

            def decorator(f: DependencyFactory) -> DependencyFactory:
                self.register(name, f, replace=replace)
                return f

            return decorator

        if name in self._factories and not replace:
            raise DuplicateDependencyKindError(name)
        self._factories[name] = factory
        logger.debug("Dependency kind %s registered...", name)
        return factory

    def create(self, name: str, *args: Any) -> DependencyABC:
        """Construct the dependency registered under ``name``.

        Raises:
            UnknownDependencyKindError: If no kind is registered under ``name``.
        """
        try:
            factory = self._factories[name]
        except KeyError:
            raise UnknownDependencyKindError(name, self._factories) from None
        return factory(*args)

    def names(self) -> list[str]:
        return sorted(self._factories)

    def copy(self) -> "DependencyKinds":
        return DependencyKinds(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._factories)


# Populated with the built-in kinds by boottasks.dependencies
default_dependency_kinds = DependencyKinds()
