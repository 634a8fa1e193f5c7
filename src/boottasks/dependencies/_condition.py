from collections.abc import Callable

from boottasks._core.dependency import DependencyABC


class Condition(DependencyABC):
    """Fulfilled while ``predicate()`` returns a truthy value.

    Escape hatch for external conditions without a dedicated kind.
    """

    def __init__(
        self, predicate: Callable[[], object], description: str | None = None
    ) -> None:
        if not callable(predicate):
            raise TypeError(f"Expected a callable, got {predicate!r}")
        self.predicate = predicate
        self.description = description or getattr(
            predicate, "__name__", repr(predicate)
        )

    def fulfilled(self) -> bool:
        return bool(self.predicate())

    def __repr__(self) -> str:
        return f"Condition({self.description})"
