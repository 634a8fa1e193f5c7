"""Dependencies on other tasks.

These are the only kinds with an opinion on ordering: they are fulfilled once
the referenced task has run, and they report that task (and, transitively,
everything it depends on) through ``depends_on``.
"""

from boottasks._core.dependency import DependencyABC
from boottasks._core.task import SingletonTask, Task, singleton_key


class TaskDependency(DependencyABC):
    def __init__(self, task: Task) -> None:
        if not isinstance(task, Task):
            raise TypeError(f"Expected a Task instance, got {task!r}")
        self.task = task

    def fulfilled(self) -> bool:
        return self.task.ran

    def depends_on(self, task: Task) -> bool:
        return task is self.task or self.task.depends_on(task)

    def __repr__(self) -> str:
        return f"TaskDependency({self.task.name})"


class SingletonDependency(DependencyABC):
    """Dependency on the one instance of a SingletonTask subclass.

    The instance does not exist until the scheduler starts, so this resolves
    it lazily on every call.
    """

    def __init__(self, task_cls: type[SingletonTask]) -> None:
        if not (isinstance(task_cls, type) and issubclass(task_cls, SingletonTask)):
            raise TypeError(f"Expected a SingletonTask subclass, got {task_cls!r}")
        self.task_cls = task_cls

    def fulfilled(self) -> bool:
        instance = self.task_cls.current()
        return instance is not None and instance.ran

    def depends_on(self, task: Task) -> bool:
        instance = self.task_cls.current()
        if instance is None:
            return isinstance(task, SingletonTask) and singleton_key(
                type(task)
            ) == singleton_key(self.task_cls)
        return task is instance or instance.depends_on(task)

    def __repr__(self) -> str:
        return f"SingletonDependency({self.task_cls.__name__})"
