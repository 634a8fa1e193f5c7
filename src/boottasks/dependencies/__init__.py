"""Dependency kinds.

Tasks attach dependencies by kind name through ``Task.add_dependency``. The
built-in kinds are:

- Task: another task instance has run
- Singleton: the instance of a SingletonTask subclass has run
- Files: paths exist
- Devices: paths are block or character device nodes
- Mount: a path is a mount point
- Condition: a zero-argument callable returns a truthy value

Additional kinds are registered on ``default_dependency_kinds`` (or on a
``DependencyKinds`` copy assigned to a task class's ``dependency_kinds``).
"""

from boottasks._core.dependency import (
    DependencyABC,
    DependencyFactory,
    DependencyKinds,
    default_dependency_kinds,
)
from boottasks.dependencies._condition import Condition
from boottasks.dependencies._filesystem import Devices, Files, Mount
from boottasks.dependencies._task import SingletonDependency, TaskDependency

BUILTIN_KINDS: dict[str, DependencyFactory] = {
    "Task": TaskDependency,
    "Singleton": SingletonDependency,
    "Files": Files,
    "Devices": Devices,
    "Mount": Mount,
    "Condition": Condition,
}

for _name, _factory in BUILTIN_KINDS.items():
    default_dependency_kinds.register(_name, _factory, replace=True)

__all__ = [
    "BUILTIN_KINDS",
    "Condition",
    "DependencyABC",
    "DependencyKinds",
    "Devices",
    "Files",
    "Mount",
    "SingletonDependency",
    "TaskDependency",
    "default_dependency_kinds",
]
