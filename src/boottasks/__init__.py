from importlib.metadata import version

from boottasks._core.task import SingletonTask, Task, compare_tasks, order_tasks
from boottasks.config import BootTasksSettings, config_provider, get_config
from boottasks.dependencies import (
    DependencyABC,
    DependencyKinds,
    default_dependency_kinds,
)
from boottasks.exceptions import (
    BootTasksError,
    DuplicateDependencyKindError,
    SchedulerStalledError,
    SingletonConstructionError,
    UnknownDependencyKindError,
)
from boottasks.registry import TaskRegistry
from boottasks.scheduler import ScheduleSummary, Scheduler, run_tasks

__version__ = version("boottasks")


__all__ = [
    "__version__",
    "BootTasksError",
    "BootTasksSettings",
    "compare_tasks",
    "config_provider",
    "default_dependency_kinds",
    "DependencyABC",
    "DependencyKinds",
    "DuplicateDependencyKindError",
    "get_config",
    "order_tasks",
    "run_tasks",
    "ScheduleSummary",
    "Scheduler",
    "SchedulerStalledError",
    "SingletonConstructionError",
    "SingletonTask",
    "Task",
    "TaskRegistry",
    "UnknownDependencyKindError",
]
