"""Polling scheduler.

Dependencies such as device nodes and mounts cannot be known in advance, so
tasks are not resolved up front: the scheduler sorts them once, then sweeps
over the ones that have not run, running each whose dependencies hold right
now, and pauses between sweeps until everything has run.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from boottasks._core.task import Task
from boottasks.config import config_provider
from boottasks.exceptions import SchedulerStalledError
from boottasks.registry import TaskRegistry
from boottasks.scheduler._base import ScheduleSummary, TaskCount

logger = logging.getLogger(__name__)


class Scheduler:
    """Runs every task of a registry exactly once, in dependency order.

    Args:
        registry: The tasks to run.
        sweep_interval: Pause between sweeps in seconds. Defaults to the
            configured ``sweep_interval``.
        max_sweeps: Give up with ``SchedulerStalledError`` after this many
            sweeps. Defaults to the configured ``max_sweeps``; None (the
            default configuration) polls forever.
        sleep: Function used to pause between sweeps.
    """

    def __init__(
        self,
        registry: TaskRegistry,
        *,
        sweep_interval: float | None = None,
        max_sweeps: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        config = config_provider.get()
        self.registry = registry
        self.sweep_interval = (
            config.sweep_interval if sweep_interval is None else sweep_interval
        )
        self.max_sweeps = config.max_sweeps if max_sweeps is None else max_sweeps
        self._sleep = sleep

    def plan(self) -> list[Task]:
        """Construct pending singletons and sort, without running anything.

        Returns the tasks in the order sweeps visit them.
        """
        self.registry.materialize_singletons()
        self.registry.sort()
        return list(self.registry)

    def run(self) -> ScheduleSummary:
        """Run all tasks.

        Returns once every task has run. Exceptions raised by a task abort the
        run and propagate unchanged.

        Raises:
            SchedulerStalledError: If ``max_sweeps`` sweeps completed with tasks
                still pending.
        """
        self.plan()

        task_count = TaskCount(
            registered=len(self.registry),
            previously_ran=sum(1 for task in self.registry if task.ran),
        )
        summary = ScheduleSummary(sweeps=0, task_count=task_count)

        while not self.registry.all_ran():
            summary.sweeps += 1
            logger.debug("Tasks resolution sweep %d start", summary.sweeps)
            self._sweep(summary)

            if self.registry.all_ran():
                break
            if self.max_sweeps is not None and summary.sweeps >= self.max_sweeps:
                pending = [task.name for task in self.registry.pending()]
                logger.error(
                    "Giving up after %d sweep(s), pending: %s",
                    summary.sweeps,
                    ", ".join(pending),
                )
                raise SchedulerStalledError(pending, summary.sweeps)
            # Don't burn the CPU
            self._sleep(self.sweep_interval)

        logger.debug("All %d task(s) ran", task_count.registered)
        return summary

    def _sweep(self, summary: ScheduleSummary) -> None:
        for task in self.registry.pending():
            try:
                ran = task._try_run()
            except Exception:
                logger.error("Task %s failed, aborting", task.name)
                raise
            if ran:
                summary.task_count.ran += 1
                summary.run_order.append(task.name)


def run_tasks(registry: TaskRegistry, **kwargs) -> ScheduleSummary:
    """Shorthand for ``Scheduler(registry, **kwargs).run()``."""
    return Scheduler(registry, **kwargs).run()
