"""Scheduler module for boottasks.

- Scheduler: sorts the registered tasks, then sweeps until all have run
- run_tasks(): shorthand for Scheduler(registry).run()
- ScheduleSummary / TaskCount: what a run reports
"""

from boottasks.scheduler._base import ScheduleSummary, TaskCount
from boottasks.scheduler._polling import Scheduler, run_tasks

__all__ = [
    "ScheduleSummary",
    "Scheduler",
    "TaskCount",
    "run_tasks",
]
