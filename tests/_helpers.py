"""Helper tasks and conditions shared by the tests."""

from __future__ import annotations

from boottasks import Task


class RecordingTask(Task):
    """Appends its name to a shared log when run and counts its runs."""

    def __init__(self, log: list[str], *after: Task) -> None:
        super().__init__()
        self.log = log
        self.calls = 0
        for task in after:
            self.add_dependency("Task", task)

    def run(self) -> None:
        self.calls += 1
        self.log.append(self.name)


def recording_task_class(name: str, *, ux_priority: int = 0) -> type[RecordingTask]:
    """Create a RecordingTask subclass named ``name``.

    Task identity (and the name tie-break) is the class name, so tests that
    care about names need distinct classes.
    """
    return type(name, (RecordingTask,), {"ux_priority": ux_priority})


class FailingTask(Task):
    def run(self) -> None:
        raise RuntimeError("boom")


class CountingCondition:
    """Predicate that is false for its first ``false_for`` calls."""

    def __init__(self, false_for: int) -> None:
        self.false_for = false_for
        self.calls = 0

    def __call__(self) -> bool:
        self.calls += 1
        return self.calls > self.false_for


class SleepRecorder:
    """Stand-in for time.sleep that records the requested pauses."""

    def __init__(self) -> None:
        self.pauses: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.pauses.append(seconds)
