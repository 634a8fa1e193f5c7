"""Data structures reported by the scheduler."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TaskCount:
    registered: int = 0
    previously_ran: int = 0
    ran: int = 0

    @property
    def pending(self) -> int:
        return self.registered - self.previously_ran - self.ran


@dataclass
class ScheduleSummary:
    """Summary of a scheduler run."""

    sweeps: int
    task_count: TaskCount
    run_order: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        """Return a human-readable summary of the run."""
        tc = self.task_count
        lines = [
            f"Scheduled {tc.registered} task(s) in {self.sweeps} sweep(s)",
            f"  Ran: {tc.ran}",
        ]
        if tc.previously_ran:
            lines.append(f"  Previously ran: {tc.previously_ran}")
        if tc.pending > 0:
            lines.append(f"  Pending: {tc.pending}")
        if self.run_order:
            lines.append(f"  Order: {' -> '.join(self.run_order)}")
        return "\n".join(lines)
