"""A named tuple for representing the outcome of a single task."""

from typing import NamedTuple

from .enums import TaskStatus


class TaskOutcome(NamedTuple):
    """A named tuple that records how a task went in an executor run.

    Attributes:
        name: The display name of the task.
        status: `TaskStatus.OK` or `TaskStatus.DEGRADED`.
        errors: The init and run errors, as strings.
        elapsed: The runtime of the task in seconds.
    """

    name: str
    status: TaskStatus
    errors: tuple[str, ...]
    elapsed: float

    @property
    def ok(self) -> bool:
        return self.status == TaskStatus.OK
