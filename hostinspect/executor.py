"""The `Executor` class, which runs the tasks of one machine."""

import time
from logging import getLogger
from typing import TYPE_CHECKING, Any

from .tasks import Task
from .types import Finding, Options, TaskOutcome, TaskStatus

if TYPE_CHECKING:
    from .machine import Machine

logger = getLogger("hostinspect.executor")


class Executor:
    """Runs a machine's tasks one after another over its connection.

    A failing task never stops the run: init and run errors are logged,
    recorded as a degraded `TaskOutcome` and the next task starts. The
    machine's connection is closed when the last task is done.
    """

    def __init__(self, machine: "Machine", tasks: list[Task]) -> None:
        """Initializes the `Executor` object.

        Args:
            machine: The connected machine.
            tasks: The tasks to run, in order.
        """
        self.machine = machine
        self.tasks = tasks
        self.result: dict[str, Any] = {}
        self.abnormal_result: list[Finding] = []
        self.outcomes: list[TaskOutcome] = []

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} machine={self.machine.name} tasks={len(self.tasks)}>"

    def execute(self, options: Options) -> tuple[dict[str, Any], list[Finding]]:
        """Runs all tasks and returns their merged output.

        Args:
            options: The run wide options passed to every task.

        Returns:
            The merged result-map and the findings of all tasks, in task
            order.
        """
        logger.info(
            "starting inspection of %s, %d tasks", self.machine.name, len(self.tasks)
        )
        self.result = {}
        self.abnormal_result = []
        self.outcomes = []
        try:
            for task in self.tasks:
                self.outcomes.append(self._execute_task(task, options))
        finally:
            self.machine.down()
            logger.debug("%s: connection closed", self.machine.name)

        logger.info("inspection of %s finished", self.machine.name)
        return self.result, self.abnormal_result

    def _execute_task(self, task: Task, options: Options) -> TaskOutcome:
        start = time.monotonic()
        name = task.get_name()
        errors: list[str] = []
        logger.info("%s: running task %s", self.machine.name, name)

        try:
            task.init(options)
        except Exception as e:
            logger.error("%s: initializing task %s failed: %s", self.machine.name, name, e)
            errors.append(str(e))

        try:
            task.run()
        except Exception as e:
            logger.warning("%s: task %s failed: %s", self.machine.name, name, e)
            errors.append(str(e))

        elapsed = time.monotonic() - start
        self.merge_result(*task.get_result())
        logger.info("%s: task %s finished in %.2fs", self.machine.name, name, elapsed)

        return TaskOutcome(
            name,
            TaskStatus.DEGRADED if errors else TaskStatus.OK,
            tuple(errors),
            elapsed,
        )

    def merge_result(self, result: dict[str, Any], abnormal_result: list[Finding]) -> None:
        """Merges the output of one task into the aggregates.

        Keys already present are overwritten, findings are appended.

        Args:
            result: The task's result-map.
            abnormal_result: The task's findings.
        """
        self.result.update(result)
        self.abnormal_result.extend(abnormal_result)
