"""The base class for all inspection tasks."""

from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING, Any

from ..types import Finding, Options, Severity

if TYPE_CHECKING:
    from ..machine import Machine

logger = getLogger("hostinspect.tasks")


class TaskInitError(ValueError):
    """Raised when a task's configuration is structurally invalid."""

    def __init__(self, task: str, key: str, value: Any) -> None:
        self.task = task
        self.key = key
        self.value = value
        super().__init__(task, key, value)

    def __str__(self) -> str:
        return "{0}: invalid value {1!r} for {2}".format(self.task, self.value, self.key)


class TaskRunError(RuntimeError):
    """Raised when a task couldn't complete its probe."""

    def __init__(self, task: str, reason: str) -> None:
        self.task = task
        self.reason = reason
        super().__init__(task, reason)

    def __str__(self) -> str:
        return "{0}: {1}".format(self.task, self.reason)


class Task(ABC):
    """An abstract base class for a diagnostic check bound to a machine.

    The executor calls `init`, then `run`, then `get_result`. Problems
    found on the machine are reported as findings through
    `set_abnormal_event`; exceptions are reserved for checks that could
    not be carried out.
    """

    #: The display name of the task.
    name: str

    __slots__ = ["_abnormal", "_result", "machine", "options"]

    def __init__(self, machine: "Machine") -> None:
        """Binds the task to a machine.

        Args:
            machine: The machine to inspect.
        """
        self.machine = machine
        self.options = Options()
        self._result: dict[str, Any] = {}
        self._abnormal: list[Finding] = []

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} machine={self.machine.name}>"

    def init(self, options: Options) -> None:
        """Prepares the task for a run.

        Subclasses validating their configuration call this first and
        raise `TaskInitError` for unusable values.

        Args:
            options: The run wide options.
        """
        self.options = options
        self._result = {}
        self._abnormal = []

    def get_name(self) -> str:
        return self.name

    @abstractmethod
    def run(self) -> None:
        """Executes the check against the machine."""
        ...

    def get_result(self) -> tuple[dict[str, Any], list[Finding]]:
        """Returns the result-map and the findings collected so far."""
        return self._result, self._abnormal

    def get_config(self, key: str, default: Any = None) -> Any:
        """Looks up a configuration override, falling back to `default`.

        Args:
            key: The configuration name.
            default: The value used when `key` isn't configured.
        """
        return self.options.get(key, default)

    def get_number(self, key: str, default: float) -> float:
        """Looks up a numeric configuration value.

        Raises:
            TaskInitError: If the configured value isn't a number.
        """
        value = self.get_config(key, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            raise TaskInitError(self.get_name(), key, value) from None

    def set_result(self, key: str, value: Any) -> None:
        self._result[key] = value

    def set_abnormal_event(self, desc: str, level: Severity | str) -> None:
        """Records an abnormal finding on the machine.

        Args:
            desc: The description of the finding.
            level: The severity of the finding.
        """
        finding = Finding.create(desc, level, self.machine.name)
        logger.debug("%s: %s finding: %s", self.machine.name, finding.level, desc)
        self._abnormal.append(finding)

    def command(self, cmd: str) -> str:
        """Runs a shell command on the machine and returns its output."""
        return self.machine.run(cmd)
