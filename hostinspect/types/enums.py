"""Enumerations for machine roles, finding severities and task states."""

from enum import StrEnum, auto


class Role(StrEnum):
    """The role of an inspected machine, selecting its extra tasks."""

    GENERIC = auto()
    JUMPSERVER = auto()
    REDIS = auto()
    MYSQL = auto()

    @classmethod
    def parse(cls, value: "str | Role | None") -> "Role":
        """Maps an inventory value to a role.

        Unknown values map to `Role.GENERIC`, such machines only get the
        baseline tasks.

        Args:
            value: The role name as found in the inventory.

        Returns:
            The matching `Role`.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GENERIC


class Severity(StrEnum):
    """The severity of an abnormal finding."""

    CRITICAL = auto()
    NORMAL = auto()
    SLIGHT = auto()

    @property
    def label(self) -> str:
        """The human readable label of the severity."""
        return SEVERITY_LABELS[self]


#: Display labels of finding severities.
SEVERITY_LABELS: dict[Severity, str] = {
    Severity.CRITICAL: "Critical",
    Severity.NORMAL: "Normal",
    Severity.SLIGHT: "Slight",
}


class TaskStatus(StrEnum):
    """The outcome of one task in an executor run."""

    OK = auto()
    DEGRADED = auto()
