"""A named tuple for representing an abnormal finding."""

from typing import NamedTuple

from .enums import Severity


class Finding(NamedTuple):
    """A named tuple that represents an abnormal observation on a machine.

    Attributes:
        level: The severity of the finding.
        desc: The description of the finding.
        node_name: The name of the machine the finding was made on.
        level_display: The human readable severity label.
    """

    level: Severity
    desc: str
    node_name: str
    level_display: str

    @classmethod
    def create(cls, desc: str, level: Severity | str, node_name: str = "") -> "Finding":
        """Creates a finding with the display label of its severity.

        Args:
            desc: The description of the finding.
            level: The severity, as `Severity` or its value.
            node_name: The name of the machine.

        Returns:
            A new `Finding`.

        Raises:
            ValueError: If `level` is not a known severity.
        """
        severity = Severity(level)
        return cls(severity, desc, node_name, severity.label)
