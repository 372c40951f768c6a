"""This package contains the type classes for hostinspect.

Each module in this package defines a specific type that is used
throughout the application.
"""

from .enums import SEVERITY_LABELS, Role, Severity, TaskStatus
from .finding import Finding
from .options import Options
from .taskoutcome import TaskOutcome

__all__ = [
    "SEVERITY_LABELS",
    "Finding",
    "Options",
    "Role",
    "Severity",
    "TaskOutcome",
    "TaskStatus",
]
