"""This package contains the inspection tasks for hostinspect.

Every machine gets the baseline `OsInfoTask`; `role_tasks` maps each
machine role to the task classes appended after it.
"""

from typing import TYPE_CHECKING

from ..types import Role
from .base import Task, TaskInitError, TaskRunError
from .mysql import MySQLTask
from .osinfo import OsInfoTask
from .redis import RedisTask
from .service import ServiceTask

if TYPE_CHECKING:
    from ..machine import Machine

#: Task classes every machine gets, in run order.
baseline_tasks: tuple[type[Task], ...] = (OsInfoTask,)

#: A dictionary that maps machine roles to their extra task classes.
role_tasks: dict[Role, tuple[type[Task], ...]] = {
    Role.GENERIC: (),
    Role.JUMPSERVER: (ServiceTask,),
    Role.REDIS: (RedisTask,),
    Role.MYSQL: (MySQLTask,),
}


def get_tasks(machine: "Machine") -> list[Task]:
    """Instantiates the tasks applying to a machine.

    Args:
        machine: The machine to inspect.

    Returns:
        The baseline tasks followed by the tasks of the machine's role.
        Roles without an entry only get the baseline.
    """
    classes = baseline_tasks + role_tasks.get(machine.type, ())
    return [cls(machine) for cls in classes]


__all__ = [
    "MySQLTask",
    "OsInfoTask",
    "RedisTask",
    "ServiceTask",
    "Task",
    "TaskInitError",
    "TaskRunError",
    "baseline_tasks",
    "get_tasks",
    "role_tasks",
]
