"""The `Machine` class, which represents a single inspected host."""

from logging import getLogger
from typing import Any

from . import messages
from .connection import Connection
from .executor import Executor
from .tasks import Task, get_tasks
from .types import Role

logger = getLogger("hostinspect.machine")


class Machine:
    """Represents a single inspected host.

    The machine owns its `Connection`: `connect` creates it, `down`
    closes it. Tasks only borrow it through `run`.
    """

    def __init__(
        self,
        name: str,
        type: Role | str = Role.GENERIC,
        host: str = "",
        port: int | str = 22,
        username: str = "root",
        password: str = "",
        valid: bool = True,
        connection: type[Connection] = Connection,
    ) -> None:
        """Initializes the `Machine` object.

        Args:
            name: The name of the machine.
            type: The role of the machine, unknown roles become generic.
            host: The hostname or address of the machine.
            port: The SSH port.
            username: The user to log in as.
            password: The password of the user.
            valid: Whether the machine should be inspected at all.
            connection: The connection class to use for the machine.
        """
        self.name = name
        self.type = Role.parse(type)
        self.host = host or name
        self.port = port
        self.username = username
        self.password = password
        self.valid = valid
        self.Connection = connection
        self.connection: Connection | None = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name} type={self.type} host={self.host}:{self.port}>"

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kw) -> "Machine":
        """Creates a machine from an inventory entry.

        Args:
            data: A mapping with `name`, `host` and optional `type`,
                `port`, `username`, `password` and `valid` keys.
            **kw: Passed to the constructor.

        Raises:
            KeyError: If `name` or `host` is missing.
        """
        return cls(
            str(data["name"]),
            data.get("type", Role.GENERIC),
            str(data["host"]),
            data.get("port", 22),
            str(data.get("username", "root")),
            str(data.get("password", "") or ""),
            bool(data.get("valid", True)),
            **kw,
        )

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def connect(self, timeout: float = 10, command_timeout: float | None = 60) -> bool:
        """Connects to the machine.

        Args:
            timeout: The ceiling for connecting and authenticating.
            command_timeout: The read timeout for single commands.

        Returns:
            True if the machine is connected, False otherwise.
        """
        logger.info(messages.ConnectingToMessage(self.address))
        connection = self.Connection(
            self.host,
            self.port,
            self.username,
            self.password,
            timeout,
            command_timeout,
        )
        if not connection.open():
            logger.error(
                messages.ConnectingTargetFailedMessage(self.address, "unable to connect")
            )
            return False

        self.connection = connection
        return True

    def run(self, command: str) -> str:
        """Runs a command on the machine.

        Raises:
            HostIsNotConnectedError: If the machine isn't connected.
        """
        if self.connection is None:
            raise messages.HostIsNotConnectedError(self.name)
        logger.debug('%s: running "%s"', self.name, command)
        return self.connection.run_command(command)

    def down(self) -> None:
        """Closes the connection of the machine, if any."""
        if self.connection is not None:
            self.connection.close()
            self.connection = None

    def get_tasks(self) -> list[Task]:
        return get_tasks(self)

    def get_executor(self) -> Executor:
        """Creates the executor running this machine's tasks."""
        return Executor(self, self.get_tasks())
