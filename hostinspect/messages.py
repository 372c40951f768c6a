"""A set of classes for displaying messages to the user.

This module defines the errors, warnings and informational messages
shown to the user while machines are loaded, connected and inspected.
"""

from abc import ABC


class UserMessage(BaseException, ABC):
    """An abstract base class for messages to be displayed to the user."""

    def __str__(self) -> str:
        return self.message  # type: ignore

    def __eq__(self, x: object) -> bool:
        return str(self) == str(x)

    def __hash__(self) -> int:  # type: ignore
        return hash(str(self))


class ErrorMessage(UserMessage, RuntimeError):
    """A program error message to be displayed to the user."""


class UserError(UserMessage, RuntimeError):
    """An error caused by improper usage of the program."""


class HostIsNotConnectedError(UserError, ValueError):
    """Raised when an operation is requested on a disconnected host."""

    def __init__(self, host) -> None:
        self.host = host
        self.message = "Host {0!r} is not connected".format(host)


class NoMachinesDefinedError(UserError, ValueError):
    """Raised when an inspection is requested without any machine."""

    def __init__(self) -> None:
        self.message: str = "No machines defined"


class InventoryError(UserError):
    """Raised when the machine inventory can't be loaded."""

    _msg = "Invalid inventory {0!s}: {1!s}"

    def __init__(self, path, reason) -> None:
        self.path = path
        self.reason = reason
        self.message = self._msg.format(path, reason)


class UnknownMachineError(UserError, ValueError):
    """Raised when a machine name is not present in the inventory."""

    def __init__(self, name) -> None:
        self.name = name
        self.message = "Machine {0!r} not found in inventory".format(name)


class ConnectingTargetFailedMessage(UserMessage):
    """A message for when connecting to a target fails."""

    def __init__(self, hostname, reason) -> None:
        self.hostname = hostname
        self.reason = reason

    def __str__(self) -> str:
        return "connecting to {0} failed: {1}".format(self.hostname, self.reason)

    def __repr__(self) -> str:
        return "<{0} {1!r}:{2!r}>".format(self.__class__, self.hostname, self.reason)


class ConnectingToMessage(UserMessage):
    """A message for when connecting to a target."""

    def __init__(self, hostname) -> None:
        self.hostname = hostname

    def __str__(self) -> str:
        return "connecting to {0}".format(self.hostname)


class SkippingInvalidMachineMessage(UserMessage):
    """A message for machines marked as invalid in the inventory."""

    def __init__(self, name) -> None:
        self.name = name

    def __str__(self) -> str:
        return "machine {0} is marked invalid, skipping".format(self.name)


class ReportExportedMessage(UserMessage):
    """A message for a successfully written report file."""

    def __init__(self, path) -> None:
        self.path = path

    def __str__(self) -> str:
        return "report written to {0!s}".format(self.path)
