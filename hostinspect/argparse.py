"""An argument parser for the hostinspect command line.

The parser writes help and errors to an injectable `sys` module and
raises `ArgsParseFailure` instead of terminating the interpreter, so
`main` decides on the exit status and tests can inspect the output.
"""

import argparse
import sys


class ArgsParseFailure(RuntimeError):
    """Exception raised when argument parsing stops."""

    def __init__(self, status: int = 0) -> None:
        """Initializes the exception.

        Args:
            status: The exit status code.
        """
        self.status = status
        super().__init__()


class ArgumentParser(argparse.ArgumentParser):
    """An argument parser raising `ArgsParseFailure` instead of exiting."""

    def __init__(self, *a, **kw) -> None:
        """Initializes the parser.

        Args:
            *a: Arguments to pass to the parent constructor.
            **kw: Keyword arguments to pass to the parent constructor.
                `sys_` replaces the `sys` module used for output.
        """
        self.sys = kw.pop("sys_", sys)
        super().__init__(*a, **kw)

    def print_help(self, file=None) -> None:
        super().print_help(self.sys.stdout)

    def print_usage(self, file=None) -> None:
        super().print_usage(self.sys.stdout)

    def error(self, message: str) -> None:  # type: ignore
        """Reports a usage error and stops parsing with status 2.

        Args:
            message: The error message.
        """
        self.print_usage()
        self.exit(2, "{0}: error: {1}\n".format(self.prog, message))

    def exit(self, status: int = 0, message: str | None = None) -> None:  # type: ignore
        """Raises `ArgsParseFailure` with the given status.

        Args:
            status: The exit status code.
            message: The error message to print.
        """
        if message:
            self._print_message(message, self.sys.stderr)

        raise ArgsParseFailure(status)
