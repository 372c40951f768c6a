"""Defines the command-line arguments for the hostinspect tool."""

from argparse import ArgumentTypeError
from pathlib import Path

from hostinspect import __version__

from .argparse import ArgumentParser


def override(value: str) -> tuple[str, str]:
    """Parses a `KEY=VALUE` task override.

    Raises:
        ArgumentTypeError: If there is no `=` or the key is empty.
    """
    key, sep, val = value.partition("=")
    if not sep or not key.strip():
        raise ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key.strip(), val


def get_parser(sys) -> ArgumentParser:
    """Creates and configures the argument parser for the application.

    Args:
        sys: The `sys` module, used for stdout/stderr.

    Returns:
        A configured `ArgumentParser` instance.
    """
    parser = ArgumentParser(
        sys_=sys,
        prog="hostinspect",
        description="Run role based diagnostic checks on remote machines.",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="Override default config path"
    )
    parser.add_argument(
        "-i",
        "--inventory",
        type=Path,
        help="override config hostinspect.inventory",
    )
    parser.add_argument(
        "-m",
        "--machine",
        action="append",
        default=[],
        help="inspect only the named machine, may be given multiple times",
    )
    parser.add_argument(
        "-w",
        "--connection_timeout",
        type=int,
        help="override config connection.timeout",
    )
    parser.add_argument(
        "-t",
        "--command_timeout",
        type=int,
        help="override config connection.command_timeout, 0 disables it",
    )
    parser.add_argument(
        "-O",
        "--override",
        type=override,
        action="append",
        metavar="KEY=VALUE",
        help="task configuration override, e.g. REDIS_PASSWORD=secret",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="write the reports as YAML to this file",
    )
    parser.add_argument(
        "-e",
        "--export",
        action="store_true",
        default=False,
        help="write the reports as YAML into config hostinspect.report_dir",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=False,
        help="enable debugging output",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version="{}".format(__version__),
        help="print version and exit",
    )

    return parser
