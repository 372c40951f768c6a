"""The main entry point for the hostinspect application."""

import logging
import sys
from argparse import Namespace
from typing import Literal

from . import messages
from .argparse import ArgsParseFailure
from .args import get_parser
from .colorlog import create_logger
from .config import Config
from .inventory import load_inventory
from .machine import Machine
from .report import Report, export, render
from .types import Options
from .utils import timestamp


def main() -> int:
    """The main entry point for the hostinspect application.

    This function handles command-line argument parsing, configuration
    loading, and inspecting the selected machines.

    Returns:
        The exit code of the application.
    """
    logger = create_logger("hostinspect")

    p = get_parser(sys)
    try:
        args = p.parse_args(sys.argv[1:])
    except ArgsParseFailure as e:
        return e.status

    cfg = Config(args.config)

    sys.exit(run_inspect(cfg, logger, args))


def inspect_machine(machine: Machine, options: Options) -> Report | None:
    """Connects to a machine and runs its tasks.

    Args:
        machine: The machine to inspect.
        options: The run wide options.

    Returns:
        The report, or None if the machine couldn't be connected.
    """
    if not machine.connect(options.timeout, options.command_timeout):
        return None

    executor = machine.get_executor()
    result, findings = executor.execute(options)
    return Report(
        machine.name,
        str(machine.type),
        machine.address,
        result,
        findings,
        executor.outcomes,
    )


def run_inspect(config: Config, logger: logging.Logger, args: Namespace) -> Literal[0, 1]:
    """Inspects the machines selected on the command line.

    Args:
        config: The application configuration.
        logger: The logger instance.
        args: The parsed command-line arguments.

    Returns:
        0 if every selected machine was inspected, 1 otherwise.
    """
    if args.debug:
        logger.setLevel(level=logging.DEBUG)

    config.merge_args(args)

    try:
        inventory = load_inventory(config.inventory)  # type: ignore
        machines = inventory.select(args.machine)
    except (messages.InventoryError, messages.UnknownMachineError) as e:
        logger.error(e)
        return 1

    if not machines:
        logger.error(messages.NoMachinesDefinedError())
        return 1

    options = config.options().merged(inventory.config)
    status: Literal[0, 1] = 0
    reports: list[Report] = []
    for machine in machines:
        if not machine.valid:
            logger.warning(messages.SkippingInvalidMachineMessage(machine.name))
            continue

        report = inspect_machine(machine, options)
        if report is None:
            status = 1
            continue

        reports.append(report)
        print("\n".join(render(report)))

    if reports and (args.output or args.export):
        path = args.output or config.report_dir / f"{timestamp()}.yml"  # type: ignore
        try:
            logger.info(messages.ReportExportedMessage(export(reports, path)))
        except OSError as e:
            logger.error("writing report to %s failed: %s", path, e)
            status = 1

    return status
