"""Handles the configuration for hostinspect.

This module reads configuration files, sets default values, and allows for
overriding configuration options with command-line arguments.
"""

import configparser
from argparse import Namespace
from collections.abc import Callable
from logging import getLogger
from os import getenv
from pathlib import Path
from typing import Any

from .types import Options
from .xdg import cache_path

logger = getLogger("hostinspect.config")

#: Section holding the task overrides, e.g. REDIS_PASSWORD.
OVERRIDES = "overrides"


class InvalidOptionNameError(RuntimeError):
    """Exception raised when an invalid configuration option name is used."""

    pass


class Config:
    """Read and store the variables from hostinspect config files."""

    def __init__(self, path: Path | None = None) -> None:
        """Initializes the configuration object.

        Args:
            path: An optional path to a specific config file.
        """
        if path:
            self.configfiles = [path]
        elif _pth := getenv("HOSTINSPECT_CONF"):
            self.configfiles = [Path(_pth).expanduser()]
        else:
            self.configfiles = [
                Path("/etc/hostinspect.cfg"),
                Path("~/.hostinspectrc").expanduser(),
            ]
        self.read()

        self._define_config_options()
        self._parse_config()

    def read(self) -> None:
        """Reads the configuration files."""
        # keys of the overrides section are case sensitive, their values
        # (passwords) may contain "#" and ";" so there are no inline comments
        self.config = configparser.ConfigParser()
        self.config.optionxform = str  # type: ignore
        try:
            self.config.read(self.configfiles)
        except configparser.Error as e:
            logger.error(e)

    def _parse_config(self) -> None:
        """Parses the configuration options from the config files."""
        for datum in self.data:
            attr, inipath, default, fixup, getter = datum

            try:
                val = self._get_option(inipath, getter)
            except (configparser.Error, ValueError):
                if callable(default):
                    val = default()
                else:
                    val = default

            setattr(self, str(attr), fixup(val))
            logger.debug('config.%s set to "%s"', attr, val)

        self.overrides: dict[str, str] = (
            dict(self.config.items(OVERRIDES))
            if self.config.has_section(OVERRIDES)
            else {}
        )

    def _define_config_options(self) -> None:
        """Defines all available configuration options."""

        def normalizer(x: Any) -> Any:
            return x

        def expanduser(p: Path | str) -> Path:
            return Path(p).expanduser()

        def optional_int(x: Any) -> int | None:
            return int(x) if x not in (None, "", "0", 0) else None

        def optional_float(x: Any) -> float | None:
            return float(x) if x is not None else None

        data: list[tuple[Any, ...]] = [
            (
                "inventory",
                ("hostinspect", "inventory"),
                Path("~/.config/hostinspect/machines.yml"),
                expanduser,
            ),
            (
                "report_dir",
                ("hostinspect", "report_dir"),
                lambda: cache_path("reports"),
                expanduser,
            ),
            # connect, banner and auth phases, in seconds
            (
                "connection_timeout",
                ("connection", "timeout"),
                10,
                int,
                self.config.getint,
            ),
            # read timeout for a single command, 0 disables it
            (
                "command_timeout",
                ("connection", "command_timeout"),
                60,
                optional_int,
            ),
            # percentages, unset ones leave the choice to the inventory or the task
            (
                "disk_warning",
                ("thresholds", "disk_warning"),
                None,
                optional_float,
                self.config.getfloat,
            ),
            (
                "disk_critical",
                ("thresholds", "disk_critical"),
                None,
                optional_float,
                self.config.getfloat,
            ),
            (
                "memory_warning",
                ("thresholds", "memory_warning"),
                None,
                optional_float,
                self.config.getfloat,
            ),
        ]

        def add_normalizer(x):
            return x if len(x) > 3 else x + (normalizer,)

        n_data = (add_normalizer(x) for x in data)

        getter = self.config.get

        def add_getter(x):
            return x if len(x) > 4 else x + (getter,)

        self.data: list[tuple[str, tuple[str, ...], Any, Callable, Callable]] = [
            add_getter(x) for x in n_data
        ]

    def _has_option(self, opt: str) -> bool:
        """Checks if a given option name is valid.

        Args:
            opt: The option name to check.

        Returns:
            True if the option name is valid, False otherwise.
        """
        return opt in (x[0] for x in self.data)

    def set_option(self, opt: str, val: Any) -> None:
        """Sets a configuration option to a new value.

        Args:
            opt: The name of the option to set.
            val: The new value for the option.

        Raises:
            InvalidOptionNameError: If opt is not a valid option name.
        """
        if not self._has_option(opt):
            raise InvalidOptionNameError(opt)

        setattr(self, opt, val)

    def _get_option(self, secopt, getter):
        """Gets an option from the configuration.

        Args:
            secopt: A tuple containing the section and option name.
            getter: The function to use to get the option.

        Returns:
            The value of the option.
        """
        try:
            return getter(*secopt)
        except (configparser.NoSectionError, configparser.NoOptionError):
            logger.debug("Config option %s.%s not found.", *secopt)
            raise
        except ValueError:
            logger.error(
                "Config option %s.%s extraction from %s failed.",
                *secopt,
                self.configfiles,
            )
            raise

    def merge_args(self, args: Namespace) -> None:
        """Merges command-line arguments into the configuration.

        Args:
            args: The parsed command-line arguments.
        """
        if args.inventory:
            self.inventory = args.inventory

        if args.connection_timeout:
            self.connection_timeout = args.connection_timeout

        if args.command_timeout is not None:
            self.command_timeout = args.command_timeout or None

        for key, value in args.override or []:
            self.overrides[key] = value

    def options(self) -> Options:
        """Builds the run wide task options.

        Only thresholds set in the configuration files are included;
        `[overrides]` entries win over them.
        """
        config: dict[str, Any] = {
            key: value
            for key in ("disk_warning", "disk_critical", "memory_warning")
            if (value := getattr(self, key)) is not None
        }
        config.update(self.overrides)
        return Options(config, self.connection_timeout, self.command_timeout)  # type: ignore
