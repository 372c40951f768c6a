"""Run wide options handed to every task."""

from collections.abc import Mapping
from typing import Any


class Options:
    """Run wide options consumed by `Task.init`.

    Attributes:
        config: Override values keyed by configuration name.
        timeout: Connect timeout in seconds.
        command_timeout: Timeout for a single remote command in seconds,
            None disables it.
    """

    __slots__ = ["command_timeout", "config", "timeout"]

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        timeout: int = 10,
        command_timeout: int | None = 60,
    ) -> None:
        self.config: dict[str, Any] = dict(config) if config else {}
        self.timeout = timeout
        self.command_timeout = command_timeout

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} keys={sorted(self.config)} timeout={self.timeout}>"

    def get(self, key: str, default: Any = None) -> Any:
        """Looks up a configuration value.

        Args:
            key: The configuration name.
            default: The value used when `key` isn't configured.

        Returns:
            The configured override or `default`.
        """
        if key in self.config:
            return self.config[key]
        return default

    def merged(self, config: Mapping[str, Any]) -> "Options":
        """Returns a copy with `config` values as lower priority defaults.

        Args:
            config: Values used for keys not already configured.
        """
        merged = dict(config)
        merged.update(self.config)
        return Options(merged, self.timeout, self.command_timeout)
