"""Loading of the machine inventory file.

The inventory is a YAML document::

    config:
      REDIS_PASSWORD: secret
    machines:
      - name: jms01
        type: jumpserver
        host: 10.0.0.10
        port: 22
        username: root
        password: secret
      - name: cache01
        type: redis
        host: 10.0.0.11
        valid: false

`config` is optional and holds task overrides with lower priority than
the ones from the configuration file and the command line.
"""

from collections.abc import Mapping
from logging import getLogger
from pathlib import Path
from typing import Any, NamedTuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .machine import Machine
from .messages import InventoryError, UnknownMachineError

logger = getLogger("hostinspect.inventory")


class Inventory(NamedTuple):
    """A named tuple that represents a loaded inventory.

    Attributes:
        machines: The machines, in file order.
        config: Task overrides defined in the inventory.
    """

    machines: list[Machine]
    config: dict[str, Any]

    def select(self, names: list[str] | None = None) -> list[Machine]:
        """Returns the machines with the given names, all for no names.

        Raises:
            UnknownMachineError: If a name isn't in the inventory.
        """
        if not names:
            return list(self.machines)
        known = {m.name: m for m in self.machines}
        for name in names:
            if name not in known:
                raise UnknownMachineError(name)
        return [m for m in self.machines if m.name in names]


def parse_inventory(data: Any, source: Path | str = "<inventory>", **kw) -> Inventory:
    """Builds an inventory from a parsed YAML document.

    Args:
        data: The parsed document.
        source: Where the document came from, for error messages.
        **kw: Passed to every `Machine`.

    Raises:
        InventoryError: If the document is malformed.
    """
    if not isinstance(data, Mapping):
        raise InventoryError(source, "expected a mapping at top level")

    entries = data.get("machines") or []
    if not isinstance(entries, list):
        raise InventoryError(source, "'machines' must be a list")

    config = data.get("config") or {}
    if not isinstance(config, Mapping):
        raise InventoryError(source, "'config' must be a mapping")

    machines: list[Machine] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise InventoryError(source, f"machine #{index} is not a mapping")
        try:
            machines.append(Machine.from_dict(dict(entry), **kw))
        except KeyError as e:
            raise InventoryError(source, f"machine #{index} is missing {e}") from e
        logger.debug("loaded machine %r", machines[-1])

    return Inventory(machines, {str(k): v for k, v in config.items()})


def load_inventory(path: Path, **kw) -> Inventory:
    """Reads an inventory file.

    Args:
        path: The YAML file to read.
        **kw: Passed to every `Machine`.

    Raises:
        InventoryError: If the file can't be read or is malformed.
    """
    try:
        with path.open() as f:
            data = YAML(typ="safe").load(f)
    except OSError as e:
        raise InventoryError(path, e.strerror) from e
    except YAMLError as e:
        raise InventoryError(path, e) from e

    return parse_inventory(data, path, **kw)
