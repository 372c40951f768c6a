from typing import Any

from hostinspect.connection import CommandError, ConnectionClosedError

HEALTHY_OS: dict[str, Any] = {
    "hostname": "node01",
    "cat /etc/os-release": 'NAME="Rocky Linux"\nVERSION="9.3 (Blue Onyx)"\nID="rocky"\nVERSION_ID="9.3"',
    "uname -r": "5.14.0-362.el9.x86_64",
    "nproc": "4",
    "cat /proc/loadavg": "0.15 0.10 0.05 1/234 5678",
    "free -m": "               total        used        free      shared  buff/cache   available\n"
    "Mem:            7821        2100        3000         100        2721        5400\n"
    "Swap:           2047           0        2047",
    "df -P /": "Filesystem     1024-blocks     Used Available Capacity Mounted on\n"
    "/dev/sda1         41152736 12345678  28807058      31% /",
    "cat /proc/uptime": "864000.00 3400000.00",
}

REDIS_INFO = """# Server
redis_version:7.0.12
redis_mode:standalone
uptime_in_days:12

# Clients
connected_clients:8

# Memory
used_memory:1048576
used_memory_human:1.00M
maxmemory:0
maxmemory_human:0B

# Persistence
rdb_last_bgsave_status:ok

# Replication
role:master

# Keyspace
db0:keys=42,expires=3,avg_ttl=0
"""

HEALTHY_REDIS: dict[str, Any] = {" ping": "PONG", " info": REDIS_INFO}


class FakeConnection:
    """Connection double answering commands from a table.

    Values are the output, a `(exitcode, output)` tuple for a failing
    command or a `CommandError` to raise. Keys match when they are
    contained in the command.
    """

    outputs: dict[str, Any] = {}
    opens: bool = True
    instances: list["FakeConnection"] = []

    def __init__(
        self,
        hostname,
        port=22,
        username="root",
        password="",
        timeout=10,
        command_timeout=60,
    ) -> None:
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout
        self.command_timeout = command_timeout
        self.is_open = False
        self.closed = 0
        self.commands: list[str] = []
        self.instances.append(self)

    def open(self) -> bool:
        self.is_open = self.opens
        return self.opens

    def run_command(self, command: str) -> str:
        self.commands.append(command)
        if not self.is_open:
            raise ConnectionClosedError(command, self.hostname)
        for key, value in self.outputs.items():
            if key in command:
                if isinstance(value, CommandError):
                    raise value
                if isinstance(value, tuple):
                    raise CommandError(command, *value)
                return value
        raise CommandError(command, 127, "command not found")

    def close(self) -> None:
        self.closed += 1
        self.is_open = False


