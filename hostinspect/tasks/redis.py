"""The probe task for Redis machines."""

import shlex
from logging import getLogger

from ..connection import CommandError
from ..types import Severity
from .base import Task, TaskRunError

logger = getLogger("hostinspect.tasks.redis")

#: Exit status of a shell for a command that isn't installed.
COMMAND_NOT_FOUND = 127


def parse_info(text: str) -> dict[str, str]:
    """Parses the output of the Redis `INFO` command.

    Args:
        text: The `INFO` output, `key:value` lines with `#` section headers.

    Returns:
        A dictionary of all fields.
    """
    info: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition(":")
        if sep:
            info[key] = value
    return info


class RedisTask(Task):
    """Checks that Redis answers and collects its server statistics."""

    name = "Redis"

    def cli(self, *args: str) -> str:
        """Builds a `redis-cli` command line from the Redis options."""
        cmd = [
            "redis-cli",
            "-h",
            str(self.get_config("REDIS_HOST", "127.0.0.1")),
            "-p",
            str(self.get_config("REDIS_PORT", 6379)),
        ]
        if password := self.get_config("REDIS_PASSWORD", ""):
            cmd += ["-a", str(password), "--no-auth-warning"]
        return " ".join(shlex.quote(x) for x in [*cmd, *args])

    def run(self) -> None:
        try:
            pong = self.command(self.cli("ping"))
        except CommandError as e:
            if e.exitcode == COMMAND_NOT_FOUND:
                raise TaskRunError(self.get_name(), "redis-cli is not installed") from e
            if e.exitcode is None:
                raise TaskRunError(self.get_name(), f"PING failed: {e}") from e
            pong = e.output or str(e)

        self.set_result("redis.ping", pong)
        if pong != "PONG":
            self.set_abnormal_event(
                f"Redis does not answer PING: {pong}", Severity.CRITICAL
            )
            return

        try:
            info = parse_info(self.command(self.cli("info")))
        except CommandError as e:
            raise TaskRunError(self.get_name(), f"INFO failed: {e}") from e

        self.set_result("redis.version", info.get("redis_version", ""))
        self.set_result("redis.mode", info.get("redis_mode", ""))
        self.set_result("redis.role", info.get("role", ""))
        self.set_result("redis.uptime_days", int(info.get("uptime_in_days", 0)))
        self.set_result("redis.connected_clients", int(info.get("connected_clients", 0)))
        self.set_result("redis.used_memory", info.get("used_memory_human", ""))
        self.set_result("redis.maxmemory", info.get("maxmemory_human", ""))
        self.set_result(
            "redis.keyspace",
            {k: v for k, v in info.items() if k.startswith("db") and k[2:].isdigit()},
        )

        used = int(info.get("used_memory", 0))
        limit = int(info.get("maxmemory", 0))
        if limit and used > 0.9 * limit:
            self.set_abnormal_event(
                f"Redis uses {info.get('used_memory_human')} of "
                f"{info.get('maxmemory_human')} maxmemory",
                Severity.NORMAL,
            )
        if info.get("rdb_last_bgsave_status", "ok") != "ok":
            self.set_abnormal_event("last Redis background save failed", Severity.NORMAL)
