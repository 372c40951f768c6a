"""The probe task for MySQL machines."""

import shlex
from logging import getLogger

from ..connection import CommandError
from ..types import Severity
from .base import Task, TaskRunError
from .redis import COMMAND_NOT_FOUND

logger = getLogger("hostinspect.tasks.mysql")


def parse_variables(text: str) -> dict[str, str]:
    """Parses tab separated `Variable_name<TAB>Value` rows."""
    rows: dict[str, str] = {}
    for line in text.splitlines():
        name, sep, value = line.partition("\t")
        if sep:
            rows[name.strip()] = value.strip()
    return rows


class MySQLTask(Task):
    """Checks that MySQL accepts queries and collects its server status."""

    name = "MySQL"

    def query(self, sql: str) -> str:
        """Runs `sql` with the `mysql` client in batch mode."""
        cmd = [
            "mysql",
            "-h",
            str(self.get_config("DB_HOST", "127.0.0.1")),
            "-P",
            str(self.get_config("DB_PORT", 3306)),
            "-u",
            str(self.get_config("DB_USER", "root")),
            "--batch",
            "--skip-column-names",
            "-e",
            sql,
        ]
        env = ""
        if password := self.get_config("DB_PASSWORD", ""):
            # keeps the password out of the remote process list
            env = "MYSQL_PWD={0} ".format(shlex.quote(str(password)))
        return self.command(env + " ".join(shlex.quote(x) for x in cmd))

    def run(self) -> None:
        try:
            alive = self.query("SELECT 1")
        except CommandError as e:
            if e.exitcode == COMMAND_NOT_FOUND:
                raise TaskRunError(self.get_name(), "mysql client is not installed") from e
            if e.exitcode is None:
                raise TaskRunError(self.get_name(), f"SELECT 1 failed: {e}") from e
            alive = e.output or str(e)

        self.set_result("mysql.alive", alive == "1")
        if alive != "1":
            self.set_abnormal_event(
                f"MySQL does not accept queries: {alive}", Severity.CRITICAL
            )
            return

        try:
            version = self.query("SELECT VERSION()")
            status = parse_variables(
                self.query(
                    "SHOW GLOBAL STATUS WHERE Variable_name IN "
                    "('Uptime', 'Threads_connected', 'Slow_queries')"
                )
            )
            variables = parse_variables(
                self.query("SHOW GLOBAL VARIABLES LIKE 'max_connections'")
            )
        except CommandError as e:
            raise TaskRunError(self.get_name(), f"status query failed: {e}") from e

        connected = int(status.get("Threads_connected", 0))
        max_connections = int(variables.get("max_connections", 0))
        slow = int(status.get("Slow_queries", 0))

        self.set_result("mysql.version", version)
        self.set_result("mysql.uptime_days", round(int(status.get("Uptime", 0)) / 86400, 1))
        self.set_result("mysql.threads_connected", connected)
        self.set_result("mysql.max_connections", max_connections)
        self.set_result("mysql.slow_queries", slow)

        if max_connections and connected > 0.8 * max_connections:
            self.set_abnormal_event(
                f"{connected} of {max_connections} MySQL connections in use",
                Severity.NORMAL,
            )
        if slow:
            self.set_abnormal_event(f"{slow} slow queries recorded", Severity.SLIGHT)
