"""The baseline task collecting general operating system facts."""

import re
from collections.abc import Callable
from logging import getLogger

from ..connection import CommandError
from ..types import Severity
from .base import Task, TaskRunError

logger = getLogger("hostinspect.tasks.osinfo")

_name = re.compile(r'^NAME=["\']?(.*?)["\']?$', re.MULTILINE)
_version_id = re.compile(r'^VERSION_ID=["\']?(.*?)["\']?$', re.MULTILINE)


def parse_os_release(text: str) -> tuple[str, str]:
    """Parses the contents of an os-release file.

    Args:
        text: The contents of `/etc/os-release`.

    Returns:
        A tuple containing the distribution name and version ID.
    """
    distro = d.group(1) if (d := _name.search(text)) else "Unknown"
    verid = v.group(1) if (v := _version_id.search(text)) else ""
    return distro, verid


def parse_free(text: str) -> dict[str, int]:
    """Parses the `Mem:` line of `free -m`.

    The header line decides where available memory is read from.

    Returns:
        Total, used and available memory in MiB.

    Raises:
        ValueError: If there is no usable `Mem:` line.
    """
    header: list[str] = []
    for line in text.splitlines():
        fields = line.split()
        if fields and fields[0] == "Mem:":
            total, used = int(fields[1]), int(fields[2])
            if "available" in header:
                # data lines carry the extra "Mem:" label
                available = int(fields[header.index("available") + 1])
            else:
                # procps < 3.3.10 has no "available" column, use "free"
                available = int(fields[3])
            return {"total": total, "used": used, "available": available}
        if "total" in fields:
            header = fields
    raise ValueError("no memory line in free output")


def parse_df(text: str) -> dict[str, str | int]:
    """Parses the output of `df -P` for a single filesystem.

    Returns:
        The filesystem, its mount point and the usage in percent.

    Raises:
        ValueError: If the output has no data line.
    """
    lines = text.splitlines()
    if len(lines) < 2:
        raise ValueError("no filesystem line in df output")
    fields = lines[-1].split()
    return {
        "filesystem": fields[0],
        "mount": fields[5],
        "usage": int(fields[4].rstrip("%")),
    }


class OsInfoTask(Task):
    """Collects hostname, OS release, kernel, CPU, memory, disk and uptime."""

    name = "General OS facts"

    # thresholds in percent, kept when the configured ones are unusable
    disk_warning: float = 80
    disk_critical: float = 90
    memory_warning: float = 90

    def init(self, options) -> None:
        super().init(options)
        self.disk_warning = self.get_number("disk_warning", OsInfoTask.disk_warning)
        self.disk_critical = self.get_number("disk_critical", OsInfoTask.disk_critical)
        self.memory_warning = self.get_number("memory_warning", OsInfoTask.memory_warning)

    def run(self) -> None:
        probes: list[tuple[str, Callable[[], None]]] = [
            ("hostname", self._hostname),
            ("os-release", self._os_release),
            ("kernel", self._kernel),
            ("cpu", self._cpu),
            ("memory", self._memory),
            ("disk", self._disk),
            ("uptime", self._uptime),
        ]
        failed: list[str] = []
        for probe, method in probes:
            try:
                method()
            except (CommandError, ValueError, IndexError, ZeroDivisionError) as e:
                logger.debug("%s: %s probe failed: %s", self.machine.name, probe, e)
                failed.append(probe)

        if failed:
            raise TaskRunError(self.get_name(), "failed probes: " + ", ".join(failed))

    def _hostname(self) -> None:
        self.set_result("os.hostname", self.command("hostname"))

    def _os_release(self) -> None:
        distro, verid = parse_os_release(self.command("cat /etc/os-release"))
        self.set_result("os.distribution", distro)
        self.set_result("os.version", verid)

    def _kernel(self) -> None:
        self.set_result("os.kernel", self.command("uname -r"))

    def _cpu(self) -> None:
        cpus = int(self.command("nproc"))
        load1, load5, load15 = (
            float(x) for x in self.command("cat /proc/loadavg").split()[:3]
        )
        self.set_result("os.cpu_count", cpus)
        self.set_result("os.load_average", [load1, load5, load15])
        if load1 > cpus:
            self.set_abnormal_event(
                f"1 minute load {load1} exceeds CPU count {cpus}", Severity.SLIGHT
            )

    def _memory(self) -> None:
        mem = parse_free(self.command("free -m"))
        usage = round(100 * (mem["total"] - mem["available"]) / mem["total"], 1)
        self.set_result("os.memory_total_mb", mem["total"])
        self.set_result("os.memory_available_mb", mem["available"])
        self.set_result("os.memory_usage", usage)
        if usage > self.memory_warning:
            self.set_abnormal_event(f"memory usage at {usage}%", Severity.SLIGHT)

    def _disk(self) -> None:
        disk = parse_df(self.command("df -P /"))
        usage = disk["usage"]
        self.set_result("os.root_disk_usage", usage)
        if usage > self.disk_critical:
            self.set_abnormal_event(
                f"disk usage of {disk['mount']} at {usage}%", Severity.CRITICAL
            )
        elif usage > self.disk_warning:
            self.set_abnormal_event(
                f"disk usage of {disk['mount']} at {usage}%", Severity.NORMAL
            )

    def _uptime(self) -> None:
        seconds = float(self.command("cat /proc/uptime").split()[0])
        self.set_result("os.uptime_days", round(seconds / 86400, 1))
