"""The service inventory task for JumpServer machines."""

from logging import getLogger

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from ..connection import CommandError
from ..types import Severity
from .base import Task, TaskRunError

logger = getLogger("hostinspect.tasks.service")

# JumpServer installs commonly run with self-signed certificates
urllib3.disable_warnings(category=InsecureRequestWarning)

#: Prefix of the docker containers deployed by the JumpServer installer.
CONTAINER_PREFIX = "jms_"


def parse_containers(text: str) -> dict[str, dict[str, str]]:
    """Parses tab separated `docker ps` output.

    Args:
        text: Lines of `name<TAB>state<TAB>status`.

    Returns:
        A dictionary mapping container names to their state and status.
    """
    containers: dict[str, dict[str, str]] = {}
    for line in text.splitlines():
        fields = line.split("\t")
        if len(fields) < 2 or not fields[0]:
            continue
        containers[fields[0]] = {
            "state": fields[1],
            "status": fields[2] if len(fields) > 2 else "",
        }
    return containers


class ServiceTask(Task):
    """Inventories the JumpServer containers and checks the web health API."""

    name = "JumpServer services"

    def health_url(self) -> str:
        if url := self.get_config("JMS_URL"):
            return url.rstrip("/") + "/api/health/"
        port = self.get_config("HTTP_PORT", 80)
        return f"http://{self.machine.host}:{port}/api/health/"

    def run(self) -> None:
        error = None
        try:
            self._containers()
        except CommandError as e:
            error = e
        self._health()

        if error:
            raise TaskRunError(self.get_name(), f"listing containers failed: {error}")

    def _containers(self) -> None:
        output = self.command(
            "docker ps -a --filter name={0} --format "
            "'{{{{.Names}}}}\t{{{{.State}}}}\t{{{{.Status}}}}'".format(CONTAINER_PREFIX)
        )
        containers = {
            k: v
            for k, v in parse_containers(output).items()
            if k.startswith(CONTAINER_PREFIX)
        }
        self.set_result("jumpserver.containers", containers)

        if not containers:
            self.set_abnormal_event("no JumpServer containers found", Severity.NORMAL)
        for name, info in sorted(containers.items()):
            if info["state"] != "running":
                self.set_abnormal_event(
                    f"container {name} is {info['state']} ({info['status']})",
                    Severity.CRITICAL,
                )

    def _health(self) -> None:
        url = self.health_url()
        timeout = self.options.command_timeout or 10
        logger.debug("%s: querying %s", self.machine.name, url)
        try:
            rsp = requests.get(url, timeout=timeout, verify=False)
            rsp.raise_for_status()
        except requests.exceptions.RequestException as e:
            self.set_result("jumpserver.health", None)
            self.set_abnormal_event(
                f"JumpServer health check {url} failed: {e}", Severity.CRITICAL
            )
            return

        try:
            health = rsp.json()
        except requests.exceptions.JSONDecodeError:
            health = {"body": rsp.text.strip()}
        self.set_result("jumpserver.health", health)
