from unittest.mock import MagicMock

from hostinspect.machine import Machine
from hostinspect.main import inspect_machine
from hostinspect.tasks import OsInfoTask, RedisTask
from hostinspect.types import Options, Severity, TaskStatus

from .utils import HEALTHY_OS, HEALTHY_REDIS


def test_healthy_redis_machine(fake_connection):
    conn = fake_connection({**HEALTHY_OS, **HEALTHY_REDIS})
    machine = Machine("cache01", "redis", "192.0.2.11", connection=conn)

    report = inspect_machine(machine, Options())

    assert report is not None
    assert report.findings == []
    assert report.role == "redis"
    assert report.address == "192.0.2.11:22"
    assert report.result["os.hostname"] == "node01"
    assert report.result["redis.ping"] == "PONG"
    assert [o.name for o in report.outcomes] == ["General OS facts", "Redis"]
    assert all(o.status is TaskStatus.OK for o in report.outcomes)
    assert conn.instances[0].closed == 1


def test_redis_not_answering(fake_connection):
    refused = (1, "Could not connect to Redis at 127.0.0.1:6379: Connection refused")
    conn = fake_connection({**HEALTHY_OS, " ping": refused})
    machine = Machine("cache01", "redis", "192.0.2.11", connection=conn)

    report = inspect_machine(machine, Options())

    assert report is not None
    assert len(report.findings) == 1
    assert report.findings[0].level is Severity.CRITICAL
    assert report.findings[0].node_name == "cache01"
    # the OS facts are still collected
    assert report.result["os.distribution"] == "Rocky Linux"


def test_degraded_task_does_not_stop_inspection(fake_connection):
    outputs = {k: v for k, v in HEALTHY_OS.items() if k != "free -m"}
    conn = fake_connection({**outputs, **HEALTHY_REDIS})
    machine = Machine("cache01", "redis", "192.0.2.11", connection=conn)

    report = inspect_machine(machine, Options())

    assert report is not None
    assert [o.status for o in report.outcomes] == [TaskStatus.DEGRADED, TaskStatus.OK]
    assert "memory" in report.outcomes[0].errors[0]
    assert report.result["redis.version"] == "7.0.12"


def test_unreachable_machine_runs_nothing(fake_connection, monkeypatch):
    os_run = MagicMock()
    redis_run = MagicMock()
    monkeypatch.setattr(OsInfoTask, "run", os_run)
    monkeypatch.setattr(RedisTask, "run", redis_run)
    conn = fake_connection(HEALTHY_OS, opens=False)
    machine = Machine("cache01", "redis", "192.0.2.11", connection=conn)

    assert inspect_machine(machine, Options()) is None
    assert machine.connection is None
    os_run.assert_not_called()
    redis_run.assert_not_called()


def test_connection_settings_are_passed(fake_connection):
    conn = fake_connection(HEALTHY_OS)
    machine = Machine("node01", "generic", "192.0.2.10", 2222, "admin", "pw", connection=conn)

    inspect_machine(machine, Options(timeout=5, command_timeout=None))

    c = conn.instances[0]
    assert (c.hostname, c.port, c.username, c.password) == ("192.0.2.10", 2222, "admin", "pw")
    assert (c.timeout, c.command_timeout) == (5, None)
