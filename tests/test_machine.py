import pytest

from hostinspect.executor import Executor
from hostinspect.machine import Machine
from hostinspect.messages import HostIsNotConnectedError
from hostinspect.tasks import MySQLTask, OsInfoTask, RedisTask, ServiceTask
from hostinspect.types import Role


@pytest.mark.parametrize(
    "role,expected",
    [
        ("generic", [OsInfoTask]),
        ("jumpserver", [OsInfoTask, ServiceTask]),
        ("redis", [OsInfoTask, RedisTask]),
        ("mysql", [OsInfoTask, MySQLTask]),
        ("postgres", [OsInfoTask]),
        ("", [OsInfoTask]),
    ],
)
def test_get_tasks_by_role(role, expected):
    machine = Machine("node01", role, "192.0.2.10")
    tasks = machine.get_tasks()

    assert [type(t) for t in tasks] == expected
    assert all(t.machine is machine for t in tasks)


def test_get_tasks_returns_fresh_instances():
    machine = Machine("node01", "redis", "192.0.2.10")
    first, second = machine.get_tasks(), machine.get_tasks()
    assert all(a is not b for a, b in zip(first, second))


def test_get_executor():
    machine = Machine("node01", "jumpserver", "192.0.2.10")
    executor = machine.get_executor()

    assert isinstance(executor, Executor)
    assert executor.machine is machine
    assert [t.get_name() for t in executor.tasks] == [
        "General OS facts",
        "JumpServer services",
    ]


def test_from_dict_defaults():
    machine = Machine.from_dict({"name": "cache01", "host": "192.0.2.11", "type": "redis"})

    assert machine.name == "cache01"
    assert machine.type is Role.REDIS
    assert machine.port == 22
    assert machine.username == "root"
    assert machine.password == ""
    assert machine.valid is True
    assert machine.connection is None


def test_from_dict_missing_host():
    with pytest.raises(KeyError):
        Machine.from_dict({"name": "cache01"})


def test_connect_success(fake_connection):
    conn_cls = fake_connection()
    machine = Machine("node01", "generic", "192.0.2.10", 2222, "admin", "pw", connection=conn_cls)

    assert machine.connect(timeout=3, command_timeout=None)
    conn = conn_cls.instances[0]
    assert machine.connection is conn
    assert (conn.hostname, conn.port, conn.username, conn.password) == (
        "192.0.2.10",
        2222,
        "admin",
        "pw",
    )
    assert conn.timeout == 3
    assert conn.command_timeout is None


def test_connect_failure_leaves_no_connection(fake_connection, caplog):
    machine = Machine("node01", "generic", "192.0.2.10", connection=fake_connection(opens=False))

    assert machine.connect() is False
    assert machine.connection is None
    assert "connecting to 192.0.2.10:22 failed" in caplog.text


def test_run_without_connection():
    machine = Machine("node01", "generic", "192.0.2.10")
    with pytest.raises(HostIsNotConnectedError):
        machine.run("uptime")


def test_run_delegates_to_connection(connected_machine):
    machine = connected_machine(outputs={"uptime": "up 3 days"})
    assert machine.run("uptime") == "up 3 days"
    assert machine.connection.commands == ["uptime"]


def test_down(connected_machine):
    machine = connected_machine()
    conn = machine.connection
    machine.down()
    machine.down()
    assert conn.closed == 1
    assert not conn.is_open
    assert machine.connection is None


def test_run_after_down(connected_machine):
    machine = connected_machine(outputs={"uptime": "up 3 days"})
    machine.down()
    with pytest.raises(HostIsNotConnectedError):
        machine.run("uptime")


def test_down_without_connection():
    Machine("node01", "generic", "192.0.2.10").down()
