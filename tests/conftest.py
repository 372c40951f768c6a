from typing import Any

import pytest

from hostinspect.machine import Machine

from .utils import FakeConnection


@pytest.fixture
def fake_connection():
    """Returns a factory for `FakeConnection` classes with canned output."""

    def factory(outputs: dict[str, Any] | None = None, opens: bool = True):
        return type(
            "FakeConnection",
            (FakeConnection,),
            {"outputs": dict(outputs or {}), "opens": opens, "instances": []},
        )

    return factory


@pytest.fixture
def connected_machine(fake_connection):
    """Returns a factory for connected machines backed by a fake connection."""

    def factory(role: str = "generic", outputs: dict[str, Any] | None = None) -> Machine:
        machine = Machine(
            "node01",
            role,
            "192.0.2.10",
            connection=fake_connection(outputs),
        )
        assert machine.connect()
        return machine

    return factory
