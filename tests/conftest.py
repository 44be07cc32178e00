"""Shared pytest fixtures and configuration for the serf-members test suite.

Guidelines
----------
* No network access in any test.
* Sockets are mocked at the infra boundary (``socket.create_connection``).
* Core tests must be pure — no side effects.
* Tests must not depend on OS state; pass ``environ`` explicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest


def _raw_member(**overrides: Any) -> dict[str, Any]:
    """Raw member record shaped like the Serf IPC ``Member`` struct."""
    record: dict[str, Any] = {
        "Name": "node1",
        "Addr": bytes([10, 0, 0, 1]),
        "Port": 7946,
        "Tags": {"role": "web"},
        "Status": "alive",
        "ProtocolMin": 1,
        "ProtocolMax": 4,
        "ProtocolCur": 4,
        "DelegateMin": 1,
        "DelegateMax": 3,
        "DelegateCur": 2,
    }
    record.update(overrides)
    return record


@pytest.fixture()
def make_raw_member() -> Callable[..., dict[str, Any]]:
    """Factory fixture: ``make_raw_member(Name="x", Status="left")``."""
    return _raw_member


@pytest.fixture()
def two_node_records() -> list[dict[str, Any]]:
    """node1 (web, alive) followed by node2 (db, failed)."""
    return [
        _raw_member(),
        _raw_member(
            Name="node2",
            Addr=bytes([10, 0, 0, 2]),
            Tags={"role": "db"},
            Status="failed",
        ),
    ]
