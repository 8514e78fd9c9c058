"""Shared fixtures."""

from __future__ import annotations

import pytest

from fixtures.fake_hosts import FakeConnection, ubuntu_host


@pytest.fixture()
def web01() -> FakeConnection:
    return ubuntu_host("web01")


@pytest.fixture()
def fleet() -> dict[str, FakeConnection]:
    return {name: ubuntu_host(name) for name in ("web01", "web02", "db01")}
