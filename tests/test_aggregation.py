"""Collector fan-out, failure isolation and batch aggregation."""

from __future__ import annotations

import logging

import pytest

from fixtures.fake_hosts import FakeConnection, make_connector, ubuntu_host
from inventory_reporter.aggregation import build_batch, run_report
from inventory_reporter.collector import QueryResult, collect
from inventory_reporter.errors import CommandError, ParameterError
from inventory_reporter.reports import get_report
from inventory_reporter.targets import Target


def _targets(*names: str) -> list[Target]:
    return [Target(n) for n in names]


class TestCollect:
    def test_sequential_in_input_order(self, fleet):
        connect, calls = make_connector(fleet)
        results = collect(_targets("db01", "web01", "web02"), lambda conn: conn.hostname, connect)
        assert calls == ["db01", "web01", "web02"]
        assert [r.value for r in results] == ["db01", "web01", "web02"]
        assert all(r.ok for r in results)

    def test_failures_recorded_not_raised(self, fleet, caplog):
        connect, _ = make_connector(fleet, unreachable={"web02"})
        with caplog.at_level(logging.WARNING):
            results = collect(_targets("web01", "web02", "db01"), lambda conn: conn.hostname, connect)
        assert [r.ok for r in results] == [True, False, True]
        assert "web02" in caplog.text
        assert "No route to host" in caplog.text

    def test_connection_closed_after_query(self, fleet):
        connect, _ = make_connector(fleet)
        collect(_targets("web01"), lambda conn: None, connect)
        assert fleet["web01"].closed is True

    def test_connection_closed_when_query_fails(self, fleet):
        connect, _ = make_connector(fleet)

        def boom(conn):
            raise CommandError("lsblk", 1, "permission denied")

        (result,) = collect(_targets("web01"), boom, connect)
        assert not result.ok
        assert isinstance(result.error, CommandError)
        assert fleet["web01"].closed is True

    def test_no_targets_is_a_parameter_error(self):
        with pytest.raises(ParameterError):
            collect([], lambda conn: None, lambda t: FakeConnection(t.name))


class TestRunReport:
    def test_all_succeed_length_and_order(self, fleet):
        connect, _ = make_connector(fleet)
        batch = run_report(get_report("memory"), _targets("web02", "db01", "web01"), connect)
        assert batch.targets == ["web02", "db01", "web01"]
        assert len(batch) == 3

    def test_mixed_failures_keep_relative_order(self, fleet, caplog):
        hosts = dict(fleet, broken=FakeConnection("broken"))
        connect, _ = make_connector(hosts, unreachable={"web02"})
        with caplog.at_level(logging.WARNING):
            batch = run_report(get_report("os"), _targets("web01", "web02", "broken", "db01"), connect)
        assert batch.targets == ["web01", "db01"]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any("web02" in r.getMessage() for r in warnings)
        assert any("broken" in r.getMessage() for r in warnings)

    def test_unreachable_only_gives_empty_batch(self, caplog):
        connect, _ = make_connector({}, unreachable={"unreachable-host"})
        with caplog.at_level(logging.WARNING):
            batch = run_report(get_report("os"), _targets("unreachable-host"), connect)
        assert len(batch) == 0
        assert "unreachable-host" in caplog.text

    def test_local_target_with_two_disks(self):
        local = Target("local-only", local=True)
        connect, _ = make_connector({"local-only": ubuntu_host("local-only")})
        batch = run_report(get_report("disks"), [local], connect)
        assert len(batch) == 1
        assert batch.reports[0].row_count == 2

    def test_name_filter(self, fleet):
        connect, _ = make_connector(fleet)
        batch = run_report(get_report("services"), _targets("web01"), connect, name_filter="SS")
        assert [row["Name"] for row in batch.reports[0].rows] == ["ssh"]

    def test_filter_without_match_warns_and_keeps_target(self, fleet, caplog):
        connect, _ = make_connector(fleet)
        with caplog.at_level(logging.WARNING):
            batch = run_report(get_report("software"), _targets("web01"), connect, name_filter="nginx")
        assert batch.targets == ["web01"]
        assert batch.reports[0].rows == ()
        assert "nginx" in caplog.text

    def test_filter_ignored_for_unfilterable_report(self, fleet, caplog):
        connect, _ = make_connector(fleet)
        with caplog.at_level(logging.WARNING):
            batch = run_report(get_report("disks"), _targets("web01"), connect, name_filter="sda")
        assert batch.row_count == 2
        assert "does not support name filters" in caplog.text


class TestBuildBatch:
    def test_failed_results_dropped(self):
        report = get_report("memory")
        ok = QueryResult(Target("web01"), value=report.query(ubuntu_host("web01")))
        failed = QueryResult(Target("web02"), error=CommandError("cat", 1))
        batch = build_batch(report, [failed, ok])
        assert batch.targets == ["web01"]

    def test_normalizer_failure_skips_target(self, caplog):
        report = get_report("network")
        good = QueryResult(Target("web01"), value=report.query(ubuntu_host("web01")))
        bad = QueryResult(Target("web02"), value=42)
        with caplog.at_level(logging.WARNING):
            batch = build_batch(report, [good, bad])
        assert batch.targets == ["web01"]
        assert "Normalization failed for web02" in caplog.text
