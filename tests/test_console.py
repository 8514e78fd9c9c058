"""Console rendering of report batches."""

from __future__ import annotations

import click
from click.testing import CliRunner

from fixtures.fake_hosts import make_connector
from inventory_reporter.aggregation import run_report
from inventory_reporter.console import echo_batch, format_value, render_lines
from inventory_reporter.models import ReportBatch, TargetReport
from inventory_reporter.normalization import build_row
from inventory_reporter.reports import get_report
from inventory_reporter.targets import Target


def _batch(report_name, hosts, name_filter=None):
    connect, _ = make_connector(hosts)
    return run_report(get_report(report_name), [Target(h) for h in hosts], connect, name_filter=name_filter)


class TestFormatValue:
    def test_none_renders_blank(self):
        assert format_value(None) == ""

    def test_scalars(self):
        assert format_value(True) == "True"
        assert format_value(465.76) == "465.76"
        assert format_value(0) == "0"


class TestRenderLines:
    def test_single_row_block(self, web01):
        lines = render_lines(_batch("memory", {"web01": web01}))
        assert lines[0] == "=== Memory: web01 ==="
        labels = [line.split(" : ", 1)[0].rstrip() for line in lines[1:]]
        assert labels == get_report("memory").schema.labels
        # labels are padded to a common width
        assert len({line.index(" : ") for line in lines[1:]}) == 1

    def test_multi_row_sub_blocks(self, web01):
        lines = render_lines(_batch("disks", {"web01": web01}))
        assert "[1/2]" in lines
        assert "[2/2]" in lines
        assert lines[lines.index("[2/2]") - 1] == ""

    def test_targets_in_order_with_blank_separator(self, fleet):
        lines = render_lines(_batch("os", fleet))
        headers = [line for line in lines if line.startswith("===")]
        assert headers == ["=== Operating System: web01 ===", "=== Operating System: web02 ===", "=== Operating System: db01 ==="]
        assert lines[lines.index(headers[1]) - 1] == ""

    def test_empty_filter_result_is_marked(self, web01):
        lines = render_lines(_batch("services", {"web01": web01}, name_filter="no-such-service"))
        assert lines == ["=== Services: web01 ===", "(no matching entries)"]

    def test_empty_batch_renders_nothing(self):
        assert render_lines(ReportBatch(get_report("os").schema)) == []

    def test_missing_values_render_blank(self):
        schema = get_report("bios").schema
        batch = ReportBatch(schema, (TargetReport("web01", (build_row(schema, {}),)),))
        assert all(line.endswith(" : ") for line in render_lines(batch)[1:])


class TestEchoBatch:
    def test_matches_rendered_lines(self, fleet):
        batch = _batch("cpu", fleet)

        @click.command()
        def show():
            echo_batch(batch)

        result = CliRunner().invoke(show)
        assert result.exit_code == 0
        assert result.output.splitlines() == render_lines(batch)
