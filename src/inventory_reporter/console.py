"""Console rendering: one labeled block per target, one sub-block per row."""

from __future__ import annotations

import click

from .models.batch import ReportBatch, ReportRow, Scalar, TargetReport


def format_value(value: Scalar) -> str:
    if value is None:
        return ""
    return str(value)


def _row_lines(row: ReportRow, width: int) -> list[str]:
    return [f"{label.ljust(width)} : {format_value(value)}" for label, value in row.items()]


def target_lines(batch: ReportBatch, report: TargetReport) -> list[str]:
    """Lines for one target, without its header."""
    schema = batch.schema
    width = max(len(label) for label in schema.labels)
    if not report.rows:
        return ["(no matching entries)"]
    lines: list[str] = []
    for i, row in enumerate(report.rows, start=1):
        if schema.multi_row:
            if i > 1:
                lines.append("")
            lines.append(f"[{i}/{report.row_count}]")
        lines.extend(_row_lines(row, width))
    return lines


def header(batch: ReportBatch, report: TargetReport) -> str:
    return f"=== {batch.schema.display_name}: {report.target} ==="


def render_lines(batch: ReportBatch) -> list[str]:
    """Plain lines for the whole batch, in target order."""
    lines: list[str] = []
    for report in batch:
        if lines:
            lines.append("")
        lines.append(header(batch, report))
        lines.extend(target_lines(batch, report))
    return lines


def echo_batch(batch: ReportBatch) -> None:
    first = True
    for report in batch:
        if not first:
            click.echo("")
        first = False
        click.secho(header(batch, report), bold=True)
        for line in target_lines(batch, report):
            click.echo(line)
