"""Build a ReportBatch from collected query results."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from .collector import ConnectFn, QueryResult, collect
from .models.batch import ReportBatch, ReportRow, TargetReport
from .models.schema import ReportSchema
from .reports.base import ReportType
from .targets import Target

logger = logging.getLogger(__name__)


def apply_filter(
    schema: ReportSchema, target: str, rows: tuple[ReportRow, ...], name_filter: str | None
) -> tuple[ReportRow, ...]:
    """Keep rows whose filter field contains *name_filter* (case-insensitive)."""
    if not name_filter or schema.filter_label is None:
        return rows
    needle = name_filter.lower()
    kept = tuple(row for row in rows if needle in str(row.get(schema.filter_label) or "").lower())
    if not kept:
        logger.warning("No %s matching '%s' on %s", schema.display_name.lower(), name_filter, target)
    return kept


def build_batch(
    report: ReportType,
    results: Sequence[QueryResult[Any]],
    name_filter: str | None = None,
    generated_at: datetime | None = None,
) -> ReportBatch:
    """Normalize each successful result; failed targets are left out.

    A normalizer that cannot make sense of a target's raw data counts as a
    failure of that target.
    """
    reports: list[TargetReport] = []
    for result in results:
        if not result.ok:
            continue
        name = result.target.name
        try:
            rows = report.rows(result.value)
        except Exception as e:
            logger.warning("Normalization failed for %s: %s", name, e)
            continue
        reports.append(TargetReport(name, apply_filter(report.schema, name, rows, name_filter)))

    batch = ReportBatch(report.schema, tuple(reports), generated_at or datetime.now())
    logger.info("Built %s batch for %d of %d targets", report.name, len(batch), len(results))
    return batch


def run_report(
    report: ReportType,
    targets: Sequence[Target],
    connect: ConnectFn,
    name_filter: str | None = None,
) -> ReportBatch:
    """Collect, normalize and aggregate one report type across *targets*."""
    if name_filter and report.schema.filter_label is None:
        logger.warning("Report '%s' does not support name filters; ignoring '%s'", report.name, name_filter)
        name_filter = None
    results = collect(targets, report.query, connect)
    return build_batch(report, results, name_filter=name_filter)
