"""Report type definition and registry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.errors import CommandError, ParameterError
from inventory_reporter.models.batch import ReportRow
from inventory_reporter.models.schema import ReportSchema
from inventory_reporter.normalization.rows import build_rows

QueryFn = Callable[[Connection], Any]
NormalizeFn = Callable[[Any], list[dict[str, Any]]]


@dataclass(frozen=True)
class ReportType:
    """A schema plus the query that fetches raw data and the normalizer that shapes it."""

    schema: ReportSchema
    query: QueryFn
    normalize: NormalizeFn
    description: str = ""

    @property
    def name(self) -> str:
        return self.schema.name

    def rows(self, raw: Any) -> tuple[ReportRow, ...]:
        return build_rows(self.schema, self.normalize(raw))


_REGISTRY: dict[str, ReportType] = {}


def register(report: ReportType) -> ReportType:
    if report.name in _REGISTRY:
        raise ValueError(f"report type '{report.name}' is already registered")
    _REGISTRY[report.name] = report
    return report


def get_report(name: str) -> ReportType:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise ParameterError(f"Unknown report type '{name}' (known: {', '.join(sorted(_REGISTRY))})") from None


def list_reports() -> list[ReportType]:
    return list(_REGISTRY.values())


# ---------------------------------------------------------------------------
# Small parsing helpers shared by the queries
# ---------------------------------------------------------------------------


def parse_key_value(text: str | None, sep: str = "=") -> dict[str, str]:
    """Parse ``KEY=value`` lines (os-release style), unquoting values."""
    out: dict[str, str] = {}
    for line in (text or "").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or sep not in line:
            continue
        key, value = line.split(sep, 1)
        out[key.strip()] = value.strip().strip('"').strip("'")
    return out


def has_command(conn: Connection, name: str) -> bool:
    try:
        conn.run(f"command -v {name}")
    except CommandError:
        return False
    return True
