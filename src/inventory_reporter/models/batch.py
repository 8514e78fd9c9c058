"""Runtime report records: rows, per-target reports and the ordered batch."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .schema import ReportSchema

Scalar = str | int | float | bool | None


class ReportRow(Mapping[str, Scalar]):
    """Immutable label -> value mapping with a fixed field order."""

    __slots__ = ("_items", "_index")

    def __init__(self, items: Any = ()) -> None:
        pairs = tuple(items.items()) if isinstance(items, Mapping) else tuple(items)
        self._items: tuple[tuple[str, Scalar], ...] = pairs
        self._index: dict[str, Scalar] = dict(pairs)

    def __getitem__(self, label: str) -> Scalar:
        return self._index[label]

    def __iter__(self) -> Iterator[str]:
        return (label for label, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReportRow):
            return self._items == other._items
        if isinstance(other, Mapping):
            return list(self._items) == list(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"ReportRow({dict(self._items)!r})"

    def to_dict(self) -> dict[str, Scalar]:
        return dict(self._items)


@dataclass(frozen=True)
class TargetReport:
    target: str
    rows: tuple[ReportRow, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ReportBatch:
    """Ordered per-target results of one report invocation.

    Order matches the order targets were requested in. Failed targets are
    never present.
    """

    schema: ReportSchema
    reports: tuple[TargetReport, ...] = ()
    generated_at: datetime = field(default_factory=datetime.now)

    def __iter__(self) -> Iterator[TargetReport]:
        return iter(self.reports)

    def __len__(self) -> int:
        return len(self.reports)

    @property
    def targets(self) -> list[str]:
        return [r.target for r in self.reports]

    @property
    def row_count(self) -> int:
        return sum(r.row_count for r in self.reports)

    def flatten(self) -> list[tuple[str, ReportRow]]:
        """One ``(target, row)`` pair per row, in batch order."""
        return [(report.target, row) for report in self.reports for row in report.rows]
