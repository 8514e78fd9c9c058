"""Turn normalizer output into schema-ordered, type-coerced ReportRows."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from inventory_reporter.models.batch import ReportRow, Scalar
from inventory_reporter.models.schema import ReportSchema

logger = logging.getLogger(__name__)

_FALSY_STRINGS = frozenset({"false", "no", "0", "off", "n", ""})


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY_STRINGS
    return bool(value)


_TYPE_COERCERS: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": _coerce_bool,
}


def _coerce(value: Any, type_name: str, label: str) -> Scalar:
    if value is None:
        return None
    if type_name == "int" and isinstance(value, float):
        value = round(value)
    try:
        return _TYPE_COERCERS[type_name](value)
    except (TypeError, ValueError):
        logger.debug("Cannot coerce %r to %s for field '%s'", value, type_name, label)
        return None


def build_row(schema: ReportSchema, values: Mapping[str, Any]) -> ReportRow:
    """Order *values* by the schema, coerce each to its semantic type.

    Labels missing from *values* become None. Labels not in the schema are a
    programming error in the normalizer.
    """
    unknown = [k for k in values if k not in schema.labels]
    if unknown:
        raise KeyError(f"{schema.name}: unknown field(s) {unknown}")
    return ReportRow((spec.label, _coerce(values.get(spec.label), spec.type, spec.label)) for spec in schema.fields)


def build_rows(schema: ReportSchema, records: Iterable[Mapping[str, Any]]) -> tuple[ReportRow, ...]:
    return tuple(build_row(schema, record) for record in records)
