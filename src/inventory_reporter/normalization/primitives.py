"""Value helpers shared by the report normalizers."""

from collections.abc import Mapping
from typing import Any

_GB = 1024**3
_MB = 1024**2

LIST_DELIMITER = "; "


def safe_list(value: Any) -> list[Any]:
    if isinstance(value, str):
        return []
    try:
        return list(value or [])
    except (TypeError, ValueError):
        return []


def to_int(value: Any, default: int | None = None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def to_float(value: Any, default: float | None = None) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def bytes_to_gb(value: Any, ndigits: int = 2) -> float | None:
    """
    >>> bytes_to_gb(1073741824)
    1.0
    >>> bytes_to_gb(None) is None
    True
    """
    n = to_float(value)
    if n is None:
        return None
    return round(n / _GB, ndigits)


def bytes_to_mb(value: Any, ndigits: int = 2) -> float | None:
    n = to_float(value)
    if n is None:
        return None
    return round(n / _MB, ndigits)


def enum_label(value: Any, labels: Mapping[Any, str]) -> str | None:
    """Translate an enumerated code into its display label.

    Unmatched codes render as ``Unknown (<code>)``; a missing code is None.

    >>> enum_label("up", {"up": "Up"})
    'Up'
    >>> enum_label("lowerlayerdown", {"up": "Up"})
    'Unknown (lowerlayerdown)'
    """
    if value is None or value == "":
        return None
    key = value.lower() if isinstance(value, str) else value
    if key in labels:
        return labels[key]
    return f"Unknown ({value})"


def join_values(values: Any) -> str | None:
    """Join a multi-value field with the fixed delimiter; empty -> None."""
    items = [str(v) for v in safe_list(values) if v not in (None, "")]
    if not items:
        return None
    return LIST_DELIMITER.join(items)


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
