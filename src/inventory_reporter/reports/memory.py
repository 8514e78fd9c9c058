"""Memory and swap totals from /proc/meminfo."""

from __future__ import annotations

from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.errors import UnsupportedQueryError
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import bytes_to_gb, to_int

from .base import ReportType, register

SCHEMA = define_schema(
    "memory",
    "Memory",
    "MemoryInfo",
    [
        ("Total (GB)", "float"),
        ("Available (GB)", "float"),
        ("Used (GB)", "float"),
        ("Used (%)", "float"),
        ("Swap Total (GB)", "float"),
        ("Swap Free (GB)", "float"),
    ],
)


def query(conn: Connection) -> str:
    text = conn.read_text("/proc/meminfo")
    if text is None:
        raise UnsupportedQueryError("/proc/meminfo is not readable")
    return text


def parse_meminfo(text: str) -> dict[str, int]:
    """``MemTotal:  16318412 kB`` lines -> bytes."""
    out: dict[str, int] = {}
    for line in text.splitlines():
        if ":" not in line:
            continue
        key, rest = line.split(":", 1)
        parts = rest.split()
        value = to_int(parts[0]) if parts else None
        if value is None:
            continue
        if len(parts) > 1 and parts[1].lower() == "kb":
            value *= 1024
        out[key.strip()] = value
    return out


def normalize(raw: str) -> list[dict[str, Any]]:
    info = parse_meminfo(raw or "")
    total = info.get("MemTotal")
    available = info.get("MemAvailable")
    used = total - available if total is not None and available is not None else None
    return [
        {
            "Total (GB)": bytes_to_gb(total),
            "Available (GB)": bytes_to_gb(available),
            "Used (GB)": bytes_to_gb(used),
            "Used (%)": round(used / total * 100, 1) if used is not None and total else None,
            "Swap Total (GB)": bytes_to_gb(info.get("SwapTotal")),
            "Swap Free (GB)": bytes_to_gb(info.get("SwapFree")),
        }
    ]


REPORT = register(ReportType(SCHEMA, query, normalize, "Physical memory and swap usage."))
