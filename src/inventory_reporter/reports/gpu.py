"""Display controllers from lspci."""

from __future__ import annotations

from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import blank_to_none

from .base import ReportType, register

SCHEMA = define_schema(
    "gpu",
    "Video Controllers",
    "GPUInfo",
    [
        ("Name", "str"),
        ("Manufacturer", "str"),
        ("Type", "str"),
        ("Slot", "str"),
        ("Subsystem", "str"),
        ("Revision", "str"),
        ("Driver", "str"),
    ],
    multi_row=True,
)

DISPLAY_CLASSES = {
    "VGA compatible controller": "VGA",
    "3D controller": "3D",
    "Display controller": "Display",
    "XGA compatible controller": "XGA",
}


def query(conn: Connection) -> str:
    return conn.run("lspci -vmm -k")


def parse_lspci(text: str) -> list[dict[str, str]]:
    """``lspci -vmm`` prints ``Key:\\tvalue`` records separated by blank lines."""
    records: list[dict[str, str]] = []
    current: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            if current:
                records.append(current)
                current = {}
            continue
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        current.setdefault(key.strip(), value.strip())
    if current:
        records.append(current)
    return records


def normalize(raw: str) -> list[dict[str, Any]]:
    rows = []
    for rec in parse_lspci(raw or ""):
        kind = DISPLAY_CLASSES.get(rec.get("Class", ""))
        if kind is None:
            continue
        subsystem = " ".join(v for v in (rec.get("SVendor"), rec.get("SDevice")) if v)
        rows.append(
            {
                "Name": blank_to_none(rec.get("Device")),
                "Manufacturer": blank_to_none(rec.get("Vendor")),
                "Type": kind,
                "Slot": blank_to_none(rec.get("Slot")),
                "Subsystem": subsystem or None,
                "Revision": blank_to_none(rec.get("Rev")),
                "Driver": blank_to_none(rec.get("Driver")),
            }
        )
    return rows


REPORT = register(ReportType(SCHEMA, query, normalize, "Video controllers with vendor, slot and driver."))
