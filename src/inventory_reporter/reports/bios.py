"""BIOS / firmware information from DMI."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.models.schema import define_schema

from .base import ReportType, register
from .dmi import clean, read_dmi

SCHEMA = define_schema(
    "bios",
    "BIOS",
    "BIOSInfo",
    [
        ("Manufacturer", "str"),
        ("Version", "str"),
        ("Release Date", "str"),
        ("BIOS Release", "str"),
        ("Serial Number", "str"),
        ("System Manufacturer", "str"),
        ("System Model", "str"),
    ],
)

ATTRIBUTES = [
    "bios_vendor",
    "bios_version",
    "bios_date",
    "bios_release",
    "product_serial",
    "sys_vendor",
    "product_name",
]


def query(conn: Connection) -> dict[str, Any]:
    return read_dmi(conn, ATTRIBUTES)


def _release_date(value: str | None) -> str | None:
    """DMI dates are MM/DD/YYYY; render ISO, keep anything else as-is."""
    value = clean(value)
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%m/%d/%Y").strftime("%Y-%m-%d")
    except ValueError:
        return value


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "Manufacturer": clean(raw.get("bios_vendor")),
            "Version": clean(raw.get("bios_version")),
            "Release Date": _release_date(raw.get("bios_date")),
            "BIOS Release": clean(raw.get("bios_release")),
            "Serial Number": clean(raw.get("product_serial")),
            "System Manufacturer": clean(raw.get("sys_vendor")),
            "System Model": clean(raw.get("product_name")),
        }
    ]


REPORT = register(ReportType(SCHEMA, query, normalize, "BIOS vendor, version, release date and serial number."))
