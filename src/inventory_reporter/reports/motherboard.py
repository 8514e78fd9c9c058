"""Baseboard and chassis information from DMI."""

from __future__ import annotations

from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import enum_label, to_int

from .base import ReportType, register
from .dmi import clean, read_dmi

SCHEMA = define_schema(
    "motherboard",
    "Motherboard",
    "MotherboardInfo",
    [
        ("Manufacturer", "str"),
        ("Product", "str"),
        ("Version", "str"),
        ("Serial Number", "str"),
        ("Asset Tag", "str"),
        ("Chassis Type", "str"),
        ("Chassis Manufacturer", "str"),
    ],
)

ATTRIBUTES = [
    "board_vendor",
    "board_name",
    "board_version",
    "board_serial",
    "board_asset_tag",
    "chassis_type",
    "chassis_vendor",
]

# SMBIOS 3.x system enclosure types.
CHASSIS_TYPES = {
    1: "Other",
    2: "Unknown",
    3: "Desktop",
    4: "Low Profile Desktop",
    5: "Pizza Box",
    6: "Mini Tower",
    7: "Tower",
    8: "Portable",
    9: "Laptop",
    10: "Notebook",
    11: "Hand Held",
    12: "Docking Station",
    13: "All in One",
    14: "Sub Notebook",
    15: "Space-saving",
    16: "Lunch Box",
    17: "Main Server Chassis",
    18: "Expansion Chassis",
    19: "SubChassis",
    20: "Bus Expansion Chassis",
    21: "Peripheral Chassis",
    22: "RAID Chassis",
    23: "Rack Mount Chassis",
    24: "Sealed-case PC",
    25: "Multi-system Chassis",
    26: "Compact PCI",
    27: "Advanced TCA",
    28: "Blade",
    29: "Blade Enclosure",
    30: "Tablet",
    31: "Convertible",
    32: "Detachable",
    33: "IoT Gateway",
    34: "Embedded PC",
    35: "Mini PC",
    36: "Stick PC",
}


def query(conn: Connection) -> dict[str, Any]:
    return read_dmi(conn, ATTRIBUTES)


def _chassis(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    code = to_int(value.strip())
    return enum_label(code if code is not None else value.strip(), CHASSIS_TYPES)


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "Manufacturer": clean(raw.get("board_vendor")),
            "Product": clean(raw.get("board_name")),
            "Version": clean(raw.get("board_version")),
            "Serial Number": clean(raw.get("board_serial")),
            "Asset Tag": clean(raw.get("board_asset_tag")),
            "Chassis Type": _chassis(raw.get("chassis_type")),
            "Chassis Manufacturer": clean(raw.get("chassis_vendor")),
        }
    ]


REPORT = register(ReportType(SCHEMA, query, normalize, "Baseboard vendor, product, serial and chassis type."))
