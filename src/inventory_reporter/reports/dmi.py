"""Readers for the kernel's DMI/SMBIOS sysfs attributes."""

from __future__ import annotations

from inventory_reporter.connection import Connection
from inventory_reporter.errors import UnsupportedQueryError

DMI_DIR = "/sys/class/dmi/id"

# Firmware fills unset strings with vendor boilerplate.
PLACEHOLDERS = frozenset(
    {
        "to be filled by o.e.m.",
        "default string",
        "not specified",
        "not applicable",
        "system serial number",
        "none",
        "0",
    }
)


def read_dmi(conn: Connection, attributes: list[str]) -> dict[str, str | None]:
    """Read *attributes* from sysfs. Raises if none of them exist.

    Root-only attributes (serial numbers) read as None for other users.
    """
    values = {}
    for attr in attributes:
        text = conn.read_text(f"{DMI_DIR}/{attr}")
        values[attr] = text.strip() if text is not None else None
    if all(v is None for v in values.values()):
        raise UnsupportedQueryError(f"no DMI data under {DMI_DIR}")
    return values


def clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() in PLACEHOLDERS:
        return None
    return value
