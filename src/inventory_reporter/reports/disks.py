"""Physical disks from lsblk."""

from __future__ import annotations

import json
from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.errors import QueryError
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import blank_to_none, bytes_to_gb, enum_label, safe_list

from .base import ReportType, register

SCHEMA = define_schema(
    "disks",
    "Disks",
    "DiskInfo",
    [
        ("Device", "str"),
        ("Model", "str"),
        ("Vendor", "str"),
        ("Serial Number", "str"),
        ("Size (GB)", "float"),
        ("Interface", "str"),
        ("Media Type", "str"),
        ("Partitions", "int"),
    ],
    multi_row=True,
)

LSBLK = "lsblk -J -b -o NAME,TYPE,SIZE,MODEL,VENDOR,SERIAL,TRAN,ROTA"

TRANSPORTS = {
    "sata": "SATA",
    "ata": "ATA",
    "nvme": "NVMe",
    "sas": "SAS",
    "scsi": "SCSI",
    "usb": "USB",
    "mmc": "MMC",
    "virtio": "VirtIO",
    "iscsi": "iSCSI",
    "fc": "Fibre Channel",
    "spi": "SPI",
}


def query(conn: Connection) -> dict[str, Any]:
    output = conn.run(LSBLK)
    try:
        return json.loads(output)
    except ValueError as e:
        raise QueryError(f"unparsable lsblk output: {e}") from e


def _media_type(rota: Any) -> str | None:
    if rota is None:
        return None
    if isinstance(rota, str):
        rota = rota.strip() not in ("0", "false", "")
    return "HDD" if rota else "SSD"


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    rows = []
    for dev in safe_list(raw.get("blockdevices")):
        if not isinstance(dev, dict) or dev.get("type") != "disk":
            continue
        children = [c for c in safe_list(dev.get("children")) if isinstance(c, dict) and c.get("type") == "part"]
        rows.append(
            {
                "Device": f"/dev/{dev.get('name')}",
                "Model": blank_to_none(dev.get("model")),
                "Vendor": blank_to_none(dev.get("vendor")),
                "Serial Number": blank_to_none(dev.get("serial")),
                "Size (GB)": bytes_to_gb(dev.get("size")),
                "Interface": enum_label(blank_to_none(dev.get("tran")), TRANSPORTS),
                "Media Type": _media_type(dev.get("rota")),
                "Partitions": len(children),
            }
        )
    return rows


REPORT = register(ReportType(SCHEMA, query, normalize, "Physical disks with size, interface and media type."))
