"""Processor model and topology from lscpu."""

from __future__ import annotations

import json
from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.errors import QueryError
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import enum_label, safe_list, to_float, to_int

from .base import ReportType, register

SCHEMA = define_schema(
    "cpu",
    "Processor",
    "CPUInfo",
    [
        ("Name", "str"),
        ("Manufacturer", "str"),
        ("Architecture", "str"),
        ("Sockets", "int"),
        ("Cores per Socket", "int"),
        ("Threads per Core", "int"),
        ("Logical Processors", "int"),
        ("Max Clock (MHz)", "float"),
        ("L3 Cache", "str"),
        ("Virtualization", "str"),
    ],
)

VENDORS = {
    "genuineintel": "Intel",
    "authenticamd": "AMD",
    "hygongenuine": "Hygon",
    "centaurhauls": "Centaur",
    "arm": "ARM",
    "apm": "Applied Micro",
    "cavium": "Cavium",
    "apple": "Apple",
    "ibm/s390": "IBM",
}


def query(conn: Connection) -> dict[str, Any]:
    output = conn.run("lscpu -J")
    try:
        return json.loads(output)
    except ValueError as e:
        raise QueryError(f"unparsable lscpu output: {e}") from e


def flatten_lscpu(entries: Any) -> dict[str, str]:
    """lscpu -J nests sections under ``children`` on newer util-linux."""
    out: dict[str, str] = {}
    for entry in safe_list(entries):
        if not isinstance(entry, dict):
            continue
        key = str(entry.get("field", "")).strip().rstrip(":")
        if key and entry.get("data") is not None:
            out.setdefault(key, str(entry["data"]).strip())
        out.update({k: v for k, v in flatten_lscpu(entry.get("children")).items() if k not in out})
    return out


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    info = flatten_lscpu(raw.get("lscpu"))
    max_mhz = to_float(info.get("CPU max MHz"))
    return [
        {
            "Name": info.get("Model name"),
            "Manufacturer": enum_label(info.get("Vendor ID"), VENDORS),
            "Architecture": info.get("Architecture"),
            "Sockets": to_int(info.get("Socket(s)")),
            "Cores per Socket": to_int(info.get("Core(s) per socket") or info.get("Core(s) per cluster")),
            "Threads per Core": to_int(info.get("Thread(s) per core")),
            "Logical Processors": to_int(info.get("CPU(s)")),
            "Max Clock (MHz)": round(max_mhz, 1) if max_mhz is not None else None,
            "L3 Cache": info.get("L3 cache") or info.get("L3"),
            "Virtualization": info.get("Virtualization") or info.get("Hypervisor vendor"),
        }
    ]


REPORT = register(ReportType(SCHEMA, query, normalize, "Processor model, vendor, topology and clock."))
