"""Installed packages from dpkg or rpm."""

from __future__ import annotations

from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.errors import UnsupportedQueryError
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import blank_to_none, bytes_to_mb, to_int

from .base import ReportType, has_command, register

SCHEMA = define_schema(
    "software",
    "Installed Software",
    "InstalledSoftware",
    [
        ("Name", "str"),
        ("Version", "str"),
        ("Architecture", "str"),
        ("Size (MB)", "float"),
        ("Publisher", "str"),
        ("Package Manager", "str"),
    ],
    multi_row=True,
    filter_label="Name",
)

DPKG_QUERY = "dpkg-query -W -f='${db:Status-Abbrev}\\t${Package}\\t${Version}\\t${Architecture}\\t${Installed-Size}\\t${Maintainer}\\n'"
RPM_QUERY = "rpm -qa --qf '%{NAME}\\t%{VERSION}-%{RELEASE}\\t%{ARCH}\\t%{SIZE}\\t%{VENDOR}\\n'"


def query(conn: Connection) -> dict[str, Any]:
    if has_command(conn, "dpkg-query"):
        return {"manager": "dpkg", "output": conn.run(DPKG_QUERY)}
    if has_command(conn, "rpm"):
        return {"manager": "rpm", "output": conn.run(RPM_QUERY)}
    raise UnsupportedQueryError("neither dpkg-query nor rpm is available")


def _dpkg_rows(output: str) -> list[dict[str, Any]]:
    rows = []
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) < 6:
            continue
        status, name, version, arch, size_kib, maintainer = parts[:6]
        # Only fully installed packages ("ii").
        if not status.startswith("ii"):
            continue
        kib = to_int(size_kib)
        rows.append(
            {
                "Name": name,
                "Version": blank_to_none(version),
                "Architecture": blank_to_none(arch),
                "Size (MB)": bytes_to_mb(kib * 1024) if kib is not None else None,
                "Publisher": blank_to_none(maintainer),
                "Package Manager": "dpkg",
            }
        )
    return rows


def _rpm_rows(output: str) -> list[dict[str, Any]]:
    rows = []
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) < 5:
            continue
        name, version, arch, size, vendor = parts[:5]
        rows.append(
            {
                "Name": name,
                "Version": blank_to_none(version),
                "Architecture": None if arch == "(none)" else blank_to_none(arch),
                "Size (MB)": bytes_to_mb(size),
                "Publisher": None if vendor == "(none)" else blank_to_none(vendor),
                "Package Manager": "rpm",
            }
        )
    return rows


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    output = raw.get("output") or ""
    rows = _dpkg_rows(output) if raw.get("manager") == "dpkg" else _rpm_rows(output)
    return sorted(rows, key=lambda r: (str(r["Name"]).lower(), str(r["Version"] or ""), str(r["Architecture"] or "")))


REPORT = register(ReportType(SCHEMA, query, normalize, "Installed packages (dpkg or rpm)."))
