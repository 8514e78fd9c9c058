"""Operating system version, kernel and boot time."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.errors import CommandError, UnsupportedQueryError
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import blank_to_none, to_float, to_int

from .base import ReportType, parse_key_value, register

SCHEMA = define_schema(
    "os",
    "Operating System",
    "OSInfo",
    [
        ("Computer Name", "str"),
        ("OS Name", "str"),
        ("Version", "str"),
        ("Version Codename", "str"),
        ("Kernel", "str"),
        ("Architecture", "str"),
        ("Last Boot", "str"),
        ("Uptime (Hours)", "float"),
    ],
)


def _read_first(conn: Connection, path: str, command: str) -> str | None:
    """Contents of *path*, else stdout of *command*, else None."""
    text = conn.read_text(path)
    if text is not None and text.strip():
        return text.strip()
    try:
        return conn.run(command).strip() or None
    except CommandError:
        return None


def query(conn: Connection) -> dict[str, Any]:
    raw = {
        "hostname": _read_first(conn, "/proc/sys/kernel/hostname", "hostname"),
        "kernel": _read_first(conn, "/proc/sys/kernel/osrelease", "uname -r"),
        "machine": _read_first(conn, "/proc/sys/kernel/arch", "uname -m"),
        "os_release": conn.read_text("/etc/os-release"),
        "uptime": conn.read_text("/proc/uptime"),
        "stat": conn.read_text("/proc/stat"),
    }
    if all(v is None for v in raw.values()):
        raise UnsupportedQueryError("no OS information readable")
    return raw


def _boot_time(stat: str | None) -> str | None:
    for line in (stat or "").splitlines():
        if line.startswith("btime "):
            epoch = to_int(line.split()[1])
            if epoch is None:
                return None
            return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    return None


def _uptime_hours(uptime: str | None) -> float | None:
    parts = (uptime or "").split()
    seconds = to_float(parts[0]) if parts else None
    if seconds is None:
        return None
    return round(seconds / 3600, 2)


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    release = parse_key_value(raw.get("os_release"))
    return [
        {
            "Computer Name": blank_to_none(raw.get("hostname")),
            "OS Name": release.get("PRETTY_NAME") or release.get("NAME"),
            "Version": release.get("VERSION_ID"),
            "Version Codename": release.get("VERSION_CODENAME") or None,
            "Kernel": blank_to_none(raw.get("kernel")),
            "Architecture": blank_to_none(raw.get("machine")),
            "Last Boot": _boot_time(raw.get("stat")),
            "Uptime (Hours)": _uptime_hours(raw.get("uptime")),
        }
    ]


REPORT = register(ReportType(SCHEMA, query, normalize, "OS name, version, kernel and last boot time."))
