"""Network adapters: link state, addresses and speed."""

from __future__ import annotations

import json
from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.errors import QueryError
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import blank_to_none, enum_label, join_values, safe_list, to_int

from .base import ReportType, register

SCHEMA = define_schema(
    "network",
    "Network Adapters",
    "NetworkAdapters",
    [
        ("Name", "str"),
        ("MAC Address", "str"),
        ("Status", "str"),
        ("Link Type", "str"),
        ("MTU", "int"),
        ("Speed (Mbps)", "int"),
        ("IPv4 Addresses", "str"),
        ("IPv6 Addresses", "str"),
        ("DHCP Enabled", "bool"),
    ],
    multi_row=True,
    filter_label="Name",
)

OPER_STATES = {
    "up": "Up",
    "down": "Down",
    "dormant": "Dormant",
    "testing": "Testing",
    "notpresent": "Not Present",
    "lowerlayerdown": "Lower Layer Down",
    "unknown": "Unknown",
}


def query(conn: Connection) -> dict[str, Any]:
    addresses = conn.run("ip -j addr show")
    speeds: dict[str, str | None] = {}
    try:
        interfaces = json.loads(addresses or "[]")
    except ValueError as e:
        raise QueryError(f"unparsable 'ip -j addr' output: {e}") from e
    for iface in safe_list(interfaces):
        name = iface.get("ifname") if isinstance(iface, dict) else None
        if name:
            speeds[name] = conn.read_text(f"/sys/class/net/{name}/speed")
    return {"addresses": interfaces, "speeds": speeds}


def _addresses(addr_info: list[Any], family: str) -> list[str]:
    return [
        f"{a['local']}/{a['prefixlen']}" if a.get("prefixlen") is not None else str(a["local"])
        for a in addr_info
        if isinstance(a, dict) and a.get("family") == family and a.get("local")
    ]


def _speed(text: str | None) -> int | None:
    speed = to_int((text or "").strip())
    # Virtual and down links report -1.
    if speed is None or speed < 0:
        return None
    return speed


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    speeds = raw.get("speeds") or {}
    rows = []
    for iface in safe_list(raw.get("addresses")):
        if not isinstance(iface, dict):
            continue
        name = iface.get("ifname")
        addr_info = safe_list(iface.get("addr_info"))
        ipv4 = [a for a in addr_info if isinstance(a, dict) and a.get("family") == "inet"]
        rows.append(
            {
                "Name": name,
                "MAC Address": blank_to_none(iface.get("address")),
                "Status": enum_label(iface.get("operstate"), OPER_STATES),
                "Link Type": iface.get("link_type"),
                "MTU": iface.get("mtu"),
                "Speed (Mbps)": _speed(speeds.get(name)),
                "IPv4 Addresses": join_values(_addresses(addr_info, "inet")),
                "IPv6 Addresses": join_values(_addresses(addr_info, "inet6")),
                "DHCP Enabled": any(a.get("dynamic") for a in ipv4) if ipv4 else None,
            }
        )
    return rows


REPORT = register(ReportType(SCHEMA, query, normalize, "Network adapters with addresses, state and speed."))
