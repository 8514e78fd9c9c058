"""systemd services with run state and start type."""

from __future__ import annotations

from typing import Any

from inventory_reporter.connection import Connection
from inventory_reporter.models.schema import define_schema
from inventory_reporter.normalization.primitives import blank_to_none, enum_label

from .base import ReportType, register

SCHEMA = define_schema(
    "services",
    "Services",
    "Services",
    [
        ("Name", "str"),
        ("Display Name", "str"),
        ("Status", "str"),
        ("Active State", "str"),
        ("Start Type", "str"),
    ],
    multi_row=True,
    filter_label="Name",
)

LIST_UNITS = "systemctl list-units --type=service --all --no-legend --no-pager --plain"
LIST_UNIT_FILES = "systemctl list-unit-files --type=service --no-legend --no-pager"

SUB_STATES = {
    "running": "Running",
    "exited": "Exited",
    "dead": "Stopped",
    "failed": "Failed",
    "start": "Starting",
    "start-pre": "Starting",
    "start-post": "Starting",
    "stop": "Stopping",
    "stop-sigterm": "Stopping",
    "stop-sigkill": "Stopping",
    "stop-post": "Stopping",
    "reload": "Reloading",
    "auto-restart": "Auto Restart",
    "condition": "Condition Failed",
}

ACTIVE_STATES = {
    "active": "Active",
    "inactive": "Inactive",
    "failed": "Failed",
    "activating": "Activating",
    "deactivating": "Deactivating",
    "reloading": "Reloading",
}

START_TYPES = {
    "enabled": "Automatic",
    "enabled-runtime": "Automatic (Runtime)",
    "disabled": "Manual",
    "masked": "Disabled",
    "masked-runtime": "Disabled (Runtime)",
    "static": "Static",
    "indirect": "Indirect",
    "generated": "Generated",
    "transient": "Transient",
    "alias": "Alias",
    "linked": "Linked",
}


def query(conn: Connection) -> dict[str, str]:
    return {"units": conn.run(LIST_UNITS), "unit_files": conn.run(LIST_UNIT_FILES)}


def _unit_name(unit: str) -> str:
    return unit[: -len(".service")] if unit.endswith(".service") else unit


def _parse_units(text: str) -> list[dict[str, str]]:
    units = []
    for line in text.splitlines():
        # Not-found units carry a leading bullet even with --plain.
        parts = line.replace("●", " ").split(None, 4)
        if len(parts) < 4:
            continue
        units.append(
            {
                "unit": parts[0],
                "load": parts[1],
                "active": parts[2],
                "sub": parts[3],
                "description": parts[4] if len(parts) > 4 else "",
            }
        )
    return units


def _parse_unit_files(text: str) -> dict[str, str]:
    states = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) >= 2:
            states[parts[0]] = parts[1]
    return states


def normalize(raw: dict[str, Any]) -> list[dict[str, Any]]:
    states = _parse_unit_files(raw.get("unit_files") or "")
    rows = []
    for unit in _parse_units(raw.get("units") or ""):
        rows.append(
            {
                "Name": _unit_name(unit["unit"]),
                "Display Name": blank_to_none(unit["description"]),
                "Status": enum_label(unit["sub"], SUB_STATES),
                "Active State": enum_label(unit["active"], ACTIVE_STATES),
                "Start Type": enum_label(states.get(unit["unit"]), START_TYPES),
            }
        )
    return sorted(rows, key=lambda r: str(r["Name"]).lower())


REPORT = register(ReportType(SCHEMA, query, normalize, "systemd services with status and start type."))
