"""Read JSON and XML exports back into ReportBatch objects."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Any

from inventory_reporter.models.batch import ReportBatch, ReportRow, Scalar, TargetReport
from inventory_reporter.models.schema import FieldSpec, ReportSchema
from inventory_reporter.normalization.rows import build_row

_XML_TYPES = {
    "str": str,
    "int": int,
    "float": float,
    "bool": lambda text: text.strip().lower() == "true",
}


def read_json_batch(path: str | Path) -> ReportBatch:
    with open(path, encoding="utf-8") as f:
        tree: dict[str, Any] = json.load(f)
    schema = ReportSchema.model_validate(tree["schema"])
    reports = tuple(
        TargetReport(entry["target"], tuple(build_row(schema, row) for row in entry.get("rows", [])))
        for entry in tree.get("targets", [])
    )
    return ReportBatch(schema, reports, datetime.fromisoformat(tree["generated_at"]))


def _xml_value(field: ET.Element) -> Scalar:
    if field.get("nil") == "true":
        return None
    return _XML_TYPES[field.get("type", "str")](field.text or "")


def read_xml_batch(path: str | Path) -> ReportBatch:
    root = ET.parse(path).getroot()
    schema_el = root.find("Schema")
    if schema_el is None:
        raise ValueError(f"{path}: missing <Schema> element")
    schema = ReportSchema(
        name=schema_el.get("name", ""),
        display_name=schema_el.get("display_name", ""),
        file_stem=schema_el.get("file_stem", ""),
        multi_row=schema_el.get("multi_row") == "true",
        filter_label=schema_el.get("filter_label"),
        fields=tuple(FieldSpec(label=f.get("label", ""), type=f.get("type", "str")) for f in schema_el.findall("FieldSpec")),
    )
    reports = []
    for target_el in root.findall("Target"):
        rows = tuple(
            ReportRow((f.get("label", ""), _xml_value(f)) for f in row_el.findall("Field"))
            for row_el in target_el.findall("Row")
        )
        reports.append(TargetReport(target_el.get("name", ""), rows))
    return ReportBatch(schema, tuple(reports), datetime.fromisoformat(root.get("generated_at", "")))
