"""One Encoder per export format, and the lookup table keyed by format."""

from __future__ import annotations

import csv
import functools
import io
import json
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from inventory_reporter.console import format_value, render_lines
from inventory_reporter.models.batch import ReportBatch, Scalar
from inventory_reporter.models.schema import TARGET_LABEL

from .base import Encoder, ExportFormat

DEFAULT_JSON_DEPTH = 4


def _csv_value(value: Scalar) -> str:
    return format_value(value).replace("\n", " ").replace("\r", "")


def tabular_rows(batch: ReportBatch) -> tuple[list[str], list[list[str]]]:
    """Header and one row per ``(target, row)`` with the target as leading column."""
    headers = [TARGET_LABEL, *batch.schema.labels]
    rows = [[target, *(_csv_value(row.get(label)) for label in batch.schema.labels)] for target, row in batch.flatten()]
    return headers, rows


class CsvEncoder(Encoder):
    format = ExportFormat.CSV

    def encode(self, batch: ReportBatch) -> bytes:
        headers, rows = tabular_rows(batch)
        buf = io.StringIO(newline="")
        writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(headers)
        writer.writerows(rows)
        return buf.getvalue().encode("utf-8")


def limit_depth(value: Any, depth: int) -> Any:
    """Keep *depth* levels of containers starting at *value*; deeper ones become strings."""
    if isinstance(value, dict):
        if depth <= 0:
            return str(value)
        return {k: limit_depth(v, depth - 1) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        if depth <= 0:
            return str(list(value))
        return [limit_depth(v, depth - 1) for v in value]
    return value


def batch_to_tree(batch: ReportBatch) -> dict[str, Any]:
    return {
        "schema": batch.schema.model_dump(mode="json"),
        "generated_at": batch.generated_at.isoformat(timespec="seconds"),
        "targets": [{"target": r.target, "rows": [row.to_dict() for row in r.rows]} for r in batch],
    }


class JsonEncoder(Encoder):
    """Nested target -> rows tree.

    Containers more than ``depth`` levels below the document root are written
    as their string form; rows sit at level 4, so the default keeps them whole.
    """

    format = ExportFormat.JSON

    def __init__(self, depth: int = DEFAULT_JSON_DEPTH) -> None:
        self.depth = depth

    def encode(self, batch: ReportBatch) -> bytes:
        tree = batch_to_tree(batch)
        # The schema block is metadata, always written in full.
        limited = {k: (v if k == "schema" else limit_depth(v, self.depth)) for k, v in tree.items()}
        return (json.dumps(limited, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


# Characters outside the XML 1.0 Char production cannot appear even as references.
_XML_INVALID = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_text(value: str) -> str:
    """Replace characters XML 1.0 cannot carry with U+FFFD."""
    return _XML_INVALID.sub("\ufffd", value)


def xml_type(value: Scalar) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    return "str"


class XmlEncoder(Encoder):
    """Self-describing XML: the schema travels with the data, every value carries its type."""

    format = ExportFormat.XML

    def encode(self, batch: ReportBatch) -> bytes:
        schema = batch.schema
        root = ET.Element("ReportBatch", {"generated_at": batch.generated_at.isoformat(timespec="seconds")})
        schema_el = ET.SubElement(
            root,
            "Schema",
            {
                "name": schema.name,
                "display_name": schema.display_name,
                "file_stem": schema.file_stem,
                "multi_row": str(schema.multi_row).lower(),
            },
        )
        if schema.filter_label is not None:
            schema_el.set("filter_label", schema.filter_label)
        for spec in schema.fields:
            ET.SubElement(schema_el, "FieldSpec", {"label": spec.label, "type": spec.type})

        for report in batch:
            target_el = ET.SubElement(root, "Target", {"name": xml_text(report.target)})
            for row in report.rows:
                row_el = ET.SubElement(target_el, "Row")
                for label, value in row.items():
                    field_el = ET.SubElement(row_el, "Field", {"label": xml_text(label)})
                    if value is None:
                        field_el.set("nil", "true")
                    else:
                        field_el.set("type", xml_type(value))
                        field_el.text = xml_text(str(value))

        ET.indent(root)
        data = ET.tostring(root, encoding="utf-8", xml_declaration=True) + b"\n"
        # Parsers fold a literal CR into LF; a character reference survives.
        return data.replace(b"\r", b"&#13;")


class TextEncoder(Encoder):
    format = ExportFormat.TXT

    def encode(self, batch: ReportBatch) -> bytes:
        return ("\n".join(render_lines(batch)) + "\n").encode("utf-8")


@functools.lru_cache(maxsize=1)
def get_jinja_env() -> Environment:
    template_dir = Path(__file__).resolve().parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class HtmlEncoder(Encoder):
    """Single HTML table, target as the leading column."""

    format = ExportFormat.HTML
    template = "report_table.html.j2"

    def encode(self, batch: ReportBatch) -> bytes:
        headers, rows = tabular_rows(batch)
        content = (
            get_jinja_env()
            .get_template(self.template)
            .render(
                title=batch.schema.display_name,
                generated_at=batch.generated_at.strftime("%Y-%m-%d %H:%M:%S"),
                headers=headers,
                rows=rows,
                target_count=len(batch),
            )
        )
        return content.encode("utf-8")


ENCODERS: dict[ExportFormat, type[Encoder]] = {
    ExportFormat.CSV: CsvEncoder,
    ExportFormat.JSON: JsonEncoder,
    ExportFormat.XML: XmlEncoder,
    ExportFormat.TXT: TextEncoder,
    ExportFormat.HTML: HtmlEncoder,
}
