"""Write an encoded batch to a timestamped file."""

from __future__ import annotations

import logging
import tempfile
from datetime import datetime
from pathlib import Path

from inventory_reporter.errors import ExportError
from inventory_reporter.models.batch import ReportBatch
from inventory_reporter.models.schema import ReportSchema

from .base import Encoder, ExportFormat
from .encoders import DEFAULT_JSON_DEPTH, ENCODERS, JsonEncoder

logger = logging.getLogger(__name__)


def get_encoder(fmt: ExportFormat | str, json_depth: int = DEFAULT_JSON_DEPTH) -> Encoder:
    fmt = ExportFormat.parse(fmt)
    if fmt is ExportFormat.JSON:
        return JsonEncoder(depth=json_depth)
    return ENCODERS[fmt]()


def build_filename(schema: ReportSchema, fmt: ExportFormat, now: datetime) -> str:
    """``<FileStem>_<YYYYMMDD_HHMMSS>.<ext>``"""
    return f"{schema.file_stem}_{now.strftime('%Y%m%d_%H%M%S')}.{fmt.extension}"


def resolve_export_dir(directory: str | Path | None) -> Path:
    return Path(directory).expanduser() if directory else Path(tempfile.gettempdir())


def export_batch(
    batch: ReportBatch,
    fmt: ExportFormat | str,
    directory: str | Path | None = None,
    now: datetime | None = None,
    json_depth: int = DEFAULT_JSON_DEPTH,
) -> Path:
    """Encode *batch* and write it to ``<directory>/<FileStem>_<timestamp>.<ext>``.

    The directory defaults to the platform temp directory and is created when
    absent. A same-second collision overwrites the earlier file. The write is
    not atomic: a failure part-way may leave a partial file behind.

    Raises ExportError when the directory cannot be created or the file
    cannot be written.
    """
    encoder = get_encoder(fmt, json_depth=json_depth)
    out_dir = resolve_export_dir(directory)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Cannot create export directory {out_dir}: {e}") from e

    path = out_dir / build_filename(batch.schema, encoder.format, now or datetime.now())
    try:
        data = encoder.encode(batch)
    except (TypeError, ValueError) as e:
        raise ExportError(f"Cannot encode {batch.schema.name} batch as {encoder.format.value}: {e}") from e

    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e

    logger.info("Exported %d rows for %d targets to %s", batch.row_count, len(batch), path)
    return path
