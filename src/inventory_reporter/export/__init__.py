"""File export of report batches."""

from .base import Encoder, ExportFormat
from .encoders import ENCODERS
from .readers import read_json_batch, read_xml_batch
from .writer import build_filename, export_batch, get_encoder

__all__ = [
    "ENCODERS",
    "Encoder",
    "ExportFormat",
    "build_filename",
    "export_batch",
    "get_encoder",
    "read_json_batch",
    "read_xml_batch",
]
