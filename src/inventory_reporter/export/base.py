"""Export formats and the Encoder interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from inventory_reporter.errors import ParameterError
from inventory_reporter.models.batch import ReportBatch


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    XML = "xml"
    TXT = "txt"
    HTML = "html"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | ExportFormat") -> "ExportFormat":
        if isinstance(value, ExportFormat):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ParameterError(f"Unknown export format '{value}' (choose from: {choices})") from None


class Encoder(ABC):
    """Serializes a whole ReportBatch into file bytes."""

    format: ExportFormat

    @abstractmethod
    def encode(self, batch: ReportBatch) -> bytes: ...
