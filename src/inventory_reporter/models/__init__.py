from .batch import ReportBatch, ReportRow, TargetReport
from .schema import FieldSpec, ReportSchema

__all__ = [
    "FieldSpec",
    "ReportBatch",
    "ReportRow",
    "ReportSchema",
    "TargetReport",
]
