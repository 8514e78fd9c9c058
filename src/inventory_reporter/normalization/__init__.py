from .primitives import (
    bytes_to_gb,
    bytes_to_mb,
    enum_label,
    join_values,
    safe_list,
    to_float,
    to_int,
)
from .rows import build_row, build_rows

__all__ = [
    "build_row",
    "build_rows",
    "bytes_to_gb",
    "bytes_to_mb",
    "enum_label",
    "join_values",
    "safe_list",
    "to_float",
    "to_int",
]
