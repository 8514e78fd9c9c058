"""Pydantic models for report schemas (ordered, typed field lists)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Leading column injected by the tabular encoders.
TARGET_LABEL = "Target"

SemanticType = Literal["str", "int", "float", "bool"]


class FieldSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str = Field(min_length=1)
    type: SemanticType = "str"


class ReportSchema(BaseModel):
    """Fixed field order and labels for one report type.

    ``name`` is the CLI/registry name, ``file_stem`` the export filename prefix.
    ``multi_row`` marks report types returning several rows per target
    (disks, adapters, packages).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(pattern=r"^[a-z][a-z0-9_]*$")
    display_name: str
    file_stem: str = Field(pattern=r"^[A-Za-z0-9]+$")
    fields: tuple[FieldSpec, ...]
    multi_row: bool = False
    # Label matched by --name filters; None means the report takes no filter.
    filter_label: str | None = None

    @model_validator(mode="after")
    def _check_fields(self) -> "ReportSchema":
        if not self.fields:
            raise ValueError(f"schema '{self.name}' defines no fields")
        labels = [f.label for f in self.fields]
        dupes = sorted({lbl for lbl in labels if labels.count(lbl) > 1})
        if dupes:
            raise ValueError(f"schema '{self.name}' has duplicate labels: {dupes}")
        if TARGET_LABEL in labels:
            raise ValueError(f"schema '{self.name}': label '{TARGET_LABEL}' is reserved")
        if self.filter_label is not None and self.filter_label not in labels:
            raise ValueError(f"schema '{self.name}': filter_label '{self.filter_label}' is not a field")
        return self

    @property
    def labels(self) -> list[str]:
        return [f.label for f in self.fields]

    def field_type(self, label: str) -> str:
        for spec in self.fields:
            if spec.label == label:
                return spec.type
        raise KeyError(label)


def define_schema(
    name: str,
    display_name: str,
    file_stem: str,
    fields: list[tuple[str, SemanticType]],
    *,
    multi_row: bool = False,
    filter_label: str | None = None,
) -> ReportSchema:
    """Build a ReportSchema from ``(label, type)`` pairs."""
    return ReportSchema(
        name=name,
        display_name=display_name,
        file_stem=file_stem,
        fields=tuple(FieldSpec(label=label, type=type_) for label, type_ in fields),
        multi_row=multi_row,
        filter_label=filter_label,
    )
