"""
Validate and sanitize contract field data against a blueprint schema.
Only labels the schema describes are kept; the first missing required field fails the payload.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from contracthub.models import FieldType
from contracthub.templates.blueprint_schema import BlueprintSchema, FieldDefinition


@dataclass(frozen=True)
class MissingRequiredField:
    label: str

    @property
    def message(self) -> str:
        return f"Missing required field: {self.label}"


def is_missing(field_def: FieldDefinition, incoming: Dict[str, Any]) -> bool:
    """True if a required field has no usable value in incoming."""
    if field_def.label not in incoming:
        return True
    value = incoming[field_def.label]
    if value is None:
        return True
    if field_def.field_type == FieldType.CHECKBOX:
        return value is not True
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return len(str(value).strip()) == 0


def validate_field_data(
    schema: BlueprintSchema,
    incoming: Optional[Dict[str, Any]],
) -> Tuple[Dict[str, Any], Optional[MissingRequiredField]]:
    """Returns (sanitized data, None) on success or ({}, MissingRequiredField) on the first failure."""
    incoming = incoming or {}
    sanitized: Dict[str, Any] = {}
    for field_def in schema.fields:
        if not field_def.label:
            continue
        if field_def.required and is_missing(field_def, incoming):
            return {}, MissingRequiredField(field_def.label)
        if field_def.label in incoming:
            sanitized[field_def.label] = incoming[field_def.label]
    return sanitized, None
