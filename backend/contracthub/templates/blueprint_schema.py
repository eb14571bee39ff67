"""
Blueprint schema: an ordered set of labelled, typed fields used to instantiate contracts.
Labels are the keys under which contract data is stored.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from contracthub.models import FieldType

FIELD_TYPES = {t.value for t in FieldType}


@dataclass(frozen=True)
class FieldPosition:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class FieldDefinition:
    label: str
    field_type: FieldType
    required: bool = False
    position: FieldPosition = field(default_factory=FieldPosition)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FieldDefinition":
        pos = raw.get("position") or {}
        return cls(
            label=raw.get("label") or "",
            field_type=FieldType(raw.get("field_type")),
            required=bool(raw.get("required", False)),
            position=FieldPosition(x=float(pos.get("x") or 0), y=float(pos.get("y") or 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "field_type": self.field_type.value,
            "required": self.required,
            "position": {"x": self.position.x, "y": self.position.y},
        }


@dataclass(frozen=True)
class BlueprintSchema:
    name: str
    fields: Tuple[FieldDefinition, ...] = ()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "BlueprintSchema":
        return cls(
            name=(raw.get("name") or "").strip(),
            fields=tuple(FieldDefinition.from_dict(f) for f in raw.get("fields") or []),
        )

    @classmethod
    def from_record(cls, blueprint) -> "BlueprintSchema":
        """Snapshot a stored Blueprint row."""
        return cls.from_dict({"name": blueprint.name, "fields": blueprint.fields_json or []})

    def fields_json(self) -> List[Dict[str, Any]]:
        return [f.to_dict() for f in self.fields]


def validate_blueprint_definition(
    payload: Dict[str, Any],
    allow_empty_fields: bool = True,
) -> Tuple[bool, List[str]]:
    """Check a submitted blueprint before it is stored. Returns (valid, error messages in check order)."""
    if not isinstance(payload, dict):
        return False, ["Blueprint must be an object"]

    errors: List[str] = []
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Blueprint name is required")

    fields = payload.get("fields")
    if not isinstance(fields, list):
        errors.append("Fields array is required")
        return False, errors
    if not fields and not allow_empty_fields:
        errors.append("Fields array cannot be empty")

    for i, f in enumerate(fields):
        if not isinstance(f, dict):
            errors.append(f"fields[{i}]: must be an object")
            continue
        label = f.get("label")
        if not isinstance(label, str) or not label.strip():
            errors.append("Each field must have a label")
        field_type = f.get("field_type")
        if not isinstance(field_type, str) or field_type not in FIELD_TYPES:
            errors.append("Each field must have a valid field_type (text, date, signature, checkbox)")
        required = f.get("required")
        if required is not None and not isinstance(required, bool):
            errors.append(f"fields[{i}].required: must be a boolean")
        position: Optional[Any] = f.get("position")
        if position is not None:
            if not isinstance(position, dict):
                errors.append(f"fields[{i}].position: must be an object")
            else:
                for axis in ("x", "y"):
                    value = position.get(axis, 0)
                    if not _is_coordinate(value):
                        errors.append(f"fields[{i}].position.{axis}: must be a number")

    return (len(errors) == 0), errors


def _is_coordinate(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False
