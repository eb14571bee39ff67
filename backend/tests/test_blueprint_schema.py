"""
Unit tests for blueprint definition checks and the schema value types.
"""
import pytest

from contracthub.models import FieldType
from contracthub.templates.blueprint_schema import (
    BlueprintSchema,
    FieldDefinition,
    FieldPosition,
    validate_blueprint_definition,
)


def _valid_blueprint_minimal() -> dict:
    return {
        "name": "Employment Contract",
        "fields": [
            {"label": "Contract Name", "field_type": "text", "position": {"x": 10, "y": 20}},
            {"label": "Start Date", "field_type": "date", "required": True, "position": {"x": 10, "y": 50}},
            {"label": "Employee Signature", "field_type": "signature"},
            {"label": "Accept Terms", "field_type": "checkbox", "required": True},
        ],
    }


def test_validate_blueprint_valid():
    valid, errors = validate_blueprint_definition(_valid_blueprint_minimal())
    assert valid is True
    assert errors == []


def test_validate_blueprint_not_dict():
    valid, errors = validate_blueprint_definition([])
    assert valid is False
    assert errors == ["Blueprint must be an object"]


@pytest.mark.parametrize("name", [None, "", "   ", 5])
def test_validate_blueprint_name_required(name):
    bp = _valid_blueprint_minimal()
    bp["name"] = name
    valid, errors = validate_blueprint_definition(bp)
    assert valid is False
    assert errors[0] == "Blueprint name is required"


def test_validate_blueprint_fields_required():
    valid, errors = validate_blueprint_definition({"name": "X"})
    assert valid is False
    assert errors == ["Fields array is required"]


def test_validate_blueprint_empty_fields():
    assert validate_blueprint_definition({"name": "X", "fields": []}) == (True, [])
    valid, errors = validate_blueprint_definition({"name": "X", "fields": []}, allow_empty_fields=False)
    assert valid is False
    assert errors == ["Fields array cannot be empty"]


def test_validate_blueprint_field_label_required():
    bp = _valid_blueprint_minimal()
    bp["fields"][1]["label"] = " "
    valid, errors = validate_blueprint_definition(bp)
    assert valid is False
    assert "Each field must have a label" in errors


def test_validate_blueprint_field_type_closed():
    bp = _valid_blueprint_minimal()
    bp["fields"][0]["field_type"] = "number"
    valid, errors = validate_blueprint_definition(bp)
    assert valid is False
    assert any("field_type" in e for e in errors)


@pytest.mark.parametrize("field_type", [["text"], {}, 1, None])
def test_validate_blueprint_field_type_must_be_string(field_type):
    payload = _valid_blueprint_minimal()
    payload["fields"][0]["field_type"] = field_type
    valid, errors = validate_blueprint_definition(payload)
    assert valid is False
    assert errors == ["Each field must have a valid field_type (text, date, signature, checkbox)"]


@pytest.mark.parametrize("x", [10 ** 400, float("inf"), float("nan")])
def test_validate_blueprint_position_must_be_finite(x):
    payload = _valid_blueprint_minimal()
    payload["fields"][0]["position"] = {"x": x, "y": 0}
    valid, errors = validate_blueprint_definition(payload)
    assert valid is False
    assert errors == ["fields[0].position.x: must be a number"]


def test_validate_blueprint_bad_required_and_position():
    bp = _valid_blueprint_minimal()
    bp["fields"][0]["required"] = "yes"
    bp["fields"][1]["position"] = {"x": "left", "y": 0}
    valid, errors = validate_blueprint_definition(bp)
    assert valid is False
    assert "fields[0].required: must be a boolean" in errors
    assert "fields[1].position.x: must be a number" in errors


def test_schema_from_dict_defaults_and_order():
    schema = BlueprintSchema.from_dict({
        "name": "  Lease  ",
        "fields": [
            {"label": "B", "field_type": "checkbox"},
            {"label": "A", "field_type": "text", "required": True, "position": {"x": 3, "y": 4}},
        ],
    })
    assert schema.name == "Lease"
    assert [f.label for f in schema.fields] == ["B", "A"]
    assert schema.fields[0] == FieldDefinition("B", FieldType.CHECKBOX, False, FieldPosition(0.0, 0.0))
    assert schema.fields[1].required is True
    assert schema.fields[1].position == FieldPosition(3.0, 4.0)


def test_schema_fields_json_round_trip_shape():
    schema = BlueprintSchema.from_dict(_valid_blueprint_minimal())
    stored = schema.fields_json()
    assert stored[1] == {
        "label": "Start Date",
        "field_type": "date",
        "required": True,
        "position": {"x": 10.0, "y": 50.0},
    }
    assert BlueprintSchema.from_dict({"name": schema.name, "fields": stored}) == schema


def test_schema_is_immutable():
    schema = BlueprintSchema.from_dict(_valid_blueprint_minimal())
    with pytest.raises(Exception):
        schema.name = "Other"
