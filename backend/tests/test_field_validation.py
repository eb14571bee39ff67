"""
Unit tests for contract field data validation against a blueprint schema.
"""
import pytest

from contracthub.models import FieldType
from contracthub.templates.blueprint_schema import BlueprintSchema, FieldDefinition
from contracthub.templates.field_validation import MissingRequiredField, validate_field_data


def _schema(*fields) -> BlueprintSchema:
    return BlueprintSchema(name="Test", fields=tuple(fields))


def _field(label, field_type=FieldType.TEXT, required=False) -> FieldDefinition:
    return FieldDefinition(label=label, field_type=field_type, required=required)


def test_unknown_keys_dropped_and_optional_absent_ok():
    schema = _schema(_field("Name", required=True), _field("Date", FieldType.DATE))
    sanitized, error = validate_field_data(schema, {"Name": "Bob", "Extra": "x"})
    assert error is None
    assert sanitized == {"Name": "Bob"}


def test_empty_schema_drops_everything():
    sanitized, error = validate_field_data(_schema(), {"a": 1})
    assert error is None
    assert sanitized == {}


def test_none_payload_treated_as_empty():
    sanitized, error = validate_field_data(_schema(_field("Notes")), None)
    assert error is None
    assert sanitized == {}


def test_optional_values_copied_even_when_blank():
    schema = _schema(_field("Notes"), _field("Agree", FieldType.CHECKBOX))
    sanitized, error = validate_field_data(schema, {"Notes": "", "Agree": False})
    assert error is None
    assert sanitized == {"Notes": "", "Agree": False}


@pytest.mark.parametrize("payload", [{}, {"Title": None}, {"Title": ""}, {"Title": "   "}])
def test_required_text_missing(payload):
    schema = _schema(_field("Title", required=True))
    sanitized, error = validate_field_data(schema, payload)
    assert sanitized == {}
    assert error == MissingRequiredField("Title")
    assert error.message == "Missing required field: Title"


@pytest.mark.parametrize("field_type", [FieldType.DATE, FieldType.SIGNATURE])
def test_required_non_checkbox_uses_trimmed_string_form(field_type):
    schema = _schema(_field("F", field_type, required=True))
    assert validate_field_data(schema, {"F": " \t"})[1] == MissingRequiredField("F")
    assert validate_field_data(schema, {"F": "data:image/png;base64,AAAA"})[1] is None
    assert validate_field_data(schema, {"F": 0})[1] is None


@pytest.mark.parametrize("value", [[], {}])
def test_required_empty_collection_is_missing(value):
    schema = _schema(_field("Title", required=True))
    sanitized, error = validate_field_data(schema, {"Title": value})
    assert sanitized == {}
    assert error == MissingRequiredField("Title")
    assert validate_field_data(schema, {"Title": ["x"]})[1] is None


@pytest.mark.parametrize("value", [False, "true", 1, "yes", None])
def test_required_checkbox_must_be_exactly_true(value):
    schema = _schema(_field("Agree", FieldType.CHECKBOX, required=True))
    _, error = validate_field_data(schema, {"Agree": value})
    assert error == MissingRequiredField("Agree")


def test_required_checkbox_true_passes():
    schema = _schema(_field("Agree", FieldType.CHECKBOX, required=True))
    sanitized, error = validate_field_data(schema, {"Agree": True})
    assert error is None
    assert sanitized == {"Agree": True}


def test_first_missing_field_wins():
    schema = _schema(
        _field("A", required=True),
        _field("B", required=True),
        _field("C", required=True),
    )
    _, error = validate_field_data(schema, {"A": "ok"})
    assert error.label == "B"


def test_fields_without_label_are_skipped():
    schema = _schema(_field("", required=True), _field("Name", required=True))
    sanitized, error = validate_field_data(schema, {"Name": "Bob", "": "x"})
    assert error is None
    assert sanitized == {"Name": "Bob"}


def test_no_type_coercion():
    schema = _schema(_field("Amount"), _field("When", FieldType.DATE))
    sanitized, _ = validate_field_data(schema, {"Amount": 12, "When": "not-a-date"})
    assert sanitized == {"Amount": 12, "When": "not-a-date"}


def test_input_not_mutated():
    schema = _schema(_field("Name"))
    incoming = {"Name": "Bob", "Extra": "x"}
    validate_field_data(schema, incoming)
    assert incoming == {"Name": "Bob", "Extra": "x"}
