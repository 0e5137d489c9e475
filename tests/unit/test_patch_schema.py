"""Unit tests for patch schema validation."""

import pytest

from vellum.contexts.targeting.patch_schema import (
    PATCH_JSON_SCHEMA,
    ResumePatch,
    parse_patch_json,
    validate_patch,
)


@pytest.mark.unit
def test_validate_accepts_wire_shape():
    """Test camelCase wire data validates into a ResumePatch."""
    validation = validate_patch({"blocks": [{"id": "a", "replaceWith": ["x", "y"]}], "notes": ["n"]})

    assert validation.ok
    assert validation.errors == []
    assert validation.patch.blocks[0].replace_with == ["x", "y"]
    assert validation.patch.block_ids == ["a"]
    assert validation.patch.notes == ["n"]


@pytest.mark.unit
def test_notes_default_to_empty():
    validation = validate_patch({"blocks": [{"id": "a", "replaceWith": ["x"]}]})

    assert validation.ok
    assert validation.patch.notes == []


@pytest.mark.unit
def test_to_json_dict_uses_aliases():
    """Test serialization round-trips to the wire shape."""
    data = {"blocks": [{"id": "a", "replaceWith": ["x"]}], "notes": []}

    assert validate_patch(data).patch.to_json_dict() == data


@pytest.mark.unit
@pytest.mark.parametrize(
    "data, path",
    [
        ({"blocks": []}, "blocks"),
        ({"blocks": [{"id": "a", "replaceWith": []}]}, "blocks.0.replaceWith"),
        ({"blocks": [{"id": "", "replaceWith": ["x"]}]}, "blocks.0.id"),
        ({"blocks": [{"id": "a"}]}, "blocks.0.replaceWith"),
        ({"blocks": [{"id": "a", "replaceWith": ["x"], "extra": 1}]}, "blocks.0.extra"),
        ({"blocks": [{"id": "a", "replaceWith": ["x"]}], "surprise": True}, "surprise"),
        ({"notes": []}, "blocks"),
    ],
)
def test_validate_reports_field_paths(data, path):
    """Test each violation is reported with its dotted field path."""
    validation = validate_patch(data)

    assert not validation.ok
    assert validation.patch is None
    assert path in [error.path for error in validation.errors]


@pytest.mark.unit
def test_validate_non_object():
    """Test a non-object payload fails at the root."""
    validation = validate_patch(["not", "an", "object"])

    assert not validation.ok
    assert validation.errors


@pytest.mark.unit
def test_parse_invalid_json():
    """Test undecodable input is a root-level error, not an exception."""
    validation = parse_patch_json("{not json")

    assert not validation.ok
    assert validation.errors[0].path == "$"
    assert str(validation.errors[0]).startswith("$: Invalid JSON")


@pytest.mark.unit
def test_parse_valid_json():
    validation = parse_patch_json('{"blocks": [{"id": "a", "replaceWith": ["x"]}]}')

    assert validation.ok
    assert isinstance(validation.patch, ResumePatch)


@pytest.mark.unit
def test_strict_schema_rejects_additional_properties():
    """Test the schema handed to the model is strict at both levels."""
    item_schema = PATCH_JSON_SCHEMA["properties"]["blocks"]["items"]

    assert PATCH_JSON_SCHEMA["additionalProperties"] is False
    assert item_schema["additionalProperties"] is False
    assert item_schema["required"] == ["id", "replaceWith"]
    assert item_schema["properties"]["replaceWith"]["minItems"] == 1
