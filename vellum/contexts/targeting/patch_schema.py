"""
Patch schema and boundary validation.

A patch maps region ids to replacement lines:

    {"blocks": [{"id": "summary", "replaceWith": ["..."]}], "notes": ["..."]}

Every crossing of a trust boundary (LLM output, HTTP request body) goes
through validate_patch() / parse_patch_json(), which return a tagged
PatchValidation instead of raising, so callers decide how to surface failures.
"""

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError


class BlockPatch(BaseModel):
    """Replacement lines for one region."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    replace_with: List[str] = Field(alias="replaceWith", min_length=1)


class ResumePatch(BaseModel):
    """A set of region replacements plus free-text notes."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    blocks: List[BlockPatch] = Field(min_length=1)
    notes: List[str] = Field(default_factory=list)

    @property
    def block_ids(self) -> List[str]:
        return [block.id for block in self.blocks]

    def to_json_dict(self) -> dict:
        """Wire representation (camelCase field names)."""
        return self.model_dump(by_alias=True)


# Strict JSON schema handed to the LLM. Strict structured outputs require every
# property to be listed in "required", so notes is required here even though
# ResumePatch defaults it.
PATCH_JSON_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "blocks": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "replaceWith": {
                        "type": "array",
                        "minItems": 1,
                        "items": {"type": "string"},
                    },
                },
                "required": ["id", "replaceWith"],
            },
        },
        "notes": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["blocks", "notes"],
}


@dataclass(frozen=True)
class FieldError:
    """One schema violation, located by dotted field path (e.g., blocks.0.replaceWith)."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class PatchValidation:
    """
    Tagged result of validating untrusted patch data.

    Attributes:
        ok: Whether the data is a valid patch
        patch: The validated patch (None when invalid)
        errors: Schema violations (empty when valid)
    """

    ok: bool
    patch: Optional[ResumePatch] = None
    errors: List[FieldError] = field(default_factory=list)


def _format_location(loc) -> str:
    return ".".join(str(part) for part in loc) if loc else "$"


def validate_patch(data: Any) -> PatchValidation:
    """
    Validate decoded JSON data against the patch schema.

    Unknown fields are rejected at every level.
    """
    try:
        patch = ResumePatch.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            FieldError(path=_format_location(err["loc"]), message=err["msg"])
            for err in e.errors()
        ]
        return PatchValidation(ok=False, errors=errors)
    return PatchValidation(ok=True, patch=patch)


def parse_patch_json(raw: str) -> PatchValidation:
    """Decode and validate a JSON patch string."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return PatchValidation(ok=False, errors=[FieldError(path="$", message=f"Invalid JSON: {e}")])
    return validate_patch(data)
