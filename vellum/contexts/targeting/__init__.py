"""
Targeting Context

Responsibilities:
- Decides what content goes into each template region for a job description
- Generates patches via an LLM (strict JSON schema) or a deterministic heuristic
- Validates every patch against the patch schema before it leaves the context

Owns: Patch schema, keyword ranking, generation strategies
Never: Edits documents (the templating context applies patches)
"""

from vellum.contexts.targeting.keywords import pick_top_keywords, tokenize
from vellum.contexts.targeting.patch_generator import (
    HeuristicPatchStrategy,
    LLMPatchStrategy,
    PatchStrategy,
    generate_patch,
    select_strategy,
)
from vellum.contexts.targeting.patch_schema import (
    BlockPatch,
    FieldError,
    PatchValidation,
    ResumePatch,
    parse_patch_json,
    validate_patch,
)

__all__ = [
    # Schema and boundary validation
    "BlockPatch",
    "ResumePatch",
    "FieldError",
    "PatchValidation",
    "validate_patch",
    "parse_patch_json",
    # Generation
    "PatchStrategy",
    "HeuristicPatchStrategy",
    "LLMPatchStrategy",
    "select_strategy",
    "generate_patch",
    # Keywords
    "tokenize",
    "pick_top_keywords",
]
