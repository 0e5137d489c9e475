"""
Patch Generation

Produces a validated ResumePatch for the regions of a LaTeX document from
free-text guidance (usually a job description).

Two interchangeable strategies:
    LLMPatchStrategy: asks an external model for schema-constrained JSON
    HeuristicPatchStrategy: deterministic keyword-frequency rewrite, no network

Strategies return raw (decoded JSON) data; generate_patch() validates it
against the patch schema before anything is returned to the caller.
"""

import json
import os
import time
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from dotenv import load_dotenv

from vellum.contexts.targeting.keywords import pick_top_keywords
from vellum.contexts.targeting.logger import (
    _log_error,
    log_generation_result,
    log_generation_start,
)
from vellum.contexts.targeting.patch_schema import (
    PATCH_JSON_SCHEMA,
    ResumePatch,
    validate_patch,
)
from vellum.contexts.targeting.prompts import SYSTEM_PROMPT, build_user_prompt
from vellum.contexts.templating.regions import Region, extract_regions
from vellum.utils.exceptions import NoRegionsError, UpstreamError, ValidationError
from vellum.utils.llm import LLMProvider, get_provider, llm_is_configured

load_dotenv()

MAX_GUIDANCE_CHARS = int(os.getenv("MAX_GUIDANCE_CHARS", "12000"))
MAX_DOCUMENT_CHARS = int(os.getenv("MAX_DOCUMENT_CHARS", "50000"))

# Heuristic shaping
MAX_BULLETS = 5
DEFAULT_BULLETS = 3
SUMMARY_KEYWORDS = 3
SKILLS_KEYWORDS = 6
BULLET_KEYWORDS = 5
FALLBACK_KEYWORD = "impact"

SKILL_LINES = [
    r"\textbf{Languages:} Python, TypeScript, SQL\\",
    r"\textbf{Frameworks:} Next.js, React, FastAPI\\",
]


def validate_request(guidance_text: str, document: str) -> None:
    """
    Check generation inputs before any region work.

    Raises:
        ValidationError: Blank input (400) or input over the size limits (413)
    """
    if not guidance_text or not guidance_text.strip():
        raise ValidationError("Guidance text (job description) is required")
    if not document or not document.strip():
        raise ValidationError("LaTeX document is required")
    if len(guidance_text) > MAX_GUIDANCE_CHARS:
        raise ValidationError(
            f"Guidance text too long ({len(guidance_text)} > {MAX_GUIDANCE_CHARS} characters)",
            status_code=413,
        )
    if len(document) > MAX_DOCUMENT_CHARS:
        raise ValidationError(
            f"LaTeX document too long ({len(document)} > {MAX_DOCUMENT_CHARS} characters)",
            status_code=413,
        )


class PatchStrategy(ABC):
    """Abstract base for patch generation strategies."""

    name: str

    @abstractmethod
    def generate(self, guidance_text: str, regions: List[Region]) -> Any:
        """Return raw patch data (decoded JSON) for the given regions."""
        pass


class HeuristicPatchStrategy(PatchStrategy):
    """
    Deterministic local fallback.

    Rewrites every region around the most frequent keywords of the guidance
    text. Always discloses in its notes that no AI was involved.
    """

    name = "heuristic"

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason or "OPENAI_API_KEY not set"

    def _summary_lines(self, keywords: List[str]) -> List[str]:
        focus = ", ".join(keywords[:SUMMARY_KEYWORDS]) or FALLBACK_KEYWORD
        return [
            "Tailored candidate with a software engineering background, focused on "
            f"{focus} and delivering measurable impact."
        ]

    def _skills_lines(self, keywords: List[str]) -> List[str]:
        extras = [keyword.replace("_", " ") for keyword in keywords[:SKILLS_KEYWORDS]]
        return [*SKILL_LINES, rf"\textbf{{Focus:}} {', '.join(extras)}"]

    def _bullet_lines(self, region: Region, keywords: List[str]) -> List[str]:
        default = DEFAULT_BULLETS if region.is_bullets else 1
        target = max(1, min(MAX_BULLETS, len(region.lines) or default))
        focus = keywords[:BULLET_KEYWORDS] or [FALLBACK_KEYWORD]
        return [
            rf"\item Delivered {focus[i % len(focus)]} improvements by aligning projects "
            "to the job requirements, improving quality and speed."
            for i in range(target)
        ]

    def generate(self, guidance_text: str, regions: List[Region]) -> dict:
        keywords = pick_top_keywords(guidance_text)

        blocks = []
        for region in regions:
            if "summary" in region.id:
                lines = self._summary_lines(keywords)
            elif "skills" in region.id:
                lines = self._skills_lines(keywords)
            else:
                lines = self._bullet_lines(region, keywords)
            blocks.append({"id": region.id, "replaceWith": lines})

        return {
            "blocks": blocks,
            "notes": [
                f"Heuristic patch generated locally ({self.reason}), not an AI result.",
                f"Keywords detected from job description: {', '.join(keywords) or '(none)'}",
                "Set OPENAI_API_KEY in .env to enable AI suggestions.",
            ],
        }


class LLMPatchStrategy(PatchStrategy):
    """
    Remote generation through an LLM provider with a strict JSON schema.

    Makes exactly one request. Empty or non-JSON output is an UpstreamError;
    schema violations are caught by generate_patch().
    """

    def __init__(self, provider: LLMProvider):
        self.provider = provider
        self.name = f"llm ({provider.name})"

    def generate(self, guidance_text: str, regions: List[Region]) -> Any:
        response = self.provider.generate_json(
            SYSTEM_PROMPT,
            build_user_prompt(guidance_text, regions),
            schema_name="ResumePatch",
            schema=PATCH_JSON_SCHEMA,
        )

        raw = (response.content or "").strip()
        if not raw:
            raise UpstreamError("Empty model response.")

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise UpstreamError("Model returned non-JSON output.", reasons=[str(e)]) from e


def select_strategy(strategy: Optional[PatchStrategy] = None) -> PatchStrategy:
    """
    Pick the strategy for a request.

    An explicit strategy wins; otherwise the LLM strategy is used when a
    credential is configured, and the heuristic strategy when it is not.
    """
    if strategy is not None:
        return strategy
    if llm_is_configured():
        return LLMPatchStrategy(get_provider())
    return HeuristicPatchStrategy()


def generate_patch(
    guidance_text: str, document: str, strategy: Optional[PatchStrategy] = None
) -> ResumePatch:
    """
    Generate a validated patch for every region of a document.

    Args:
        guidance_text: Job description or other free-text guidance
        document: LaTeX source containing %<BLOCK> regions
        strategy: Explicit strategy (default: chosen by select_strategy())

    Returns:
        ResumePatch covering the document's regions

    Raises:
        ValidationError: Blank or oversized input
        NoRegionsError: The document has no regions (no strategy is invoked)
        UpstreamError: The strategy failed or returned an invalid patch
    """
    validate_request(guidance_text, document)

    regions = extract_regions(document)
    if not regions:
        raise NoRegionsError('No %<BLOCK id="..."> ... %</BLOCK> blocks found in the document.')

    strategy = select_strategy(strategy)
    log_generation_start(strategy.name, [region.id for region in regions], len(guidance_text))

    start_time = time.time()
    raw = strategy.generate(guidance_text, regions)

    validation = validate_patch(raw)
    if not validation.ok:
        reasons = [str(error) for error in validation.errors]
        _log_error(f"{strategy.name} returned an invalid patch ({len(reasons)} violations)")
        raise UpstreamError(f"{strategy.name} returned an invalid patch.", reasons=reasons)

    log_generation_result(strategy.name, validation.patch, time.time() - start_time)
    return validation.patch
