"""
Prompt construction for LLM patch generation.
"""

import json
from typing import List

from vellum.contexts.templating.regions import Region

SYSTEM_PROMPT = (
    "You are a resume tailoring assistant. Produce a JSON patch that updates ONLY "
    "the provided LaTeX blocks. Do not output any extra text."
)

CONSTRAINTS = [
    "Return ONLY JSON matching the provided schema.",
    "Only modify existing blocks by id; do not invent new ids.",
    "Keep LaTeX valid (escape % as \\%, etc.).",
    "Prefer measurable impact + keywords that match the JD.",
    'Do not add any "\\begin{document}" or similar; only block content lines.',
]

BULLETS_HINT = "Return LaTeX bullet lines starting with \\item"
PLAIN_HINT = "Return plain LaTeX lines"


def region_hint(region: Region) -> str:
    """Formatting hint for a region, based on its id."""
    return BULLETS_HINT if region.is_bullets else PLAIN_HINT


def build_user_prompt(guidance_text: str, regions: List[Region]) -> str:
    """
    Serialize the generation request for the model.

    Args:
        guidance_text: Job description or free-text guidance
        regions: Regions extracted from the document

    Returns:
        JSON string with jobDescription, blocks (id, currentLines, hint) and constraints
    """
    payload = {
        "jobDescription": guidance_text,
        "blocks": [
            {"id": region.id, "currentLines": region.lines, "hint": region_hint(region)}
            for region in regions
        ],
        "constraints": CONSTRAINTS,
    }
    return json.dumps(payload)
