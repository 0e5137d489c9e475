"""
Template Region Model

Parses a LaTeX document into its named, marker-delimited replaceable regions.

Regions are not nestable: the first %</BLOCK> after a start marker closes it.
Extraction is a pure function of the document text.
"""

from dataclasses import dataclass, field
from typing import List

from vellum.contexts.templating.block_patterns import (
    LINE_SPLIT_PATTERN,
    MARKERS,
    REGION_PATTERN,
    START_PATTERN,
    start_marker,
)
from vellum.contexts.templating.logger import _log_warning


@dataclass(frozen=True)
class Region:
    """
    One replaceable region of a template.

    Attributes:
        id: Region identifier from the start marker (unique per extraction)
        raw_content: Interior text, stripped of surrounding whitespace
        lines: Interior split into lines, each right-stripped
    """

    id: str
    raw_content: str
    lines: List[str] = field(default_factory=list)

    @property
    def is_bullets(self) -> bool:
        """Region expects list-item lines (\\item ...)."""
        return "bullets" in self.id


def split_region_lines(content: str) -> List[str]:
    """Split stripped region content into right-stripped lines ([] when empty)."""
    if not content:
        return []
    return [line.rstrip() for line in LINE_SPLIT_PATTERN.split(content)]


def extract_regions(document: str) -> List[Region]:
    """
    Extract all marker-delimited regions from a document.

    A repeated id keeps its first occurrence, which is also the one patch
    application substitutes into; later duplicates are skipped.

    Args:
        document: Full template source

    Returns:
        Regions in document order (possibly empty)

    Example:
        >>> extract_regions('%<BLOCK id="a">\\n x \\n%</BLOCK>')
        [Region(id='a', raw_content='x', lines=['x'])]
    """
    regions = []
    seen = set()

    for match in REGION_PATTERN.finditer(document):
        region_id = match.group(1)
        if region_id in seen:
            _log_warning(f"Duplicate region id '{region_id}' ignored (first occurrence wins)")
            continue
        seen.add(region_id)

        content = (match.group(2) or "").strip()
        nested = START_PATTERN.findall(content)
        if nested:
            _log_warning(
                f"Region '{region_id}' contains start marker(s) for {', '.join(nested)}; "
                "patching it will remove them"
            )
        regions.append(Region(id=region_id, raw_content=content, lines=split_region_lines(content)))

    return regions


def list_region_ids(document: str) -> List[str]:
    """Ids of every start marker in document order, including unterminated ones."""
    return [match.group(1) for match in START_PATTERN.finditer(document)]


def wrap_region(region_id: str, lines: List[str]) -> str:
    """
    Build a marker-delimited region block.

    Markers sit on their own lines, matching what apply_patch() produces.
    """
    return "\n".join([start_marker(region_id), *lines, MARKERS.END])
