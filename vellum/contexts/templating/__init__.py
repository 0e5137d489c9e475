"""
Templating Context

Responsibilities:
- Represents LaTeX templates as documents with named replaceable regions
- Extracts regions (%<BLOCK id="..."> ... %</BLOCK>) for patch generation
- Applies validated patches to region interiors, preserving markers
- Tracks the editing session (pending suggestion, notes, undo history)
  in templating.editor, which also depends on the targeting context

Owns: Region marker syntax, region extraction, patch application
Never: Decides what content goes into a region
"""

from vellum.contexts.templating.patching import PatchResult, apply_patch
from vellum.contexts.templating.regions import (
    Region,
    extract_regions,
    list_region_ids,
    wrap_region,
)
from vellum.contexts.templating.samples import SAMPLE_LATEX

__all__ = [
    # Region model
    "Region",
    "extract_regions",
    "list_region_ids",
    "wrap_region",
    # Patch application
    "PatchResult",
    "apply_patch",
    # Sample template
    "SAMPLE_LATEX",
]
