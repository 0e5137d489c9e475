"""
Patch Applicator

Merges a validated patch into a LaTeX document, replacing only the interior
of matched regions. Markers are preserved verbatim and always end up on their
own lines.

Missing regions are reported data, never exceptions: one missing block does
not stop the rest of the patch from applying.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Union

from vellum.contexts.targeting.patch_schema import BlockPatch, ResumePatch
from vellum.contexts.templating.block_patterns import MARKERS, start_marker
from vellum.contexts.templating.logger import _log_debug, log_patch_result


@dataclass
class PatchResult:
    """
    Result of applying a patch.

    Attributes:
        next: Updated document
        applied_ids: Block ids that were substituted, in patch order
        missing_ids: Block ids whose start or end marker was not found
    """

    next: str
    applied_ids: List[str] = field(default_factory=list)
    missing_ids: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied_ids)


def _locate_interior(document: str, region_id: str):
    """
    Find the interior span of a region.

    Returns:
        (interior_start, interior_end) or None when either marker is missing
    """
    start = start_marker(region_id)
    start_idx = document.find(start)
    if start_idx == -1:
        return None

    end_idx = document.find(MARKERS.END, start_idx)
    if end_idx == -1:
        return None

    return start_idx + len(start), end_idx


def apply_patch(
    document: str, patch: Union[ResumePatch, Iterable[BlockPatch]]
) -> PatchResult:
    """
    Apply patch blocks to a document, in order, against the updated text.

    Each matched region's interior becomes "\\n" + lines joined by "\\n" + "\\n".

    Args:
        document: LaTeX source containing %<BLOCK> regions
        patch: ResumePatch or any iterable of BlockPatch

    Returns:
        PatchResult with the new document and applied/missing ids
    """
    blocks = patch.blocks if isinstance(patch, ResumePatch) else list(patch)

    result = PatchResult(next=document)
    for block in blocks:
        span = _locate_interior(result.next, block.id)
        if span is None:
            result.missing_ids.append(block.id)
            continue

        interior_start, interior_end = span
        replacement = "\n" + "\n".join(block.replace_with) + "\n"
        result.next = result.next[:interior_start] + replacement + result.next[interior_end:]
        result.applied_ids.append(block.id)
        _log_debug(f"Replaced block '{block.id}' with {len(block.replace_with)} line(s)")

    log_patch_result(result)
    return result
