"""
Resume editing session.

Holds the working LaTeX document together with the most recent suggested
patch, user-facing notes, and a bounded undo history. Each applied patch
produces a new document snapshot; nothing is edited in place.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from vellum.contexts.targeting.patch_generator import generate_patch
from vellum.contexts.targeting.patch_schema import ResumePatch
from vellum.contexts.templating.patching import PatchResult, apply_patch
from vellum.contexts.templating.regions import list_region_ids
from vellum.contexts.templating.samples import SAMPLE_LATEX

HISTORY_LIMIT = 25


@dataclass
class EditSession:
    """
    Working state of the LaTeX resume editor.

    Attributes:
        document: Current LaTeX source
        suggested: Patch waiting to be applied (None when nothing is pending)
        notes: Notes from the last suggestion plus any apply warnings
        history: Previous documents, most recent first (capped at HISTORY_LIMIT)
        generator: Callable producing a patch from (guidance, document)
    """

    document: str = SAMPLE_LATEX
    suggested: Optional[ResumePatch] = None
    notes: List[str] = field(default_factory=list)
    history: List[str] = field(default_factory=list)
    generator: Callable[[str, str], ResumePatch] = generate_patch

    @property
    def block_ids(self) -> List[str]:
        return list_region_ids(self.document)

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    def suggest(self, guidance_text: str) -> ResumePatch:
        """
        Generate a patch for the current document and hold it as pending.

        Errors from generation propagate; the pending patch and notes are
        cleared first so a failed request never leaves a stale suggestion.
        """
        self.suggested = None
        self.notes = []

        patch = self.generator(guidance_text, self.document)
        self.suggested = patch
        self.notes = list(patch.notes)
        return patch

    def apply_suggested(self) -> Optional[PatchResult]:
        """Apply the pending patch, recording the previous document for undo."""
        if self.suggested is None:
            return None

        self.history = [self.document, *self.history][:HISTORY_LIMIT]
        result = apply_patch(self.document, self.suggested)
        self.document = result.next
        self.suggested = None

        if result.missing_ids:
            self.notes.append(f"Warning: could not find blocks: {', '.join(result.missing_ids)}")
        return result

    def undo(self) -> bool:
        """Restore the most recent previous document. Returns False if none."""
        if not self.history:
            return False
        self.document, *self.history = self.history
        return True
