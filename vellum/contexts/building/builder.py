"""
Resume PDF Builder

Lays out ResumeData as a single-column PDF through the rendering engine.
Section order is fixed: header, Education, Experience, Academic Projects,
Other, Technical Knowledge. Empty sections are skipped.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from vellum.contexts.building.logger import log_build_result, log_build_start, log_section
from vellum.contexts.building.resume_data import Education, Experience, Project, ResumeData
from vellum.contexts.rendering.engine import (
    COMPANY,
    DARK_GRAY,
    LINK_BLUE,
    META_GRAY,
    DocumentRenderer,
    Instruction,
)
from vellum.contexts.rendering.fonts import FontMetrics
from vellum.contexts.rendering.layout import LayoutSettings
from vellum.utils.exceptions import RenderError

DOWNLOAD_FILENAME = "resume.pdf"
DATE_SEPARATOR = " – "
CONTACT_SEPARATOR = " | "
META_SEPARATOR = " • "


@dataclass
class BuildResult:
    """
    Result of building a resume PDF.

    Attributes:
        pdf: PDF bytes
        page_count: Number of pages
        instructions: Draw instructions the PDF was serialized from
        filename: Download filename
    """

    pdf: bytes
    page_count: int
    instructions: List[Instruction] = field(default_factory=list)
    filename: str = DOWNLOAD_FILENAME


def date_range(start: str, end: str) -> str:
    """
    Join start and end dates; the separator appears only when both exist.

    Example:
        >>> date_range("Jan 2025", "July 2025")
        'Jan 2025 – July 2025'
        >>> date_range("", "2027")
        '2027'
    """
    start, end = (start or "").strip(), (end or "").strip()
    return f"{start}{DATE_SEPARATOR if start and end else ''}{end}".strip()


class ResumeBuilder:
    """Draws each resume section onto a DocumentRenderer."""

    def __init__(self, renderer: DocumentRenderer):
        self.renderer = renderer
        self.settings = renderer.settings
        self.geometry = renderer.geometry

    def header(self, data: ResumeData) -> None:
        sizes, spacing = self.settings.sizes, self.settings.spacing
        self.renderer.centered_text(data.header.name, sizes.name)
        self.renderer.move_down(spacing.after_name)
        self.renderer.centered_text(CONTACT_SEPARATOR.join(data.header.contact_parts), sizes.contact, DARK_GRAY)
        self.renderer.move_down(spacing.after_contact)
        self.renderer.rule(spacing.header_rule, DARK_GRAY)
        self.renderer.move_down(spacing.after_header_rule)

    def _end_entry(self) -> None:
        self.renderer.move_down(self.settings.spacing.entry_gap)
        self.renderer.ensure_space()

    def education(self, entry: Education) -> None:
        sizes, spacing = self.settings.sizes, self.settings.spacing
        left = self.geometry.left + spacing.meta_indent

        self.renderer.two_column_row(entry.school, date_range(entry.start, entry.end))
        self.renderer.wrapped_plain(entry.degree, left, self.geometry.content_width, sizes.body, DARK_GRAY)

        meta = [entry.location] if entry.location else []
        if entry.gpa:
            meta.append(f"GPA: {entry.gpa}")
        if meta:
            self.renderer.text_line(META_SEPARATOR.join(meta), left, sizes.meta, META_GRAY)
        self._end_entry()

    def experience(self, entry: Experience) -> None:
        sizes, spacing = self.settings.sizes, self.settings.spacing
        left = self.geometry.left + spacing.meta_indent

        self.renderer.two_column_row(entry.title, date_range(entry.start, entry.end))

        company = entry.company + (f" — {entry.location}" if entry.location else "")
        if company.strip():
            self.renderer.text_line(company.strip(), left, sizes.body, COMPANY)

        if entry.project_links:
            self.renderer.wrapped_plain(
                CONTACT_SEPARATOR.join(entry.project_links),
                left,
                self.geometry.content_width - 20,
                sizes.meta,
                LINK_BLUE,
            )

        if entry.notes:
            indent = spacing.notes_indent
            self.renderer.markup(entry.notes, indent=indent, max_width=self.geometry.content_width - indent)
        self._end_entry()

    def project(self, entry: Project) -> None:
        self.renderer.text_line(entry.title, self.geometry.left, self.settings.sizes.entry_title)
        if entry.description:
            self.renderer.markup(entry.description)
        self._end_entry()

    def other(self, text: str) -> None:
        self.renderer.markup(text)

    def technical(self, text: str) -> None:
        indent = self.settings.spacing.paragraph_indent
        self.renderer.wrapped_plain(text, self.geometry.left + indent, self.geometry.content_width - 2 * indent)

    def build(self, data: ResumeData) -> None:
        """Draw every non-empty section in order."""
        self.header(data)

        for title, entries, draw in (
            ("Education", data.education, self.education),
            ("Experience", data.experience, self.experience),
            ("Academic Projects", data.projects, self.project),
        ):
            if not entries:
                continue
            log_section(title, len(entries))
            self.renderer.section_title(title)
            for entry in entries:
                self.renderer.ensure_space()
                draw(entry)

        if data.other.strip():
            self.renderer.section_title("Other")
            self.other(data.other)

        if data.technical.strip():
            self.renderer.section_title("Technical Knowledge")
            self.technical(data.technical)


def build_resume_pdf(
    data: ResumeData,
    metrics: Optional[FontMetrics] = None,
    settings: Optional[LayoutSettings] = None,
) -> BuildResult:
    """
    Build a resume PDF from structured data.

    Args:
        data: Resume content
        metrics: Font metrics (default: standard PDF font metrics)
        settings: Layout settings (default: loaded from layout.yaml)

    Returns:
        BuildResult with PDF bytes and page count

    Raises:
        RenderError: If layout or serialization fails; no partial PDF is returned
    """
    start_time = time.time()
    log_build_start(data)

    try:
        renderer = DocumentRenderer(settings=settings, metrics=metrics)
        ResumeBuilder(renderer).build(data)
        pdf = renderer.finish()
    except RenderError:
        raise
    except Exception as e:
        raise RenderError(f"Failed to build PDF: {e}", original_error=e) from e

    result = BuildResult(pdf=pdf, page_count=renderer.page_count, instructions=list(renderer.instructions))
    log_build_result(result, time.time() - start_time)
    return result
