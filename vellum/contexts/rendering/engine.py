"""
PDF Render Engine

Manual-layout renderer: callers place text and rules through a
DocumentRenderer, which tracks an immutable RenderCursor and records
draw instructions per page. finish() replays the instructions on a
reportlab canvas and returns the PDF bytes. A failure anywhere yields no
bytes.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Tuple, Union

from reportlab.pdfgen import canvas

from vellum.contexts.rendering.fonts import FontMetrics, StandardFontMetrics
from vellum.contexts.rendering.layout import (
    LayoutSettings,
    PageGeometry,
    RenderCursor,
    advance,
    load_layout,
    split_words,
    start_cursor,
    wrap_text,
    wrap_words,
)
from vellum.contexts.rendering.markup import StyledSegment, parse_markup
from vellum.utils.exceptions import RenderError

Color = Tuple[float, float, float]

BLACK: Color = (0, 0, 0)
DARK_GRAY: Color = (0.2, 0.2, 0.2)
META_GRAY: Color = (0.3, 0.3, 0.3)
BODY: Color = (0.1, 0.1, 0.1)
COMPANY: Color = (0.15, 0.15, 0.15)
RULE_GRAY: Color = (0.85, 0.85, 0.85)
LINK_BLUE: Color = (0.1, 0.3, 0.6)

BULLET = "•"


@dataclass(frozen=True)
class TextRun:
    page: int
    x: float
    y: float
    text: str
    font: str
    size: float
    color: Color = BLACK


@dataclass(frozen=True)
class RuleLine:
    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float
    color: Color = BLACK


Instruction = Union[TextRun, RuleLine]


def render_pdf(instructions: List[Instruction], page_count: int, geometry: PageGeometry) -> bytes:
    """
    Serialize draw instructions to a PDF.

    Args:
        instructions: TextRun/RuleLine list (any order; grouped by page here)
        page_count: Number of pages to emit (pages without instructions stay blank)
        geometry: Page size

    Returns:
        PDF bytes

    Raises:
        RenderError: If reportlab fails; no partial output is returned
    """
    buffer = BytesIO()
    try:
        pdf = canvas.Canvas(buffer, pagesize=(geometry.width, geometry.height))
        for page in range(page_count):
            for item in instructions:
                if item.page != page:
                    continue
                if isinstance(item, TextRun):
                    pdf.setFillColorRGB(*item.color)
                    pdf.setFont(item.font, item.size)
                    pdf.drawString(item.x, item.y, item.text)
                else:
                    pdf.setStrokeColorRGB(*item.color)
                    pdf.setLineWidth(item.thickness)
                    pdf.line(item.x1, item.y1, item.x2, item.y2)
            pdf.showPage()
        pdf.save()
    except Exception as e:
        raise RenderError(f"Failed to build PDF: {e}", original_error=e) from e
    return buffer.getvalue()


class DocumentRenderer:
    """
    Draws a document top to bottom.

    Page breaks happen only where callers ask for them through
    ensure_space() (once per section and entry), never mid-paragraph.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None, metrics: Optional[FontMetrics] = None):
        self.settings = settings or load_layout()
        self.metrics = metrics or StandardFontMetrics()
        self.geometry = self.settings.page
        self.cursor: RenderCursor = start_cursor(self.geometry)
        self.instructions: List[Instruction] = []

    @property
    def page_count(self) -> int:
        return self.cursor.page + 1

    @property
    def line_height(self) -> float:
        return self.geometry.line_height

    # Cursor movement

    def ensure_space(self, needed: Optional[float] = None) -> None:
        """Start a new page unless `needed` points fit above the bottom limit."""
        self.cursor = advance(self.cursor, self.line_height if needed is None else needed)

    def move_down(self, dy: float) -> None:
        self.cursor = self.cursor.down(dy)

    # Primitives

    def draw_text(
        self,
        text: str,
        x: float,
        size: float,
        color: Color = BLACK,
        bold: bool = False,
        italic: bool = False,
        monospace: bool = False,
    ) -> float:
        """Draw text at the cursor baseline; returns its width."""
        if not text:
            return 0.0
        font = self.metrics.font_name(bold, italic, monospace)
        self.instructions.append(TextRun(self.cursor.page, x, self.cursor.y, text, font, size, color))
        return self.metrics.string_width(text, font, size)

    def rule(self, thickness: float, color: Color = BLACK, x1: float = None, x2: float = None, dy: float = 0.0) -> None:
        """Horizontal line at the cursor (offset down by dy), margin to margin by default."""
        x1 = self.geometry.left if x1 is None else x1
        x2 = self.geometry.right if x2 is None else x2
        y = self.cursor.y - dy
        self.instructions.append(RuleLine(self.cursor.page, x1, y, x2, y, thickness, color))

    def text_line(self, text: str, x: float, size: float, color: Color = BLACK) -> None:
        """Draw one line of text and move down a line."""
        self.draw_text(text, x, size, color)
        self.move_down(self.line_height)

    def centered_text(self, text: str, size: float, color: Color = BLACK) -> None:
        """Draw text centered on the full page width (cursor does not move)."""
        width = self.metrics.width(text, size)
        self.draw_text(text, (self.geometry.width - width) / 2, size, color)

    # Composite blocks

    def section_title(self, title: str) -> None:
        """Upper-cased title with a thin full-width rule below it."""
        spacing = self.settings.spacing
        self.ensure_space(self.line_height + spacing.after_section_rule)
        self.draw_text(title.upper(), self.geometry.left, self.settings.sizes.section_title)
        self.move_down(self.line_height)
        self.rule(spacing.section_rule, RULE_GRAY)
        self.move_down(spacing.after_section_rule)

    def two_column_row(
        self,
        left_text: str,
        right_text: str = "",
        left_size: Optional[float] = None,
        right_size: Optional[float] = None,
        right_color: Color = DARK_GRAY,
    ) -> None:
        """Left text at the margin, right text flush with the right margin; moves down a line."""
        sizes = self.settings.sizes
        left_size = left_size or sizes.entry_title
        right_size = right_size or sizes.date
        self.draw_text(left_text, self.geometry.left, left_size)
        if right_text:
            width = self.metrics.width(right_text, right_size)
            self.draw_text(right_text, self.geometry.right - width, right_size, right_color)
        self.move_down(self.line_height)

    def segments(
        self,
        segments: List[StyledSegment],
        x: float,
        max_width: float,
        size: Optional[float] = None,
        color: Color = BODY,
    ) -> int:
        """
        Wrap styled segments and draw them line by line.

        Links are drawn in blue and underlined. Returns the number of lines.
        """
        size = size or self.settings.sizes.body
        spacing = self.settings.spacing
        space = self.metrics.space_width(size)
        lines = wrap_words(split_words(segments), max_width, size, self.metrics)

        for line in lines:
            cursor_x = x
            for i, word in enumerate(line):
                word_color = LINK_BLUE if word.link else color
                width = self.draw_text(word.text, cursor_x, size, word_color, word.bold, word.italic, word.monospace)
                if word.link:
                    self.rule(
                        spacing.link_underline,
                        word_color,
                        x1=cursor_x,
                        x2=cursor_x + width,
                        dy=spacing.underline_offset,
                    )
                cursor_x += width
                if i < len(line) - 1:
                    cursor_x += space
            self.move_down(self.line_height)
        return len(lines)

    def markup(self, source: str, indent: Optional[float] = None, max_width: Optional[float] = None) -> None:
        """
        Render markdown: paragraphs at `indent`, lists as bullet items.

        Args:
            source: Markdown text
            indent: Paragraph offset from the left margin (default: paragraph_indent)
            max_width: Paragraph width (default: content width minus twice the indent)
        """
        spacing = self.settings.spacing
        size = self.settings.sizes.body
        left = self.geometry.left
        content_width = self.geometry.content_width
        indent = spacing.paragraph_indent if indent is None else indent
        max_width = content_width - 2 * indent if max_width is None else max_width

        for block in parse_markup(source):
            if block.kind == "paragraph":
                self.segments(block.segments, left + indent, max_width, size)
            else:
                for item in block.items:
                    self.draw_text(BULLET, left + spacing.bullet_indent, size)
                    self.segments(item, left + spacing.list_indent, content_width - 2 * spacing.list_indent, size)

    def wrapped_plain(
        self, text: str, x: float, max_width: float, size: Optional[float] = None, color: Color = BODY
    ) -> int:
        """Wrap plain text in the normal font; returns the number of lines."""
        size = size or self.settings.sizes.body
        lines = wrap_text(text, max_width, size, self.metrics)
        for line in lines:
            self.text_line(line, x, size, color)
        return len(lines)

    def finish(self) -> bytes:
        """Serialize everything drawn so far to PDF bytes."""
        return render_pdf(self.instructions, self.page_count, self.geometry)
