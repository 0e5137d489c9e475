"""
Rendering Context

Responsibilities:
- Compiles LaTeX to PDF through an ordered compiler chain (pdflatex, tectonic)
- Lays out text manually: font metrics, greedy wrapping, paginating cursor
- Parses lightweight markup into styled segments
- Serializes recorded draw instructions to PDF bytes

Owns: Compiler fallback, page geometry, PDF serialization
Never: Decides document structure (the building context does)
"""

from vellum.contexts.rendering.compiler import (
    DEFAULT_STRATEGIES,
    CompilationResult,
    CompilerAttempt,
    CompilerStrategy,
    compile_latex_source,
    compile_to_pdf,
)
from vellum.contexts.rendering.engine import DocumentRenderer, RuleLine, TextRun, render_pdf
from vellum.contexts.rendering.fonts import FontMetrics, StandardFontMetrics
from vellum.contexts.rendering.layout import (
    LayoutSettings,
    PageGeometry,
    RenderCursor,
    advance,
    load_layout,
    start_cursor,
    wrap_text,
    wrap_words,
)
from vellum.contexts.rendering.markup import MarkupBlock, StyledSegment, parse_markup

__all__ = [
    # Compilation
    "CompilerStrategy",
    "CompilerAttempt",
    "CompilationResult",
    "DEFAULT_STRATEGIES",
    "compile_latex_source",
    "compile_to_pdf",
    # Layout
    "LayoutSettings",
    "PageGeometry",
    "RenderCursor",
    "advance",
    "start_cursor",
    "load_layout",
    "wrap_words",
    "wrap_text",
    "FontMetrics",
    "StandardFontMetrics",
    # Markup
    "StyledSegment",
    "MarkupBlock",
    "parse_markup",
    # Drawing
    "DocumentRenderer",
    "TextRun",
    "RuleLine",
    "render_pdf",
]
