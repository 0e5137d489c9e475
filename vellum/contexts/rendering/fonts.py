"""
Font metrics for manual layout.

Text width measurement for the standard PDF fonts (Helvetica family and
Courier), so layout needs no font files. Style resolution precedence:
bold+italic, bold, italic, monospace, normal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from reportlab.pdfbase import pdfmetrics


@dataclass(frozen=True)
class FontFamily:
    """PDF font names for each text style."""

    normal: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    italic: str = "Helvetica-Oblique"
    bold_italic: str = "Helvetica-BoldOblique"
    monospace: str = "Courier"

    def resolve(self, bold: bool = False, italic: bool = False, monospace: bool = False) -> str:
        if bold and italic:
            return self.bold_italic
        if bold:
            return self.bold
        if italic:
            return self.italic
        if monospace:
            return self.monospace
        return self.normal


HELVETICA = FontFamily()


class FontMetrics(ABC):
    """
    Measures text for layout.

    Subclasses implement string_width() for a concrete font name; style
    resolution is shared.
    """

    def __init__(self, family: FontFamily = HELVETICA):
        self.family = family

    @abstractmethod
    def string_width(self, text: str, font_name: str, size: float) -> float:
        """Width of text in points for a font name and size."""
        pass

    def font_name(self, bold: bool = False, italic: bool = False, monospace: bool = False) -> str:
        return self.family.resolve(bold=bold, italic=italic, monospace=monospace)

    def width(
        self,
        text: str,
        size: float,
        bold: bool = False,
        italic: bool = False,
        monospace: bool = False,
    ) -> float:
        """Width of text at a size in the font matching the style flags."""
        return self.string_width(text, self.font_name(bold, italic, monospace), size)

    def space_width(self, size: float) -> float:
        """Inter-word space, always measured in the normal font."""
        return self.string_width(" ", self.family.normal, size)


class StandardFontMetrics(FontMetrics):
    """Metrics of the 14 standard PDF fonts, as bundled with reportlab."""

    def string_width(self, text: str, font_name: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, font_name, size)
