"""
Page geometry, cursor and line wrapping for the PDF builder.

Layout constants are loaded from a YAML file (layout.yaml next to this
module, or LAYOUT_CONFIG_PATH). The cursor is immutable: advance() and
down() return new cursors, so a render pass can be replayed step by step.

Coordinates follow PDF convention: y is measured up from the page bottom,
so moving down the page decreases y.
"""

import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vellum.contexts.rendering.fonts import FontMetrics
from vellum.contexts.rendering.markup import StyledSegment

load_dotenv()

DEFAULT_LAYOUT_PATH = Path(__file__).parent / "layout.yaml"
LAYOUT_CONFIG_PATH = Path(os.getenv("LAYOUT_CONFIG_PATH", str(DEFAULT_LAYOUT_PATH)))

_MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


@dataclass(frozen=True)
class PageGeometry:
    width: float = 595.28
    height: float = 841.89
    margin_left: float = 48
    margin_right: float = 48
    margin_top: float = 48
    bottom_limit: float = 72
    line_height: float = 14

    @property
    def left(self) -> float:
        return self.margin_left

    @property
    def right(self) -> float:
        return self.width - self.margin_right

    @property
    def top(self) -> float:
        return self.height - self.margin_top

    @property
    def content_width(self) -> float:
        return self.right - self.left


@dataclass(frozen=True)
class FontSizes:
    name: float = 20
    contact: float = 9
    section_title: float = 10
    entry_title: float = 11
    date: float = 10
    body: float = 10
    meta: float = 9


@dataclass(frozen=True)
class Spacing:
    after_name: float = 26
    after_contact: float = 16
    after_header_rule: float = 18
    after_section_rule: float = 12
    entry_gap: float = 6
    meta_indent: float = 6
    paragraph_indent: float = 6
    notes_indent: float = 18
    bullet_indent: float = 8
    list_indent: float = 18
    underline_offset: float = 2
    header_rule: float = 0.75
    section_rule: float = 0.5
    link_underline: float = 0.5


@dataclass(frozen=True)
class LayoutSettings:
    """All layout constants for one render pass."""

    page: PageGeometry = PageGeometry()
    sizes: FontSizes = FontSizes()
    spacing: Spacing = Spacing()


def load_layout(config_path: Optional[Path] = None) -> LayoutSettings:
    """
    Load layout settings from YAML.

    Missing keys keep their defaults; unknown keys are an error.

    Args:
        config_path: YAML file (default: LAYOUT_CONFIG_PATH)

    Returns:
        LayoutSettings

    Raises:
        FileNotFoundError: If the file doesn't exist
        TypeError: If the file contains unknown keys
    """
    config_path = Path(config_path or LAYOUT_CONFIG_PATH)
    if not config_path.exists():
        raise FileNotFoundError(f"Layout config not found: {config_path}")

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}
    return LayoutSettings(
        page=PageGeometry(**config.get("page", {})),
        sizes=FontSizes(**config.get("sizes", {})),
        spacing=Spacing(**config.get("spacing", {})),
    )


@dataclass(frozen=True)
class RenderCursor:
    """Current page index and baseline position."""

    page: int
    y: float
    geometry: PageGeometry

    def down(self, dy: float) -> "RenderCursor":
        return replace(self, y=self.y - dy)


def start_cursor(geometry: PageGeometry) -> RenderCursor:
    """Cursor at the top margin of the first page."""
    return RenderCursor(page=0, y=geometry.top, geometry=geometry)


def advance(cursor: RenderCursor, needed: float) -> RenderCursor:
    """
    Make room for content of a given height.

    Returns the same cursor if the content fits above the bottom limit,
    otherwise a cursor at the top margin of the next page.
    """
    if cursor.y - needed < cursor.geometry.bottom_limit:
        return RenderCursor(page=cursor.page + 1, y=cursor.geometry.top, geometry=cursor.geometry)
    return cursor


@dataclass(frozen=True)
class Word:
    """A whitespace-free word carrying its segment's style."""

    text: str
    bold: bool = False
    italic: bool = False
    monospace: bool = False
    link: Optional[str] = None


def split_words(segments: List[StyledSegment]) -> List[Word]:
    """Split segments on whitespace; empty fragments are dropped."""
    return [
        Word(part, segment.bold, segment.italic, segment.monospace, segment.link)
        for segment in segments
        for part in segment.text.split()
    ]


def word_width(word: Word, size: float, metrics: FontMetrics) -> float:
    return metrics.width(word.text, size, word.bold, word.italic, word.monospace)


def line_width(line: List[Word], size: float, metrics: FontMetrics) -> float:
    """Width of words joined by single normal-font spaces."""
    if not line:
        return 0.0
    words = sum(word_width(word, size, metrics) for word in line)
    return words + (len(line) - 1) * metrics.space_width(size)


def wrap_words(
    words: List[Word], max_width: float, size: float, metrics: FontMetrics
) -> List[List[Word]]:
    """
    Greedy line breaking.

    A word joins the current line while the line plus a space plus the word
    stays within max_width (equality fits). A word wider than max_width on
    its own occupies a line by itself.
    """
    lines = []
    line: List[Word] = []
    current = 0.0
    space = metrics.space_width(size)

    for word in words:
        width = word_width(word, size, metrics)
        candidate = current + (space if line else 0.0) + width
        if line and candidate > max_width:
            lines.append(line)
            line, current = [word], width
        else:
            line.append(word)
            current = candidate

    if line:
        lines.append(line)
    return lines


def replace_links(text: str) -> str:
    """Rewrite markdown links as "text (url)"."""
    return _MARKDOWN_LINK.sub(lambda m: f"{m.group(1)} ({m.group(2)})", text)


def wrap_text(text: str, max_width: float, size: float, metrics: FontMetrics) -> List[str]:
    """Wrap plain text (normal font) into lines, after rewriting markdown links."""
    words = split_words([StyledSegment(replace_links(text))])
    return [" ".join(word.text for word in line) for line in wrap_words(words, max_width, size, metrics)]
