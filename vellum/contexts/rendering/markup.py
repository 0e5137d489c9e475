"""
Lightweight markup to styled segments.

Parses markdown (CommonMark via markdown-it-py) into paragraph and list
blocks of StyledSegment runs for the PDF builder. Only the inline styling the
builder can draw survives: bold, italic, inline code and links.
"""

import re
from dataclasses import dataclass, field, replace
from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

_md = MarkdownIt("commonmark")

_TAG_PATTERN = re.compile(r"<[^>]+>")


@dataclass(frozen=True)
class StyledSegment:
    """A run of text with uniform style."""

    text: str
    bold: bool = False
    italic: bool = False
    monospace: bool = False
    link: Optional[str] = None


@dataclass
class MarkupBlock:
    """
    One block of parsed markup.

    Attributes:
        kind: "paragraph" or "list"
        segments: Inline content of a paragraph
        items: One segment list per list item
        ordered: Whether the list was numbered (rendered with the same glyph)
    """

    kind: str
    segments: List[StyledSegment] = field(default_factory=list)
    items: List[List[StyledSegment]] = field(default_factory=list)
    ordered: bool = False


def strip_tags(text: str) -> str:
    """Remove HTML tags, keeping their text content."""
    return _TAG_PATTERN.sub("", text)


def segments_from_inline(
    nodes: List[SyntaxTreeNode], bold: bool = False, italic: bool = False
) -> List[StyledSegment]:
    """
    Flatten inline syntax nodes into styled segments.

    Style is passed down explicitly, so nested emphasis combines
    (**bold *and italic***) without mutating shared state.
    """
    segments = []
    for node in nodes:
        if node.type == "text":
            segments.append(StyledSegment(node.content, bold=bold, italic=italic))
        elif node.type == "strong":
            segments.extend(segments_from_inline(node.children, bold=True, italic=italic))
        elif node.type == "em":
            segments.extend(segments_from_inline(node.children, bold=bold, italic=True))
        elif node.type == "code_inline":
            segments.append(StyledSegment(node.content, bold=bold, italic=italic, monospace=True))
        elif node.type == "link":
            href = node.attrs.get("href", "")
            inner = segments_from_inline(node.children, bold=bold, italic=italic)
            segments.extend(replace(segment, link=href) for segment in inner)
            segments.append(StyledSegment(f" ({href})", link=href))
        elif node.type == "html_inline":
            text = strip_tags(node.content)
            if text:
                segments.append(StyledSegment(text, bold=bold, italic=italic))
        elif node.type in ("softbreak", "hardbreak"):
            segments.append(StyledSegment(" "))
        elif node.children:
            # image alt text and anything else with inline children
            segments.extend(segments_from_inline(node.children, bold=bold, italic=italic))
    return segments


def _inline_children(node: SyntaxTreeNode) -> List[SyntaxTreeNode]:
    inline = [child for child in node.children if child.type == "inline"]
    return inline[0].children if inline else []


def _list_items(list_node: SyntaxTreeNode) -> List[List[StyledSegment]]:
    """Segments per list item; nested list items follow their parent item."""
    items = []
    for item in list_node.children:
        segments = []
        nested = []
        for child in item.children:
            if child.type in ("paragraph", "heading"):
                if segments:
                    segments.append(StyledSegment(" "))
                segments.extend(segments_from_inline(_inline_children(child)))
            elif child.type in ("bullet_list", "ordered_list"):
                nested.extend(_list_items(child))
        if segments:
            items.append(segments)
        items.extend(nested)
    return items


def parse_markup(source: str) -> List[MarkupBlock]:
    """
    Parse markdown into renderable blocks.

    Paragraphs and bullet/ordered lists keep inline styling; headings flatten
    to paragraphs; HTML blocks are stripped of tags; code blocks become
    monospace paragraphs. Anything else is dropped.

    Example:
        >>> blocks = parse_markup("Built **fast** APIs\\n\\n- one\\n- two")
        >>> [block.kind for block in blocks]
        ['paragraph', 'list']
    """
    if not source or not source.strip():
        return []

    root = SyntaxTreeNode(_md.parse(source))
    blocks = []
    for node in root.children:
        if node.type in ("paragraph", "heading"):
            blocks.append(MarkupBlock("paragraph", segments=segments_from_inline(_inline_children(node))))
        elif node.type in ("bullet_list", "ordered_list"):
            blocks.append(
                MarkupBlock("list", items=_list_items(node), ordered=node.type == "ordered_list")
            )
        elif node.type == "html_block":
            text = strip_tags(node.content).strip()
            if text:
                blocks.append(MarkupBlock("paragraph", segments=[StyledSegment(text)]))
        elif node.type in ("fence", "code_block"):
            text = node.content.strip()
            if text:
                blocks.append(MarkupBlock("paragraph", segments=[StyledSegment(text, monospace=True)]))
    return blocks


def plain_text(segments: List[StyledSegment]) -> str:
    """Concatenated text of segments."""
    return "".join(segment.text for segment in segments)
