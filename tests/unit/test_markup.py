"""Unit tests for markup parsing."""

import pytest

from vellum.contexts.rendering.markup import StyledSegment, parse_markup, plain_text, strip_tags


@pytest.mark.unit
def test_empty_source():
    assert parse_markup("") == []
    assert parse_markup("   \n") == []


@pytest.mark.unit
def test_paragraph_with_inline_styles():
    """Test bold, italic and inline code become styled segments."""
    [block] = parse_markup("Built **fast** and *clean* `APIs`")

    assert block.kind == "paragraph"
    assert block.segments == [
        StyledSegment("Built "),
        StyledSegment("fast", bold=True),
        StyledSegment(" and "),
        StyledSegment("clean", italic=True),
        StyledSegment(" "),
        StyledSegment("APIs", monospace=True),
    ]


@pytest.mark.unit
def test_nested_emphasis_combines_flags():
    """Test italic inside bold carries both flags, and bold ends where it closes."""
    [block] = parse_markup("**bold *both*** after")

    assert StyledSegment("bold ", bold=True) in block.segments
    assert StyledSegment("both", bold=True, italic=True) in block.segments
    assert block.segments[-1] == StyledSegment(" after")


@pytest.mark.unit
def test_link_appends_url_segment():
    """Test links keep their text and add a (url) segment, both linked."""
    [block] = parse_markup("See [repo](https://example.com/r) now")

    assert block.segments == [
        StyledSegment("See "),
        StyledSegment("repo", link="https://example.com/r"),
        StyledSegment(" (https://example.com/r)", link="https://example.com/r"),
        StyledSegment(" now"),
    ]


@pytest.mark.unit
def test_bullet_and_ordered_lists():
    blocks = parse_markup("- one\n- **two**\n\n1. first\n2. second")

    assert [block.kind for block in blocks] == ["list", "list"]
    assert not blocks[0].ordered
    assert blocks[1].ordered
    assert [plain_text(item) for item in blocks[0].items] == ["one", "two"]
    assert blocks[0].items[1] == [StyledSegment("two", bold=True)]
    assert [plain_text(item) for item in blocks[1].items] == ["first", "second"]


@pytest.mark.unit
def test_nested_list_items_follow_parent():
    [block] = parse_markup("- parent\n  - child\n- sibling")

    assert [plain_text(item) for item in block.items] == ["parent", "child", "sibling"]


@pytest.mark.unit
def test_heading_flattens_to_paragraph():
    [block] = parse_markup("## Projects *2024*")

    assert block.kind == "paragraph"
    assert plain_text(block.segments) == "Projects 2024"


@pytest.mark.unit
def test_html_is_stripped():
    blocks = parse_markup("<div>Block <b>html</b></div>\n\nInline <span>tag</span> text")

    assert plain_text(blocks[0].segments) == "Block html"
    assert plain_text(blocks[1].segments) == "Inline tag text"


@pytest.mark.unit
def test_soft_break_becomes_space():
    [block] = parse_markup("line one\nline two")

    assert plain_text(block.segments) == "line one line two"


@pytest.mark.unit
def test_code_block_is_monospace_paragraph():
    [block] = parse_markup("```\nprint(1)\n```")

    assert block.kind == "paragraph"
    assert block.segments == [StyledSegment("print(1)", monospace=True)]


@pytest.mark.unit
def test_strip_tags():
    assert strip_tags("<p>a <em>b</em></p>") == "a b"
