"""Unit tests for wrapping, cursor movement and layout config."""

import pytest

from vellum.contexts.rendering.fonts import StandardFontMetrics
from vellum.contexts.rendering.layout import (
    DEFAULT_LAYOUT_PATH,
    LayoutSettings,
    PageGeometry,
    RenderCursor,
    Word,
    advance,
    line_width,
    load_layout,
    replace_links,
    split_words,
    start_cursor,
    wrap_text,
    wrap_words,
)
from vellum.contexts.rendering.markup import StyledSegment

# FixedWidthMetrics: 5pt per character (spaces included) at size 10
SIZE = 10


def words(*texts):
    return [Word(text) for text in texts]


@pytest.mark.unit
def test_wrap_exact_fit_stays_on_line(fixed_metrics):
    """Test a line whose width equals max_width is not broken."""
    lines = wrap_words(words("aa", "bb"), max_width=25, size=SIZE, metrics=fixed_metrics)

    assert [[w.text for w in line] for line in lines] == [["aa", "bb"]]


@pytest.mark.unit
def test_wrap_breaks_just_over_width(fixed_metrics):
    lines = wrap_words(words("aa", "bb"), max_width=24.9, size=SIZE, metrics=fixed_metrics)

    assert [[w.text for w in line] for line in lines] == [["aa"], ["bb"]]


@pytest.mark.unit
def test_wrap_oversize_word_sits_alone(fixed_metrics):
    """Test a word wider than the line gets a line to itself."""
    lines = wrap_words(words("a", "abcdefghij", "b"), max_width=20, size=SIZE, metrics=fixed_metrics)

    assert [[w.text for w in line] for line in lines] == [["a"], ["abcdefghij"], ["b"]]


@pytest.mark.unit
def test_wrap_never_exceeds_width_or_drops_words(fixed_metrics):
    """Test every multi-word line fits and all words survive in order."""
    text = "greedy wrapping keeps every word and never overflows the available width at all"
    source = words(*text.split())

    lines = wrap_words(source, max_width=120, size=SIZE, metrics=fixed_metrics)

    assert [w for line in lines for w in line] == source
    for line in lines:
        assert len(line) == 1 or line_width(line, SIZE, fixed_metrics) <= 120


@pytest.mark.unit
def test_wrap_empty():
    assert wrap_words([], 100, SIZE, StandardFontMetrics()) == []


@pytest.mark.unit
def test_split_words_keeps_style():
    segments = [StyledSegment("plain words "), StyledSegment("bold part", bold=True, link="u")]

    result = split_words(segments)

    assert [w.text for w in result] == ["plain", "words", "bold", "part"]
    assert result[2] == Word("bold", bold=True, link="u")


@pytest.mark.unit
def test_wrap_text_rewrites_links(fixed_metrics):
    lines = wrap_text("see [site](http://x.io) ok", max_width=1000, size=SIZE, metrics=fixed_metrics)

    assert lines == ["see site (http://x.io) ok"]


@pytest.mark.unit
def test_replace_links():
    assert replace_links("[a](b) and [c](d)") == "a (b) and c (d)"


@pytest.mark.unit
def test_advance_keeps_cursor_when_content_fits():
    geometry = PageGeometry()
    cursor = RenderCursor(page=0, y=200, geometry=geometry)

    # Exactly reaching the bottom limit still fits
    assert advance(cursor, 200 - geometry.bottom_limit) is cursor


@pytest.mark.unit
def test_advance_starts_new_page():
    geometry = PageGeometry()
    cursor = RenderCursor(page=0, y=80, geometry=geometry)

    moved = advance(cursor, 14)

    assert moved.page == 1
    assert moved.y == geometry.top
    # Pure: the original cursor is untouched
    assert cursor.page == 0 and cursor.y == 80


@pytest.mark.unit
def test_cursor_down_is_immutable():
    cursor = start_cursor(PageGeometry())

    lower = cursor.down(14)

    assert lower.y == cursor.y - 14
    assert cursor.y == PageGeometry().top


@pytest.mark.unit
def test_geometry_properties():
    geometry = PageGeometry(width=600, height=800, margin_left=50, margin_right=40, margin_top=30)

    assert geometry.left == 50
    assert geometry.right == 560
    assert geometry.top == 770
    assert geometry.content_width == 510


@pytest.mark.unit
def test_load_packaged_layout_matches_defaults():
    """Test layout.yaml ships the same values as the dataclass defaults."""
    assert load_layout(DEFAULT_LAYOUT_PATH) == LayoutSettings()


@pytest.mark.unit
def test_load_layout_partial_override(tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("page:\n  line_height: 12\nsizes:\n  name: 24\n")

    settings = load_layout(config)

    assert settings.page.line_height == 12
    assert settings.page.width == PageGeometry().width
    assert settings.sizes.name == 24


@pytest.mark.unit
def test_load_layout_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_layout(tmp_path / "missing.yaml")

    config = tmp_path / "bad.yaml"
    config.write_text("page:\n  gutter: 3\n")
    with pytest.raises(TypeError):
        load_layout(config)


@pytest.mark.unit
def test_standard_metrics_font_precedence():
    """Test bold+italic beats bold beats italic beats monospace."""
    metrics = StandardFontMetrics()

    assert metrics.font_name(bold=True, italic=True, monospace=True) == "Helvetica-BoldOblique"
    assert metrics.font_name(bold=True, monospace=True) == "Helvetica-Bold"
    assert metrics.font_name(italic=True, monospace=True) == "Helvetica-Oblique"
    assert metrics.font_name(monospace=True) == "Courier"
    assert metrics.font_name() == "Helvetica"
    assert metrics.width("abc", 10, monospace=True) == pytest.approx(18.0)
