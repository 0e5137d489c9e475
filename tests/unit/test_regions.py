"""Unit tests for region extraction."""

import pytest
from loguru import logger

from vellum.contexts.templating.regions import (
    extract_regions,
    list_region_ids,
    split_region_lines,
    wrap_region,
)
from vellum.contexts.templating.samples import SAMPLE_LATEX


@pytest.mark.unit
def test_extract_single_region():
    """Test content is stripped and split into lines."""
    regions = extract_regions('before\n%<BLOCK id="a">\n  old line  \n%</BLOCK>\nafter')

    assert len(regions) == 1
    assert regions[0].id == "a"
    assert regions[0].raw_content == "old line"
    assert regions[0].lines == ["old line"]


@pytest.mark.unit
def test_extract_no_regions_is_empty():
    """Test a document without markers yields no regions (not an error)."""
    assert extract_regions(r"\documentclass{article}") == []
    assert extract_regions("") == []


@pytest.mark.unit
def test_extract_empty_region():
    """Test an empty interior gives empty lines."""
    regions = extract_regions('%<BLOCK id="empty">\n\n%</BLOCK>')

    assert regions[0].raw_content == ""
    assert regions[0].lines == []


@pytest.mark.unit
def test_extract_handles_crlf_and_trailing_whitespace():
    """Test CRLF line endings split cleanly and lines are right-stripped."""
    regions = extract_regions('%<BLOCK id="a">\r\none  \r\n  two\t\r\n%</BLOCK>')

    assert regions[0].lines == ["one", "  two"]


@pytest.mark.unit
def test_extract_multiple_regions_in_order():
    """Test the sample template regions come back in document order."""
    regions = extract_regions(SAMPLE_LATEX)

    assert [region.id for region in regions] == ["summary", "skills", "exp_project_bullets"]
    assert len(regions[2].lines) == 3
    assert all(line.startswith(r"\item") for line in regions[2].lines)


@pytest.mark.unit
def test_extract_duplicate_id_keeps_first():
    """Test a repeated id keeps only its first occurrence."""
    document = '%<BLOCK id="a">\nfirst\n%</BLOCK>\n%<BLOCK id="a">\nsecond\n%</BLOCK>'

    regions = extract_regions(document)

    assert len(regions) == 1
    assert regions[0].lines == ["first"]


@pytest.mark.unit
def test_regions_do_not_nest():
    """Test the first end marker closes the open region."""
    document = '%<BLOCK id="outer">\nx\n%<BLOCK id="inner">\ny\n%</BLOCK>\nz\n%</BLOCK>'

    regions = extract_regions(document)

    assert [region.id for region in regions] == ["outer"]
    assert "%<BLOCK" in regions[0].raw_content


@pytest.fixture
def logged_warnings():
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.mark.unit
def test_nested_start_marker_is_reported(logged_warnings):
    """Test a region swallowing another start marker logs a warning naming it."""
    document = '%<BLOCK id="outer">\nx\n%<BLOCK id="inner">\ny\n%</BLOCK>'

    extract_regions(document)

    assert any("'outer'" in message and "inner" in message for message in logged_warnings)


@pytest.mark.unit
def test_plain_regions_log_no_warning(logged_warnings):
    extract_regions(SAMPLE_LATEX)

    assert logged_warnings == []


@pytest.mark.unit
def test_unterminated_region_is_ignored():
    """Test a start marker without an end marker is not a region."""
    assert extract_regions('%<BLOCK id="open">\ncontent') == []
    assert list_region_ids('%<BLOCK id="open">\ncontent') == ["open"]


@pytest.mark.unit
def test_is_bullets():
    """Test bullet detection uses the id."""
    summary, skills, bullets = extract_regions(SAMPLE_LATEX)

    assert bullets.is_bullets
    assert not summary.is_bullets
    assert not skills.is_bullets


@pytest.mark.unit
def test_extraction_is_idempotent_through_wrap():
    """Test re-wrapping extracted regions re-extracts to the same regions."""
    regions = extract_regions(SAMPLE_LATEX)

    rebuilt = "\n\n".join(wrap_region(region.id, region.lines) for region in regions)

    assert extract_regions(rebuilt) == regions


@pytest.mark.unit
def test_split_region_lines_empty():
    assert split_region_lines("") == []
