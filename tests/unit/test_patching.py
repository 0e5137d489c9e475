"""Unit tests for patch application."""

import pytest

from vellum.contexts.targeting.patch_schema import BlockPatch, ResumePatch
from vellum.contexts.templating.patching import apply_patch
from vellum.contexts.templating.regions import extract_regions
from vellum.contexts.templating.samples import SAMPLE_LATEX


def make_patch(*blocks, notes=None) -> ResumePatch:
    return ResumePatch(
        blocks=[BlockPatch(id=block_id, replace_with=lines) for block_id, lines in blocks],
        notes=notes or [],
    )


@pytest.mark.unit
def test_apply_replaces_interior():
    """Test the interior is replaced and markers stay on their own lines."""
    document = '%<BLOCK id="a">\nold\n%</BLOCK>'

    result = apply_patch(document, make_patch(("a", ["new1", "new2"])))

    assert '%<BLOCK id="a">\nnew1\nnew2\n%</BLOCK>' in result.next
    assert result.applied_ids == ["a"]
    assert result.missing_ids == []
    assert result.changed


@pytest.mark.unit
def test_apply_missing_id_leaves_document_unchanged():
    """Test an unknown id is reported, not raised."""
    document = '%<BLOCK id="a">\nold\n%</BLOCK>'

    result = apply_patch(document, make_patch(("ghost", ["x"])))

    assert result.next == document
    assert result.applied_ids == []
    assert result.missing_ids == ["ghost"]
    assert not result.changed


@pytest.mark.unit
def test_apply_partitions_applied_and_missing():
    """Test every block id lands in exactly one of applied/missing, in patch order."""
    patch = make_patch(
        ("skills", ["s"]),
        ("ghost", ["g"]),
        ("summary", ["m"]),
        ("phantom", ["p"]),
    )

    result = apply_patch(SAMPLE_LATEX, patch)

    assert result.applied_ids == ["skills", "summary"]
    assert result.missing_ids == ["ghost", "phantom"]


@pytest.mark.unit
def test_applied_regions_reextract_to_replacement_lines():
    """Test applied regions round-trip through extraction."""
    patch = make_patch(
        ("summary", ["New summary."]),
        ("exp_project_bullets", [r"\item one", r"\item two"]),
    )

    result = apply_patch(SAMPLE_LATEX, patch)
    regions = {region.id: region for region in extract_regions(result.next)}

    assert regions["summary"].lines == ["New summary."]
    assert regions["exp_project_bullets"].lines == [r"\item one", r"\item two"]
    # Untouched region is preserved
    assert regions["skills"] == {r.id: r for r in extract_regions(SAMPLE_LATEX)}["skills"]


@pytest.mark.unit
def test_apply_twice_is_idempotent():
    """Test reapplying a patch leaves the document unchanged."""
    patch = make_patch(
        ("summary", ["New summary."]),
        ("exp_project_bullets", [r"\item one", r"\item two"]),
    )

    once = apply_patch(SAMPLE_LATEX, patch).next
    twice = apply_patch(once, patch).next

    assert twice == once
    regions = {region.id: region.lines for region in extract_regions(twice)}
    for block in patch.blocks:
        assert regions[block.id] == block.replace_with


@pytest.mark.unit
def test_apply_keeps_text_outside_regions():
    """Test only region interiors change."""
    document = 'head\n%<BLOCK id="a">\nold\n%</BLOCK>\ntail'

    result = apply_patch(document, make_patch(("a", ["new"])))

    assert result.next == 'head\n%<BLOCK id="a">\nnew\n%</BLOCK>\ntail'


@pytest.mark.unit
def test_apply_unterminated_region_is_missing():
    """Test a start marker without an end marker counts as missing."""
    document = '%<BLOCK id="a">\nold'

    result = apply_patch(document, make_patch(("a", ["new"])))

    assert result.missing_ids == ["a"]
    assert result.next == document


@pytest.mark.unit
def test_apply_is_sequential():
    """Test a repeated id is applied twice against the updated document."""
    document = '%<BLOCK id="a">\nold\n%</BLOCK>'

    result = apply_patch(document, make_patch(("a", ["first"]), ("a", ["second"])))

    assert result.applied_ids == ["a", "a"]
    assert extract_regions(result.next)[0].lines == ["second"]


@pytest.mark.unit
def test_apply_accepts_plain_block_list():
    """Test an iterable of BlockPatch works as well as a ResumePatch."""
    document = '%<BLOCK id="a">\nold\n%</BLOCK>'

    result = apply_patch(document, [BlockPatch(id="a", replace_with=["new"])])

    assert result.applied_ids == ["a"]


@pytest.mark.unit
def test_apply_duplicate_id_targets_first_occurrence():
    """Test substitution hits the same occurrence extraction reports."""
    document = '%<BLOCK id="a">\nfirst\n%</BLOCK>\n%<BLOCK id="a">\nsecond\n%</BLOCK>'

    result = apply_patch(document, make_patch(("a", ["new"])))

    assert result.next == '%<BLOCK id="a">\nnew\n%</BLOCK>\n%<BLOCK id="a">\nsecond\n%</BLOCK>'
