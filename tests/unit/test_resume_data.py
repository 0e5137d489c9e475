"""Unit tests for structured resume data."""

import pytest

from vellum.contexts.building.resume_data import (
    SAMPLE_RESUME,
    Education,
    Experience,
    ResumeData,
    parse_project_links,
)
from vellum.utils.exceptions import NotFoundError, ValidationError


@pytest.mark.unit
def test_from_dict_sample():
    data = ResumeData.from_dict(SAMPLE_RESUME)

    assert data.header.name == "Jordan Rivera"
    assert data.education[0].gpa == "4.0"
    assert data.experience[0].project_links == ["github.com/jrivera/dashboards"]
    assert data.projects[0].title == "Subscriber Analytics"
    assert data.other == ""


@pytest.mark.unit
def test_from_dict_assigns_missing_ids():
    data = ResumeData.from_dict({"education": [{"school": "A"}, {"school": "B", "id": ""}]})

    ids = [entry.id for entry in data.education]
    assert all(ids)
    assert len(set(ids)) == 2


@pytest.mark.unit
def test_from_dict_keeps_given_ids_and_ignores_unknown_keys():
    data = ResumeData.from_dict({"experience": [{"id": "x1", "title": "Dev", "color": "blue"}]})

    assert data.experience[0] == Experience(id="x1", title="Dev")


@pytest.mark.unit
def test_from_dict_accepts_snake_case_links():
    data = ResumeData.from_dict({"experience": [{"id": "e", "project_links": ["a"]}]})

    assert data.experience[0].project_links == ["a"]


@pytest.mark.unit
def test_from_dict_splits_comma_separated_links():
    """Test a single links string is split on commas, not into characters."""
    data = ResumeData.from_dict({"experience": [{"projectLinks": "github.com/a, demo"}]})

    assert data.experience[0].project_links == ["github.com/a", "demo"]


@pytest.mark.unit
@pytest.mark.parametrize("links", [5, {"url": "x"}, ["ok", 3]])
def test_from_dict_rejects_bad_links(links):
    with pytest.raises(ValidationError):
        ResumeData.from_dict({"experience": [{"projectLinks": links}]})


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"education": "not a list"},
        {"experience": ["not an object"]},
        {"header": "Jane"},
    ],
)
def test_from_dict_rejects_bad_shapes(raw):
    with pytest.raises(ValidationError):
        ResumeData.from_dict(raw)


@pytest.mark.unit
def test_to_dict_uses_wire_names():
    data = ResumeData.from_dict(SAMPLE_RESUME)

    result = data.to_dict()

    assert "projectLinks" in result["experience"][0]
    assert "project_links" not in result["experience"][0]
    assert ResumeData.from_dict(result) == data


@pytest.mark.unit
def test_empty():
    data = ResumeData.empty()

    assert data.education == [] and data.technical == ""
    assert data.header.contact_parts == []


@pytest.mark.unit
def test_contact_parts_order():
    data = ResumeData.empty().update_header(email="e@x.io", location="Here", github="gh")

    assert data.header.contact_parts == ["Here", "e@x.io", "gh"]


@pytest.mark.unit
def test_entry_editing_returns_new_data():
    original = ResumeData.empty()

    added = original.add_entry("education", school="MIT")
    entry_id = added.education[0].id
    updated = added.update_entry("education", entry_id, degree="BSc")
    removed = updated.remove_entry("education", entry_id)

    assert original.education == []
    assert added.education[0].degree == ""
    assert updated.education == [Education(id=entry_id, school="MIT", degree="BSc")]
    assert removed.education == []


@pytest.mark.unit
def test_update_unknown_entry():
    with pytest.raises(NotFoundError):
        ResumeData.empty().update_entry("projects", "nope", title="x")


@pytest.mark.unit
def test_unknown_sections():
    with pytest.raises(ValidationError):
        ResumeData.empty().add_entry("hobbies", title="x")
    with pytest.raises(ValidationError):
        ResumeData.empty().set_text("summary", "x")


@pytest.mark.unit
def test_set_text():
    data = ResumeData.empty().set_text("technical", "Python, SQL")

    assert data.technical == "Python, SQL"


@pytest.mark.unit
def test_parse_project_links():
    assert parse_project_links("repo, , demo ") == ["repo", "demo"]
    assert parse_project_links("") == []
