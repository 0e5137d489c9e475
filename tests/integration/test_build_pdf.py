"""
Integration tests for structured resume PDFs.

Builds real PDFs with standard font metrics and reads them back with
pdfplumber and PyPDF2.
"""

import pytest

from vellum.contexts.building.builder import build_resume_pdf
from vellum.contexts.building.resume_data import SAMPLE_RESUME, ResumeData
from vellum.utils.pdf_processing import extract_text, page_count


@pytest.fixture(scope="module")
def sample_pdf():
    return build_resume_pdf(ResumeData.from_dict(SAMPLE_RESUME))


@pytest.mark.integration
def test_sample_is_single_page(sample_pdf):
    assert sample_pdf.page_count == 1
    assert page_count(sample_pdf.pdf) == 1


@pytest.mark.integration
def test_sample_text_content(sample_pdf):
    """Test the name, section titles and markdown text survive to the PDF."""
    [text] = extract_text(sample_pdf.pdf)

    assert "Jordan Rivera" in text
    for title in ("EDUCATION", "EXPERIENCE", "ACADEMIC PROJECTS", "TECHNICAL KNOWLEDGE"):
        assert title in text
    assert "OTHER" not in text
    assert "React" in text
    assert "**" not in text


@pytest.mark.integration
def test_long_resume_spans_pages():
    data = ResumeData.from_dict(SAMPLE_RESUME)
    notes = "\n".join(f"- Shipped feature number {i} with measurable impact" for i in range(8))
    for i in range(12):
        data = data.add_entry("experience", title=f"Engineer {i}", company="Initech", notes=notes)

    result = build_resume_pdf(data)
    pages = extract_text(result.pdf)

    assert result.page_count > 1
    assert page_count(result.pdf) == result.page_count
    assert len(pages) == result.page_count
    assert "Engineer 11" in "\n".join(pages)
