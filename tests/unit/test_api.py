"""Unit tests for the HTTP API (no network, no TeX install)."""

import pytest
from fastapi.testclient import TestClient

from vellum import api
from vellum.contexts.building.resume_data import SAMPLE_RESUME
from vellum.contexts.targeting.patch_generator import MAX_GUIDANCE_CHARS
from vellum.contexts.templating.samples import SAMPLE_LATEX
from vellum.utils.exceptions import UpstreamError


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return TestClient(api.app)


# Generate


@pytest.mark.unit
def test_generate_heuristic_patch(client):
    """Test that without a credential the local heuristic answers."""
    response = client.post(
        "/api/resume/generate",
        json={"jobDescription": "Python engineer building data pipelines", "latexSource": SAMPLE_LATEX},
    )

    assert response.status_code == 200
    body = response.json()
    assert [block["id"] for block in body["blocks"]] == ["summary", "skills", "exp_project_bullets"]
    assert "replaceWith" in body["blocks"][0]
    assert "not an AI result" in body["notes"][0]


@pytest.mark.unit
@pytest.mark.parametrize(
    "content",
    [b"{broken", b"[1, 2]"],
)
def test_generate_bad_body(client, content):
    response = client.post(
        "/api/resume/generate", content=content, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.unit
def test_generate_missing_field(client):
    response = client.post("/api/resume/generate", json={"jobDescription": "x"})

    assert response.status_code == 400
    assert "latexSource" in response.text


@pytest.mark.unit
def test_generate_no_regions(client):
    response = client.post(
        "/api/resume/generate", json={"jobDescription": "Python", "latexSource": "\\section{Plain}"}
    )

    assert response.status_code == 400
    assert "BLOCK" in response.text


@pytest.mark.unit
def test_generate_oversized_guidance(client):
    response = client.post(
        "/api/resume/generate",
        json={"jobDescription": "a" * (MAX_GUIDANCE_CHARS + 1), "latexSource": SAMPLE_LATEX},
    )

    assert response.status_code == 413


@pytest.mark.unit
def test_generate_upstream_failure(client, monkeypatch):
    def failing(job_description, latex_source):
        raise UpstreamError("llm returned an invalid patch.", reasons=["blocks: field required"])

    monkeypatch.setattr(api, "generate_patch", failing)

    response = client.post("/api/resume/generate", json={"jobDescription": "x", "latexSource": "y"})

    assert response.status_code == 502
    assert "blocks: field required" in response.text


@pytest.mark.unit
def test_generate_unknown_provider(client, monkeypatch):
    """Test a misconfigured provider yields a plain-text 502, not a server crash."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_PROVIDER", "mystery")

    response = client.post(
        "/api/resume/generate",
        json={"jobDescription": "Python engineer", "latexSource": SAMPLE_LATEX},
    )

    assert response.status_code == 502
    assert response.headers["content-type"].startswith("text/plain")
    assert "Unknown LLM provider: mystery" in response.text


# Compile


@pytest.mark.unit
def test_compile_returns_inline_pdf(client, monkeypatch):
    monkeypatch.setattr(api, "compile_to_pdf", lambda source: b"%PDF-1.4 fake")

    response = client.post("/api/resume/compile", json={"latexSource": SAMPLE_LATEX})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'inline; filename="resume.pdf"'
    assert response.content == b"%PDF-1.4 fake"


@pytest.mark.unit
@pytest.mark.parametrize("body", [{}, {"latexSource": "   "}, {"latexSource": 3}])
def test_compile_requires_source(client, body):
    response = client.post("/api/resume/compile", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing latexSource"}


@pytest.mark.unit
def test_compile_all_compilers_failed(client, monkeypatch):
    def failing(source):
        raise UpstreamError("No PDF produced.", reasons=["pdflatex: pdflatex not installed", "tectonic: timed out"])

    monkeypatch.setattr(api, "compile_to_pdf", failing)

    response = client.post("/api/resume/compile", json={"latexSource": SAMPLE_LATEX})

    assert response.status_code == 502
    error = response.json()["error"]
    assert "pdflatex not installed" in error
    assert "tectonic: timed out" in error


# Build


@pytest.mark.unit
def test_build_returns_attachment(client):
    response = client.post("/api/resume/build", json=SAMPLE_RESUME)

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="resume.pdf"'
    assert response.content.startswith(b"%PDF")


@pytest.mark.unit
def test_build_rejects_bad_shape(client):
    response = client.post("/api/resume/build", json={"education": "MIT"})

    assert response.status_code == 400
    assert "education" in response.json()["error"]


@pytest.mark.unit
def test_build_rejects_bad_project_links(client):
    response = client.post("/api/resume/build", json={"experience": [{"title": "Dev", "projectLinks": 5}]})

    assert response.status_code == 400
    assert "projectLinks" in response.json()["error"]


@pytest.mark.unit
def test_build_accepts_comma_separated_links(client):
    response = client.post(
        "/api/resume/build", json={"experience": [{"title": "Dev", "projectLinks": "github.com/a, demo"}]}
    )

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")
