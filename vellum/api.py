"""
HTTP API

Three JSON endpoints over the contexts:
    POST /api/resume/generate  {jobDescription, latexSource} -> patch JSON
    POST /api/resume/compile   {latexSource}                 -> application/pdf
    POST /api/resume/build     ResumeData JSON               -> application/pdf

Bodies are read and validated by hand so malformed JSON maps to 400 rather
than FastAPI's default 422. Generate errors are plain text; compile and build
errors are JSON {"error": ...}.
"""

import json
from typing import Any, Dict, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from vellum import __version__
from vellum.contexts.building.builder import DOWNLOAD_FILENAME, build_resume_pdf
from vellum.contexts.building.resume_data import ResumeData
from vellum.contexts.rendering.compiler import compile_to_pdf
from vellum.contexts.targeting.patch_generator import generate_patch
from vellum.utils.exceptions import RenderError, UpstreamError, VellumError

app = FastAPI(title="Vellum Resume API", version=__version__)


class BadRequest(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


async def _read_json(request: Request) -> Dict[str, Any]:
    """Decode the request body as a JSON object."""
    try:
        body = json.loads(await request.body() or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequest("Invalid JSON body") from e
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


def _require_strings(body: Dict[str, Any], *names: str) -> Tuple[str, ...]:
    values = []
    for name in names:
        value = body.get(name)
        if not isinstance(value, str):
            raise BadRequest(f"Missing jobDescription or latexSource ({name} must be a string)")
        values.append(value)
    return tuple(values)


def _pdf_response(pdf: bytes, disposition: str) -> Response:
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'{disposition}; filename="{DOWNLOAD_FILENAME}"'},
    )


@app.post("/api/resume/generate")
async def generate(request: Request) -> Response:
    """Generate a validated patch for the regions of a LaTeX source."""
    try:
        body = await _read_json(request)
        job_description, latex_source = _require_strings(body, "jobDescription", "latexSource")
        patch = generate_patch(job_description, latex_source)
    except BadRequest as e:
        return PlainTextResponse(e.message, status_code=400)
    except UpstreamError as e:
        return PlainTextResponse(str(e), status_code=502)
    except VellumError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)

    return JSONResponse(patch.to_json_dict())


@app.post("/api/resume/compile")
async def compile_resume(request: Request) -> Response:
    """Compile a LaTeX source to PDF through the compiler chain."""
    try:
        body = await _read_json(request)
        source = body.get("latexSource")
        if not isinstance(source, str) or not source.strip():
            raise BadRequest("Missing latexSource")
        pdf = compile_to_pdf(source)
    except BadRequest as e:
        return JSONResponse({"error": e.message}, status_code=400)
    except UpstreamError as e:
        return JSONResponse({"error": str(e)}, status_code=502)
    except VellumError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    return _pdf_response(pdf, "inline")


@app.post("/api/resume/build")
async def build_resume(request: Request) -> Response:
    """Build a PDF from structured resume data."""
    try:
        data = ResumeData.from_dict(await _read_json(request))
        result = build_resume_pdf(data)
    except BadRequest as e:
        return JSONResponse({"error": e.message}, status_code=400)
    except RenderError as e:
        return JSONResponse({"error": e.message}, status_code=500)
    except VellumError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    return _pdf_response(result.pdf, "attachment")
