"""
Building Context

Responsibilities:
- Holds structured resume content (header, list sections, free text)
- Provides immutable editing helpers keyed by stable entry ids
- Lays out resume content as a PDF through the rendering engine

Owns: ResumeData, section order, entry layout
Never: Compiles LaTeX (the rendering context does)
"""

from vellum.contexts.building.builder import BuildResult, build_resume_pdf, date_range
from vellum.contexts.building.resume_data import (
    SAMPLE_RESUME,
    Education,
    Experience,
    Header,
    Project,
    ResumeData,
    parse_project_links,
)

__all__ = [
    # Data
    "Header",
    "Education",
    "Experience",
    "Project",
    "ResumeData",
    "parse_project_links",
    "SAMPLE_RESUME",
    # Building
    "BuildResult",
    "build_resume_pdf",
    "date_range",
]
