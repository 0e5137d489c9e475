"""
Vellum - LaTeX resume tailoring, compilation, and PDF resume building

A job-search toolkit that patches named regions of a LaTeX resume with
tailored content, compiles the result, and builds PDF resumes from form data.

Architecture:
- Intake Context: Job application tracking (board statuses and ordering)
- Targeting Context: Patch generation from job descriptions (LLM or heuristic)
- Templating Context: Region extraction and patch application on LaTeX templates
- Rendering Context: LaTeX compilation, markup parsing, layout and PDF drawing
- Building Context: Structured resume data and the form-driven PDF builder
"""

__version__ = "0.1.0"
