"""
Error taxonomy shared by all contexts.

Each error class carries the HTTP-style status the boundary layers (API, CLI)
report for it, so callers never have to re-derive the mapping.
"""

from typing import List, Optional


class VellumError(Exception):
    """Base class for all Vellum errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(VellumError, ValueError):
    """
    Malformed, oversized, or missing required input. User-correctable.

    Oversized inputs are reported with status 413, everything else with 400.
    """

    status_code = 400


class NotFoundError(VellumError):
    """Required content was not found in the input. User-correctable."""

    status_code = 400


class NoRegionsError(NotFoundError):
    """The document contains no extractable %<BLOCK> regions."""


class UpstreamError(VellumError):
    """
    An external generation or compilation service failed or timed out.

    Attributes:
        message: Combined failure description
        reasons: Individual failure reasons (one per attempted backend, or
            one per schema violation for generation output)
    """

    status_code = 502

    def __init__(self, message: str, reasons: Optional[List[str]] = None):
        self.reasons = list(reasons or [])
        parts = [message]
        for reason in self.reasons:
            parts.append(f"  - {reason}")
        super().__init__("\n".join(parts))
        self.message = message


class RenderError(VellumError):
    """
    Layout or drawing failure while building a PDF.

    Attributes:
        message: Error description
        original_error: The exception raised while drawing or serializing
    """

    status_code = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        parts = [message]
        if original_error:
            parts.append(f"Original error: {original_error}")
        super().__init__(": ".join(parts))
        self.message = message
