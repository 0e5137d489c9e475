"""
Shared utilities for Vellum.

Common functionality used across contexts:
- Logging setup
- Error taxonomy
- LLM providers
- PDF inspection
"""

from vellum.utils.exceptions import (
    NoRegionsError,
    NotFoundError,
    RenderError,
    UpstreamError,
    ValidationError,
    VellumError,
)
from vellum.utils.timestamp import now, now_exact

__all__ = [
    "VellumError",
    "ValidationError",
    "NotFoundError",
    "NoRegionsError",
    "UpstreamError",
    "RenderError",
    "now",
    "now_exact",
]
