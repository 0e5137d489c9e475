"""
PDF inspection utilities.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Plain text per page, for checking rendered output.
"""

from io import BytesIO
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

PdfSource = Union[bytes, Path]


def _open(source: PdfSource):
    """Return something both PDF readers accept (a path or a byte stream)."""
    if isinstance(source, (bytes, bytearray)):
        return BytesIO(source)
    return str(source)


def page_count(source: PdfSource) -> Optional[int]:
    """Get page count from PDF bytes or path, or None if unreadable."""
    try:
        reader = PdfReader(_open(source))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(source: PdfSource) -> List[str]:
    """
    Extract plain text from every page of a PDF.

    Args:
        source: PDF bytes or path to a PDF file

    Returns:
        One string per page (empty string for pages without text)
    """
    with pdfplumber.open(_open(source)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]
