"""
Region Marker Patterns

Marker strings delimiting replaceable regions in LaTeX templates. Markers are
LaTeX comments, so they survive compilation untouched:

    %<BLOCK id="summary">
    ... lines ...
    %</BLOCK>
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class BlockMarkers:
    """
    Region marker syntax.

    Used by region extraction and patch application. Start markers carry an
    id; end markers carry none and close the nearest open start marker.
    """
    START_TEMPLATE: str = '%<BLOCK id="{id}">'
    END: str = '%</BLOCK>'

    # Full region: start marker, lazily matched content, end marker
    REGION_REGEX: str = r'%<BLOCK id="([^"]+)">([\s\S]*?)%</BLOCK>'
    START_REGEX: str = r'%<BLOCK id="([^"]+)">'


MARKERS = BlockMarkers()
REGION_PATTERN = re.compile(MARKERS.REGION_REGEX)
START_PATTERN = re.compile(MARKERS.START_REGEX)
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")


def start_marker(region_id: str) -> str:
    """Start marker for a region id."""
    return MARKERS.START_TEMPLATE.format(id=region_id)
