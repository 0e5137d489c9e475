"""Shared fixtures: deterministic font metrics and isolated job storage."""

import pytest

from vellum.contexts.intake.job_board import JsonStorage
from vellum.contexts.rendering.fonts import FontMetrics
from vellum.contexts.rendering.layout import LayoutSettings


class FixedWidthMetrics(FontMetrics):
    """Every character (space included) is half the font size wide, in any font."""

    def string_width(self, text: str, font_name: str, size: float) -> float:
        return len(text) * size * 0.5


@pytest.fixture
def fixed_metrics():
    return FixedWidthMetrics()


@pytest.fixture
def layout():
    return LayoutSettings()


@pytest.fixture
def storage(tmp_path):
    return JsonStorage(tmp_path / "job_storage.json")
