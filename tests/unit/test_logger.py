"""Unit tests for session logging setup."""

import sys

import pytest
from loguru import logger

from vellum import __version__
from vellum.contexts.building.logger import _log_info, setup_building_logger
from vellum.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def restore_default_sink():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_setup_logger_writes_provenance(tmp_path):
    log_file = setup_logger("render", tmp_path / "run", {"LaTeX compilers": "pdflatex"}, console=False)
    logger.debug("debug detail")

    text = log_file.read_text()
    assert log_file == tmp_path / "run" / "render.log"
    assert f"Vellum {__version__} [render]" in text
    assert "LaTeX compilers: pdflatex" in text
    assert "debug detail" in text


@pytest.mark.unit
def test_context_logger_prefixes_messages(tmp_path):
    log_file = setup_building_logger(tmp_path, source="resume.yaml")

    setup_text = log_file.read_text()
    _log_info("drawing header")

    assert "resume.yaml" in setup_text
    assert "[build] drawing header" in log_file.read_text()
