"""
Building context logger.

Provides logging interface for building context with automatic [build] prefix.
All building modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[build]"


def setup_building_logger(log_dir: Path, source: str = "") -> Path:
    """
    Setup logger for building context.

    Args:
        log_dir: Directory for this build session
        source: Resume data file being built (for provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={"Resume data": source or "(in memory)"},
    )


# Wrapper functions with automatic [build] prefix


def _log_info(message: str) -> None:
    """Log info message with [build] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [build] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [build] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [build] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [build] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level building-specific logging helpers


def log_build_start(data) -> None:
    """Log the sections a build will render (ResumeData)."""
    _log_info(f"Building resume PDF for {data.header.name or '(unnamed)'}")
    _log_debug(
        f"  Entries: {len(data.education)} education, {len(data.experience)} experience, "
        f"{len(data.projects)} projects"
    )


def log_section(title: str, entries: int) -> None:
    _log_debug(f"  Section {title}: {entries} entries")


def log_build_result(result, elapsed_time: float) -> None:
    """Log a finished build (BuildResult)."""
    _log_success(
        f"Built {result.filename}: {result.page_count} page(s), "
        f"{len(result.instructions)} draw instructions ({elapsed_time:.2f}s)"
    )
