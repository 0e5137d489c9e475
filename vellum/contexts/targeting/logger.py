"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path, strategy: str) -> Path:
    """
    Setup logger for targeting context.

    Args:
        log_dir: Directory for this targeting session
        strategy: Patch strategy name recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="target",
        log_dir=log_dir,
        extra_provenance={"Patch strategy": strategy},
    )


# Wrapper functions with automatic [target] prefix


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [target] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [target] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level targeting-specific logging helpers


def log_generation_start(strategy_name: str, region_ids, guidance_chars: int) -> None:
    """Log start of patch generation with context."""
    _log_info(f"Generating patch with {strategy_name} for {len(region_ids)} block(s)")
    _log_debug(f"  Blocks: {', '.join(region_ids)}")
    _log_debug(f"  Guidance length: {guidance_chars} chars")


def log_generation_result(strategy_name: str, patch, elapsed_time: float) -> None:
    """Log a generated patch."""
    _log_success(
        f"{strategy_name}: {len(patch.blocks)} block(s), {len(patch.notes)} note(s) "
        f"({elapsed_time:.2f}s)"
    )
    for note in patch.notes:
        _log_debug(f"  Note: {note}")
