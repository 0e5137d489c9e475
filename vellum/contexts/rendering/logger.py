"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, compilers: str = "pdflatex, tectonic") -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        compilers: Compiler chain recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"LaTeX compilers": compilers},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(source_chars: int, strategy_names, working_dir: Path) -> None:
    """Log start of compilation with context."""
    _log_info(f"Starting compilation ({source_chars} chars)")
    _log_debug(f"  Compilers: {', '.join(strategy_names)}")
    _log_debug(f"  Working directory: {working_dir}")


def log_attempt_result(attempt) -> None:
    """Log one compiler attempt (CompilerAttempt)."""
    if attempt.success:
        _log_success(f"{attempt.name} produced a PDF ({attempt.elapsed:.2f}s)")
    else:
        _log_warning(f"{attempt.name} failed or not available: {attempt.reason} ({attempt.elapsed:.2f}s)")
    for i, err in enumerate(attempt.errors[:5], 1):
        _log_debug(f"  Error {i}: {err}")
    if attempt.warnings:
        _log_debug(f"  {len(attempt.warnings)} warnings")


def log_compilation_result(result, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        result: CompilationResult from compile_latex_source()
        elapsed_time: Time taken to compile
        verbose: Show full compiler output of every attempt (default: False)
    """
    if result.success:
        _log_success(f"Compilation succeeded with {result.compiler} ({elapsed_time:.2f}s)")
        if result.page_count:
            _log_debug(f"  Pages: {result.page_count}")
    else:
        _log_error(f"Compilation failed: no compiler produced a PDF ({elapsed_time:.2f}s)")
        for reason in result.failure_reasons:
            _log_error(f"  {reason}")

    # Use opt(raw=True) so multi-line compiler output keeps its formatting
    if verbose or not result.success:
        for attempt in result.attempts:
            if attempt.stdout:
                logger.opt(raw=True).debug(
                    f"\n{'=' * 80}\n{attempt.name.upper()} STDOUT:\n{'=' * 80}\n{attempt.stdout}\n"
                )

