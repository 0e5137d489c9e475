"""
Session logging for Vellum CLIs and the API server.

Each run gets its own directory with one log file per context. Context
modules log through the prefixed wrappers in contexts/{context}/logger.py;
only entry points call setup_logger().
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from vellum import __version__

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    console: bool = True,
) -> Path:
    """
    Route loguru output to {log_dir}/{context_name}.log (DEBUG) and stdout (INFO).

    Args:
        context_name: Context identifier ("render", "template", "target", "build", "intake")
        log_dir: Directory for this run
        extra_provenance: Run details written to the header (input file, compilers, ...)
        console: Also echo INFO and above to stdout

    Returns:
        Path to the log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    if console:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, object]] = None) -> None:
    """Write the run header: Vellum version, context, command line and working directory."""
    logger.info("=" * 80)
    logger.info(f"Vellum {__version__} [{context_name}]")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
