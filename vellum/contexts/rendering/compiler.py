"""
LaTeX Compilation Module

Compiles a LaTeX source string to PDF bytes by trying an ordered list of
external compilers (pdflatex, then tectonic). Each attempt runs under a hard
wall-clock timeout inside a per-request temporary directory that is removed
on every exit path. Only exhausting the whole list is a failure.
"""

import os
import re
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from vellum.contexts.rendering.logger import (
    log_attempt_result,
    log_compilation_result,
    log_compilation_start,
)
from vellum.utils.exceptions import UpstreamError, ValidationError
from vellum.utils.pdf_processing import page_count

load_dotenv()

PDFLATEX_TIMEOUT = float(os.getenv("PDFLATEX_TIMEOUT", "10"))
TECTONIC_TIMEOUT = float(os.getenv("TECTONIC_TIMEOUT", "15"))

TEX_FILENAME = "main.tex"

# LaTeX intermediate files created during compilation
LATEX_ARTIFACTS = [".pdf", ".aux", ".log", ".out", ".toc"]

NO_PDF_MESSAGE = (
    "No PDF produced. Install a TeX distribution (e.g., TeX Live) or install "
    '"tectonic" for a lightweight compiler, then retry.'
)


@dataclass(frozen=True)
class CompilerStrategy:
    """
    One external compiler in the fallback chain.

    Arguments may contain {tex} (path to the .tex file) and {outdir}
    (the temporary working directory); the command runs with outdir as cwd.

    Attributes:
        name: Display name (e.g., "pdflatex")
        executable: Program to run
        args: Argument templates
        timeout: Wall-clock limit in seconds; the process is killed on expiry
    """

    name: str
    executable: str
    args: Tuple[str, ...] = ()
    timeout: float = 10.0

    def command(self, tex_path: Path) -> List[str]:
        substitutions = {"{tex}": str(tex_path), "{outdir}": str(tex_path.parent)}
        resolved = []
        for arg in self.args:
            for placeholder, value in substitutions.items():
                arg = arg.replace(placeholder, value)
            resolved.append(arg)
        return [self.executable, *resolved]


DEFAULT_STRATEGIES = (
    CompilerStrategy(
        name="pdflatex",
        executable="pdflatex",
        args=("-interaction=nonstopmode", "-halt-on-error", "-output-directory", "{outdir}", "{tex}"),
        timeout=PDFLATEX_TIMEOUT,
    ),
    CompilerStrategy(
        name="tectonic",
        executable="tectonic",
        args=("{tex}",),
        timeout=TECTONIC_TIMEOUT,
    ),
)


@dataclass
class CompilerAttempt:
    """
    Outcome of running one compiler.

    Attributes:
        name: Compiler name
        success: Whether a PDF was produced
        reason: Failure reason (None on success)
        elapsed: Seconds spent
        stdout: Captured standard output
        errors: LaTeX errors parsed from the .log file
        warnings: LaTeX warnings parsed from the .log file
    """

    name: str
    success: bool
    reason: Optional[str] = None
    elapsed: float = 0.0
    stdout: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class CompilationResult:
    """
    Result of compiling a LaTeX source through the compiler chain.

    Attributes:
        success: Whether any compiler produced a PDF
        pdf: PDF bytes (None if every compiler failed)
        compiler: Name of the compiler that produced the PDF
        attempts: Every attempt, in the order tried
        page_count: Number of pages in the PDF (None if not available)
    """

    success: bool
    pdf: Optional[bytes] = None
    compiler: Optional[str] = None
    attempts: List[CompilerAttempt] = field(default_factory=list)
    page_count: Optional[int] = None

    @property
    def failure_reasons(self) -> List[str]:
        return [f"{a.name}: {a.reason}" for a in self.attempts if not a.success]

    @property
    def errors(self) -> List[str]:
        return [err for attempt in self.attempts for err in attempt.errors]

    @property
    def warnings(self) -> List[str]:
        return [warn for attempt in self.attempts for warn in attempt.warnings]


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    # Common warning patterns
    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]

    for pattern in warning_patterns:
        compiled = re.compile(pattern, re.MULTILINE)
        for match in compiled.finditer(log_content):
            warnings.append(match.group(1).strip())

    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    """Remove outputs of a previous attempt so the next one starts clean."""
    base_path = tex_path.parent / tex_path.stem

    for ext in LATEX_ARTIFACTS:
        artifact_path = base_path.with_suffix(ext)
        if artifact_path.exists():
            artifact_path.unlink()


def _run_compiler(strategy: CompilerStrategy, tex_path: Path) -> Tuple[Optional[str], str]:
    """
    Run one compiler with its timeout.

    Returns:
        (failure_reason, stdout); failure_reason is None on a zero exit code
    """
    try:
        result = subprocess.run(
            strategy.command(tex_path),
            cwd=tex_path.parent,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
            timeout=strategy.timeout,
        )
    except FileNotFoundError:
        return f"{strategy.executable} not installed", ""
    except subprocess.TimeoutExpired as e:
        # subprocess.run() kills the child before re-raising
        stdout = e.stdout.decode("utf-8", "replace") if isinstance(e.stdout, bytes) else e.stdout
        return f"timed out after {strategy.timeout:g}s", stdout or ""
    except OSError as e:
        return f"could not start {strategy.executable}: {e}", ""

    if result.returncode != 0:
        return f"{strategy.executable} exited with code {result.returncode}", result.stdout
    return None, result.stdout


def _attempt(strategy: CompilerStrategy, tex_path: Path) -> Tuple[CompilerAttempt, Optional[bytes]]:
    """Run one strategy and collect its PDF (if any) and diagnostics."""
    _remove_artifacts(tex_path)

    start_time = time.time()
    reason, stdout = _run_compiler(strategy, tex_path)
    elapsed = time.time() - start_time

    errors, warnings = [], []
    log_file = tex_path.with_suffix(".log")
    if log_file.exists():
        # pdflatex writes log files in latin-1 encoding (font metadata contains non-UTF-8)
        errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

    # A PDF counts even if the compiler exited non-zero (warnings can do that)
    pdf_path = tex_path.with_suffix(".pdf")
    pdf = pdf_path.read_bytes() if pdf_path.exists() else None

    attempt = CompilerAttempt(
        name=strategy.name,
        success=pdf is not None,
        reason=None if pdf is not None else (reason or "no PDF produced"),
        elapsed=elapsed,
        stdout=stdout,
        errors=errors,
        warnings=warnings,
    )
    return attempt, pdf


def compile_latex_source(
    latex_source: str,
    strategies: Optional[Sequence[CompilerStrategy]] = None,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile LaTeX source to PDF, trying each compiler in order.

    Args:
        latex_source: Complete LaTeX document
        strategies: Compiler chain (default: pdflatex, then tectonic)
        verbose: Log full compiler output even on success

    Returns:
        CompilationResult; success is False only when every compiler failed

    Raises:
        ValidationError: If the source is blank
    """
    if not latex_source or not latex_source.strip():
        raise ValidationError("No LaTeX source provided")

    strategies = list(strategies if strategies is not None else DEFAULT_STRATEGIES)
    result = CompilationResult(success=False)
    start_time = time.time()

    with tempfile.TemporaryDirectory(prefix="latex-") as tmp_dir:
        tex_path = Path(tmp_dir) / TEX_FILENAME
        tex_path.write_text(latex_source, encoding="utf-8")
        log_compilation_start(len(latex_source), [s.name for s in strategies], Path(tmp_dir))

        for strategy in strategies:
            attempt, pdf = _attempt(strategy, tex_path)
            result.attempts.append(attempt)
            log_attempt_result(attempt)

            if pdf is not None:
                result.success = True
                result.pdf = pdf
                result.compiler = strategy.name
                result.page_count = page_count(pdf)
                break

    log_compilation_result(result, time.time() - start_time, verbose=verbose)
    return result


def compile_to_pdf(
    latex_source: str, strategies: Optional[Sequence[CompilerStrategy]] = None
) -> bytes:
    """
    Compile LaTeX source and return the PDF bytes.

    Raises:
        ValidationError: If the source is blank
        UpstreamError: If no compiler produced a PDF (lists every attempt's reason)
    """
    result = compile_latex_source(latex_source, strategies)
    if not result.success:
        raise UpstreamError(NO_PDF_MESSAGE, reasons=result.failure_reasons)
    return result.pdf
