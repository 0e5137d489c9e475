#!/usr/bin/env python3
"""
PDF Compilation CLI

Compiles a LaTeX file to PDF through the compiler chain (pdflatex, then
tectonic), reporting every attempt.

Commands:
    compile  - Compile a single LaTeX file to PDF

Examples:\n

    compile_pdf.py compile resume.tex                     # Writes resume.pdf next to it

    compile_pdf.py compile resume.tex -o out/resume.pdf   # Explicit output path

    compile_pdf.py compile resume.tex --verbose           # Full compiler output in the log
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.rendering.compiler import compile_latex_source
from vellum.contexts.rendering.logger import setup_rendering_logger
from vellum.utils.exceptions import ValidationError
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Compile LaTeX resumes to PDF with pdflatex/tectonic fallback",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("compile")
def compile_command(
    tex_file: Annotated[
        Path,
        typer.Argument(help="LaTeX file to compile", exists=True, dir_okay=False, readable=True),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output PDF path (default: next to the .tex file)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed compilation output (compiler stdout)"),
    ] = False,
):
    """
    Compile a LaTeX file to PDF.

    Tries each compiler in order; only fails if none produces a PDF.

    Examples:\n

        $ compile_pdf.py compile resume.tex

        $ compile_pdf.py compile resume.tex --verbose
    """
    log_dir = LOGS_PATH / f"compile_{now()}"
    setup_rendering_logger(log_dir)

    typer.secho(f"\nCompiling: {tex_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        result = compile_latex_source(tex_file.read_text(encoding="utf-8"), verbose=verbose)
    except ValidationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.success:
        output = output or tex_file.with_suffix(".pdf")
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(result.pdf)

        typer.secho(f"✓ Compilation succeeded with {result.compiler}", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {result.page_count if result.page_count is not None else 'unknown'}")
        typer.echo(f"  LaTeX warnings: {len(result.warnings)}")
        if verbose and result.warnings:
            for warning in result.warnings[:10]:  # Limit to first 10
                typer.echo(f"  - {warning}")
            if len(result.warnings) > 10:
                typer.echo(f"  ... and {len(result.warnings) - 10} more")
        typer.echo(f"  PDF: {output}")
    else:
        typer.secho("✗ No PDF produced", fg=typer.colors.RED, bold=True)
        for reason in result.failure_reasons:
            typer.secho(f"  - {reason}", fg=typer.colors.RED)
        if result.errors:
            typer.echo("\nLaTeX errors:")
            for error in result.errors[:10]:
                typer.secho(f"  - {error}", fg=typer.colors.RED)
        typer.echo("\nInstall a TeX distribution (e.g., TeX Live) or tectonic, then retry.")

    typer.echo(f"  Log: {log_dir / 'render.log'}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


if __name__ == "__main__":
    app()
