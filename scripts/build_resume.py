#!/usr/bin/env python3
"""
Resume PDF Builder CLI

Builds a PDF resume from structured data (YAML or JSON) without LaTeX.

Commands:
    build   - Build a PDF from a resume data file
    sample  - Write an example resume data file

Examples:\n

    build_resume.py sample resume.yaml

    build_resume.py build resume.yaml -o resume.pdf
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from vellum.contexts.building.builder import build_resume_pdf
from vellum.contexts.building.logger import setup_building_logger
from vellum.contexts.building.resume_data import SAMPLE_RESUME, ResumeData
from vellum.contexts.rendering.layout import load_layout
from vellum.utils.exceptions import VellumError
from vellum.utils.pdf_processing import extract_text
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Build PDF resumes from structured resume data",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("build")
def build_command(
    data_file: Annotated[
        Path,
        typer.Argument(help="Resume data (.yaml, .yml or .json)", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output PDF path (default: next to the data file)"),
    ] = None,
    layout: Annotated[
        Optional[Path],
        typer.Option("--layout", "-l", help="Layout YAML overriding the packaged layout.yaml"),
    ] = None,
    show_text: Annotated[
        bool,
        typer.Option("--show-text", help="Print the text extracted from the built PDF"),
    ] = False,
):
    """
    Build a PDF from a resume data file.

    Both YAML and JSON are read with OmegaConf (JSON is valid YAML).

    Examples:\n

        $ build_resume.py build resume.yaml

        $ build_resume.py build resume.json --show-text
    """
    setup_building_logger(LOGS_PATH / f"build_{now()}", source=str(data_file))

    try:
        raw = OmegaConf.to_container(OmegaConf.load(data_file), resolve=True)
        data = ResumeData.from_dict(raw)
        result = build_resume_pdf(data, settings=load_layout(layout) if layout else None)
    except (VellumError, FileNotFoundError, TypeError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output = output or data_file.with_suffix(".pdf")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.pdf)

    typer.secho(f"\n✓ Built {output}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")

    if show_text:
        for number, text in enumerate(extract_text(result.pdf), 1):
            typer.secho(f"\n--- Page {number} ---", fg=typer.colors.BLUE)
            typer.echo(text)
    typer.echo("")


@app.command("sample")
def sample_command(
    output: Annotated[Path, typer.Argument(help="Where to write the example data")] = Path("resume.yaml"),
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """Write an example resume data file (YAML)."""
    if output.exists() and not force:
        typer.secho(f"Error: {output} exists (use --force to overwrite)\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    OmegaConf.save(OmegaConf.create(SAMPLE_RESUME), output)
    typer.secho(f"✓ Example resume data written: {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
