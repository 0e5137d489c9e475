#!/usr/bin/env python3
"""
Resume Tailoring CLI

Lists the editable regions of a LaTeX resume, generates a tailored patch from
a job description, and applies patches.

Commands:
    blocks   - List %<BLOCK> region ids and their current lines
    suggest  - Generate a patch (LLM if OPENAI_API_KEY is set, else heuristic)
    apply    - Apply a patch JSON file to a LaTeX file
    tailor   - Suggest and apply in one step (editing session)
    sample   - Write the sample template with summary/skills/bullets regions

Examples:\n

    tailor_resume.py sample resume.tex

    tailor_resume.py suggest resume.tex job.txt -o patch.json

    tailor_resume.py apply resume.tex patch.json -o tailored.tex
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.targeting.logger import setup_targeting_logger
from vellum.contexts.targeting.patch_generator import HeuristicPatchStrategy, generate_patch
from vellum.contexts.targeting.patch_schema import parse_patch_json
from vellum.contexts.templating.editor import EditSession
from vellum.contexts.templating.logger import setup_templating_logger
from vellum.contexts.templating.patching import apply_patch
from vellum.contexts.templating.regions import extract_regions
from vellum.contexts.templating.samples import SAMPLE_LATEX
from vellum.utils.exceptions import VellumError
from vellum.utils.llm import llm_is_configured
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Tailor LaTeX resume regions to a job description",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("blocks")
def blocks_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX file", exists=True, dir_okay=False)],
):
    """List the regions of a LaTeX file."""
    regions = extract_regions(tex_file.read_text(encoding="utf-8"))
    if not regions:
        typer.secho('No %<BLOCK id="..."> regions found', fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    for region in regions:
        typer.secho(f"\n{region.id}", fg=typer.colors.BLUE, bold=True)
        for line in region.lines:
            typer.echo(f"  {line}")
    typer.echo("")


@app.command("suggest")
def suggest_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX file", exists=True, dir_okay=False)],
    job_file: Annotated[Path, typer.Argument(help="Job description text file", exists=True, dir_okay=False)],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the patch JSON here (default: print it)"),
    ] = None,
    heuristic: Annotated[
        bool,
        typer.Option("--heuristic", help="Use the local heuristic even if an API key is configured"),
    ] = False,
):
    """
    Generate a patch for every region of a LaTeX file.

    Examples:\n

        $ tailor_resume.py suggest resume.tex job.txt

        $ tailor_resume.py suggest resume.tex job.txt --heuristic -o patch.json
    """
    strategy = HeuristicPatchStrategy(reason="--heuristic") if heuristic else None
    mode = "heuristic" if heuristic or not llm_is_configured() else "llm"
    setup_targeting_logger(LOGS_PATH / f"suggest_{now()}", strategy=mode)

    try:
        patch = generate_patch(
            job_file.read_text(encoding="utf-8"),
            tex_file.read_text(encoding="utf-8"),
            strategy=strategy,
        )
    except VellumError as e:
        _fail(e)

    patch_json = json.dumps(patch.to_json_dict(), indent=2)
    if output:
        output.write_text(patch_json + "\n", encoding="utf-8")
        typer.secho(f"\n✓ Patch written: {output}", fg=typer.colors.GREEN, bold=True)
    else:
        typer.echo(patch_json)

    if patch.notes:
        typer.echo("\nNotes:")
        for note in patch.notes:
            typer.echo(f"  - {note}")
    typer.echo("")


@app.command("apply")
def apply_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX file", exists=True, dir_okay=False)],
    patch_file: Annotated[Path, typer.Argument(help="Patch JSON file", exists=True, dir_okay=False)],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output LaTeX path (default: overwrite the input)"),
    ] = None,
):
    """
    Apply a patch JSON file to a LaTeX file.

    Ids without a matching region are reported and skipped.
    """
    setup_templating_logger(LOGS_PATH / f"apply_{now()}", phase="patch")

    validation = parse_patch_json(patch_file.read_text(encoding="utf-8"))
    if not validation.ok:
        typer.secho("✗ Invalid patch", fg=typer.colors.RED, bold=True)
        for error in validation.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    result = apply_patch(tex_file.read_text(encoding="utf-8"), validation.patch)
    output = output or tex_file
    output.write_text(result.next, encoding="utf-8")

    typer.secho(f"\n✓ Applied {len(result.applied_ids)} block(s)", fg=typer.colors.GREEN, bold=True)
    if result.missing_ids:
        typer.secho(f"  Could not find blocks: {', '.join(result.missing_ids)}", fg=typer.colors.YELLOW)
    typer.echo(f"  Output: {output}\n")


@app.command("tailor")
def tailor_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX file", exists=True, dir_okay=False)],
    job_file: Annotated[Path, typer.Argument(help="Job description text file", exists=True, dir_okay=False)],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output LaTeX path (default: <name>_tailored.tex)"),
    ] = None,
):
    """
    Suggest and apply a patch in one step.

    Examples:\n

        $ tailor_resume.py tailor resume.tex job.txt
    """
    setup_targeting_logger(LOGS_PATH / f"tailor_{now()}", strategy="llm" if llm_is_configured() else "heuristic")

    session = EditSession(document=tex_file.read_text(encoding="utf-8"))
    typer.secho(f"\nRegions: {', '.join(session.block_ids) or '(none)'}", fg=typer.colors.BLUE, bold=True)

    try:
        session.suggest(job_file.read_text(encoding="utf-8"))
    except VellumError as e:
        _fail(e)
    result = session.apply_suggested()

    output = output or tex_file.with_name(f"{tex_file.stem}_tailored.tex")
    output.write_text(session.document, encoding="utf-8")

    typer.secho(f"✓ Applied {len(result.applied_ids)} block(s)", fg=typer.colors.GREEN, bold=True)
    for note in session.notes:
        typer.echo(f"  - {note}")
    typer.echo(f"  Output: {output}\n")


@app.command("sample")
def sample_command(
    output: Annotated[Path, typer.Argument(help="Where to write the sample template")] = Path("resume.tex"),
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """Write the sample LaTeX template."""
    if output.exists() and not force:
        typer.secho(f"Error: {output} exists (use --force to overwrite)\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    output.write_text(SAMPLE_LATEX, encoding="utf-8")
    typer.secho(f"✓ Sample template written: {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
