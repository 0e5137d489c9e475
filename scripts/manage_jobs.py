#!/usr/bin/env python3
"""
Command-line interface for the job application board.

The board (JOB_STORAGE_PATH, default outs/job_storage.json) tracks
applications across Wishlist, Applied, Interview, Offer and Rejected.

Commands:
    list    - Show the board (optionally one status)
    add     - Add a job to the top of Wishlist
    move    - Move a job to a status/position
    update  - Change job fields
    remove  - Delete a job
    seed    - Reset the board to the example jobs
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.intake.job_board import (
    COLUMNS,
    JobBoard,
    JobStatus,
    JsonStorage,
    Priority,
    seed_jobs,
)
from vellum.contexts.intake.logger import setup_intake_logger
from vellum.utils.exceptions import VellumError
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Manage the job application board",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _board() -> JobBoard:
    storage = JsonStorage()
    setup_intake_logger(LOGS_PATH / f"jobs_{now()}", storage.path)
    return JobBoard.load(storage)


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("list")
def list_command(
    status: Annotated[
        Optional[JobStatus],
        typer.Option("--status", "-s", help="Only show one column"),
    ] = None,
):
    """Show jobs grouped by status, in board order."""
    board = _board()
    for column in [status] if status else COLUMNS:
        jobs = board.jobs_in(column)
        typer.secho(f"\n{column.value} ({len(jobs)})", fg=typer.colors.BLUE, bold=True)
        for job in jobs:
            location = f" - {job.location}" if job.location else ""
            typer.echo(f"  {job.order}. [{job.priority.value}] {job.company}: {job.title}{location}  ({job.id})")
            if job.notes:
                typer.echo(f"       {job.notes}")
    typer.echo("")


@app.command("add")
def add_command(
    company: Annotated[str, typer.Argument(help="Company name")],
    title: Annotated[str, typer.Argument(help="Role title")],
    location: Annotated[str, typer.Option("--location", "-l")] = "",
    url: Annotated[str, typer.Option("--url")] = "",
    priority: Annotated[Priority, typer.Option("--priority", "-p")] = Priority.MED,
    notes: Annotated[str, typer.Option("--notes", "-n")] = "",
):
    """Add a job at the top of the Wishlist column."""
    job = _board().add_job(company, title, location=location, url=url, priority=priority, notes=notes)
    typer.secho(f"✓ Added {job.company}: {job.title} ({job.id})", fg=typer.colors.GREEN)


@app.command("move")
def move_command(
    job_id: Annotated[str, typer.Argument(help="Job id")],
    status: Annotated[JobStatus, typer.Argument(help="Target status")],
    position: Annotated[
        Optional[int],
        typer.Option("--position", "-p", help="0-based position in the column (default: last)", min=0),
    ] = None,
):
    """Move a job to another status or position."""
    try:
        job = _board().move_job(job_id, status, position)
    except VellumError as e:
        _fail(e)
    typer.secho(f"✓ {job.company}: {job.title} -> {job.status.value} #{job.order}", fg=typer.colors.GREEN)


@app.command("update")
def update_command(
    job_id: Annotated[str, typer.Argument(help="Job id")],
    company: Annotated[Optional[str], typer.Option("--company")] = None,
    title: Annotated[Optional[str], typer.Option("--title")] = None,
    location: Annotated[Optional[str], typer.Option("--location")] = None,
    url: Annotated[Optional[str], typer.Option("--url")] = None,
    priority: Annotated[Optional[Priority], typer.Option("--priority")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes")] = None,
):
    """Change fields of a job."""
    changes = {
        name: value
        for name, value in dict(
            company=company, title=title, location=location, url=url, priority=priority, notes=notes
        ).items()
        if value is not None
    }
    if not changes:
        typer.secho("Nothing to update", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    try:
        job = _board().update_job(job_id, **changes)
    except VellumError as e:
        _fail(e)
    typer.secho(f"✓ Updated {job.company}: {job.title}", fg=typer.colors.GREEN)


@app.command("remove")
def remove_command(job_id: Annotated[str, typer.Argument(help="Job id")]):
    """Delete a job."""
    board = _board()
    try:
        job = board.get(job_id)
    except VellumError as e:
        _fail(e)
    board.remove_job(job_id)
    typer.secho(f"✓ Removed {job.company}: {job.title}", fg=typer.colors.GREEN)


@app.command("seed")
def seed_command(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Replace the board with the example jobs."""
    if not yes:
        typer.confirm("Replace every stored job with the example jobs?", abort=True)
    board = JobBoard(seed_jobs(), _board().storage)
    board.save()
    typer.secho(f"✓ Board reset to {len(board.jobs)} example jobs", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
