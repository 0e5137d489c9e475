#!/usr/bin/env python3
"""
Run the HTTP API (generate, compile and build endpoints) with uvicorn.

Examples:\n

    serve_api.py                      # http://127.0.0.1:8000

    serve_api.py --port 9000 --reload
"""

import os
from pathlib import Path

import typer
import uvicorn
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.rendering.logger import setup_rendering_logger
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def main(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Restart on code changes")] = False,
):
    """Serve /api/resume/generate, /api/resume/compile and /api/resume/build."""
    log_file = setup_rendering_logger(LOGS_PATH / f"api_{now()}")
    typer.secho(f"\nServing on http://{host}:{port}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Log: {log_file}\n")
    uvicorn.run("vellum.api:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    typer.run(main)
