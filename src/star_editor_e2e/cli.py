"""Command-line entry point for the star-editor-ux acceptance run.

Prints ``PASS star-editor-ux`` on stdout and exits 0 when every step
passes; otherwise prints ``FAIL star-editor-ux`` and the traceback on
stderr and exits 1.
"""

from __future__ import annotations

import asyncio
import logging
import traceback
from pathlib import Path
from typing import Annotated

import typer

from star_editor_e2e.config import HarnessConfig, get_log_level
from star_editor_e2e.runner import run_scenario
from star_editor_e2e.scenario.star_editor import SCENARIO_NAME
from star_editor_e2e.utils.logging import setup_logging

app = typer.Typer(
    name="star-editor-e2e",
    help="End-to-end acceptance run for the constellation editor",
    add_completion=False,
)


@app.command()
def run(
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Directory served to the browser (default: $STAR_EDITOR_E2E_ROOT or cwd)",
        ),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(
            "--port",
            "-p",
            help="Asset responder port, 0 for an ephemeral port (default: 4173)",
        ),
    ] = None,
    headed: Annotated[
        bool,
        typer.Option(
            "--headed",
            help="Show the browser window",
        ),
    ] = False,
    artifact_dir: Annotated[
        Path | None,
        typer.Option(
            "--artifact-dir",
            help="Where the exported file is written (default: system temp dir)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every step and browser event to stderr",
        ),
    ] = False,
) -> None:
    """Run the star-editor-ux scenario once.

    Example:
        uv run python -m star_editor_e2e --root .
    """
    setup_logging(logging.DEBUG if verbose else get_log_level())

    updates: dict[str, object] = {}
    if root is not None:
        updates["root"] = root
    if port is not None:
        updates["port"] = port
    if headed:
        updates["headless"] = False
    if artifact_dir is not None:
        updates["artifact_dir"] = artifact_dir

    try:
        # Invalid environment values are reported like any other failure
        config = HarnessConfig.from_env().model_copy(update=updates)
        asyncio.run(run_scenario(config))
    except Exception:
        typer.echo(f"FAIL {SCENARIO_NAME}", err=True)
        typer.echo(traceback.format_exc(), err=True)
        raise typer.Exit(code=1) from None

    typer.echo(f"PASS {SCENARIO_NAME}")


def main() -> None:
    """Run the CLI."""
    app()
