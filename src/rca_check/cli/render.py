"""Render command — build the Markdown report from saved tool output."""

import sys
from pathlib import Path
from typing import Optional

import typer

from ..logging_config import setup_logging
from ..session import CheckRunSession
from ..workflow import notice
from . import app
from ._common import console, fail


@app.command()
def render(
    source: Optional[Path] = typer.Argument(
        None,
        help="File with rust-code-analysis-cli JSON output (default: stdin)",
        exists=True,
        dir_okay=False,
    ),
    version: str = typer.Option(
        "unknown",
        "--rca-version",
        help="Tool version shown in the report header",
    ),
    annotations: bool = typer.Option(
        False,
        "--annotations",
        help="Also print the derived annotations as workflow notices",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Print the check run report for previously captured tool output.

    [bold cyan]Examples:[/bold cyan]

      rust-code-analysis-cli --metrics --output-format=json -p src | rca-check render

      rca-check render metrics.jsonl --rca-version 0.0.25
    """
    setup_logging(verbose=verbose)

    session = CheckRunSession(version=version)
    try:
        if source is None:
            for line in sys.stdin:
                session.ingest(line)
        else:
            with open(source, encoding="utf-8") as f:
                for line in f:
                    session.ingest(line)
    except OSError as e:
        raise typer.Exit(fail(f"Cannot read {source}: {e}", annotate=False))

    if not session.records:
        console.print("[yellow]No rust-code-analysis records found.[/yellow]")

    typer.echo(session.report())
    if annotations:
        for a in session.annotations:
            notice(a.message, file=a.path, line=a.start_line, end_line=a.end_line, title=a.title)
