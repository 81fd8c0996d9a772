"""CLI entry point — registers all subcommands."""

import typer

app = typer.Typer(
    name="rca-check",
    help="Publish rust-code-analysis metrics as a GitHub check run",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .run import run as _run  # noqa: F401, E402
from .render import render as _render  # noqa: F401, E402


def main() -> None:
    app()
