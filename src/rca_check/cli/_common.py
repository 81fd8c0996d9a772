"""Shared CLI helpers."""

from rich.console import Console
from rich.markup import escape

from ..workflow import set_failed

console = Console(stderr=True)


def fail(message: str, code: int = 1, annotate: bool = True) -> int:
    """Report ``message`` as the step failure and return the exit code to use."""
    if annotate:
        set_failed(message)
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    return code
