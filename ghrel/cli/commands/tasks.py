"""tasks command - show the task graph."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ghrel.services.pipeline import TASKS

_console = Console()


def tasks() -> None:
    """List the release tasks and what each one requires."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("task", style="cyan")
    table.add_column("requires", style="dim")
    table.add_column("does")

    for task in TASKS.values():
        table.add_row(task.name, ", ".join(task.requires) or "-", task.description)

    _console.print(table)
