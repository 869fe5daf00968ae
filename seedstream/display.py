"""
Display utilities for seed batches.

Renders a batch as a rich table with one row per work unit.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from seedstream.seeds import batch_fingerprint
from seedstream.types import SeedBatch


def seed_table(seeds: SeedBatch, title: str = "Seeds") -> Table:
    """
    Build a table of *seeds*: an index column followed by one column per word.

    Args:
        seeds: A batch as returned by generate().
        title: Table title.

    Returns:
        A rich Table.
    """
    width = max((len(s) for s in seeds), default=0)
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Unit", style="cyan", justify="right")
    table.add_column("Kind", style="magenta", justify="right")
    for i in range(1, width):
        table.add_column(f"Word {i}", justify="right")

    for index, seed in enumerate(seeds):
        table.add_row(str(index), *(str(int(v)) for v in seed))
    return table


def display_seeds(seeds: SeedBatch, console: Any | None = None) -> None:
    """
    Print a batch of seeds as a table followed by its fingerprint.

    Example:
        display_seeds(generate(4, 42))
    """
    if console is None:
        console = Console()

    if not seeds:
        console.print("[yellow]No seeds to display.[/yellow]")
        return

    console.print(seed_table(seeds, title=f"{len(seeds)} seeds"))
    console.print(
        Panel(
            f"Fingerprint: [bold green]{batch_fingerprint(seeds)}[/bold green]",
            border_style="green",
        )
    )
