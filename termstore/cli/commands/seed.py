"""Random seed commands."""

import click
from rich.console import Console
from rich.table import Table

from ...types import SeedIntent
from ..app import build_storage

console = Console()


@click.group()
def seed() -> None:
    """Inspect the random seed file."""


@seed.command("locate")
@click.pass_context
def seed_locate(ctx: click.Context) -> None:
    """Show candidate seed locations in search order."""
    locator = build_storage(ctx).seed

    reading = None
    handle = locator.resolve(SeedIntent.READ)
    if handle is not None:
        reading = handle.name
        handle.close()

    table = Table(title="Random seed locations")
    table.add_column("#", style="dim")
    table.add_column("Path", style="cyan")
    table.add_column("Exists")
    table.add_column("Used", style="green")

    for index, path in enumerate(locator.candidate_paths(), 1):
        exists = "[green]✓[/green]" if path.is_file() else "[dim]-[/dim]"
        used = "read" if reading is not None and str(path) == str(reading) else ""
        table.add_row(str(index), str(path), exists, used)

    console.print(table)
