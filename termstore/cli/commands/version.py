"""Version command."""

import click
from rich.console import Console

from ... import __version__

console = Console()


@click.command()
def version() -> None:
    """Show termstore version."""
    console.print(f"[bold]termstore[/bold] v{__version__}")
