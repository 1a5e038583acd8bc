"""Cleanup command."""

import click
from rich.console import Console

from ..app import build_storage

console = Console()


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def cleanup(ctx: click.Context, yes: bool) -> None:
    """Remove the random seed and everything in the structured store.

    Session and host key files of the file backend are kept.
    """
    storage = build_storage(ctx)
    if not yes:
        click.confirm(
            f"Delete the random seed and all data under {storage.config.registry_root}?",
            abort=True,
        )
    storage.cleanup_all()
    console.print("[green]Cleanup complete[/green]")
