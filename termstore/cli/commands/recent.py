"""Recent session list commands."""

import click
from rich.console import Console

from ...errors import RecentListError
from ..app import build_storage

console = Console()


@click.group()
def recent() -> None:
    """Show or edit the recently used session list."""


@recent.command("list")
@click.pass_context
def recent_list(ctx: click.Context) -> None:
    """List recent sessions, most recent first."""
    entries = build_storage(ctx).recent.get_entries()
    if not entries:
        console.print("[dim]No recent sessions[/dim]")
        return
    for index, name in enumerate(entries, 1):
        console.print(f"{index:>2}. {name}", markup=False, highlight=False)


@recent.command("add")
@click.argument("name")
@click.pass_context
def recent_add(ctx: click.Context, name: str) -> None:
    """Move a session to the front of the list."""
    try:
        build_storage(ctx).recent.add_entry(name)
    except RecentListError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@recent.command("remove")
@click.argument("name")
@click.pass_context
def recent_remove(ctx: click.Context, name: str) -> None:
    """Remove a session from the list."""
    try:
        build_storage(ctx).recent.remove_entry(name)
    except RecentListError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)
