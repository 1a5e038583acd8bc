"""Saved session commands."""

import click
from rich.console import Console
from rich.table import Table

from ...errors import BackendUnavailableError, PersistenceError
from ..app import build_storage

console = Console()


@click.group()
def session() -> None:
    """Manage saved sessions.

    Examples:

        termstore session list

        termstore session get "My Server" HostName PortNumber

        termstore session save "My Server" -s HostName example.com -i PortNumber 22

        termstore session delete "My Server"
    """


@session.command("list")
@click.pass_context
def session_list(ctx: click.Context) -> None:
    """List stored sessions."""
    storage = build_storage(ctx)
    names = sorted(storage.settings.iter_sessions())

    if not names:
        console.print("[dim]No sessions found[/dim]")
        return

    for name in names:
        console.print(name, markup=False, highlight=False)
    console.print(f"[dim]{len(names)} session(s) ({storage.backend_type.value})[/dim]")


@session.command("get")
@click.argument("name")
@click.argument("keys", nargs=-1, required=True)
@click.pass_context
def session_get(ctx: click.Context, name: str, keys: tuple) -> None:
    """Show settings of one session."""
    settings = build_storage(ctx).settings
    handle = settings.open_read(name)
    if handle is None:
        console.print(f"[red]No session found: {name}[/red]")
        raise SystemExit(1)

    table = Table(title=name)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Text")
    table.add_column("Integer", style="dim")
    try:
        for key in keys:
            text = settings.get_string(handle, key)
            number = settings.get_int(handle, key, 0)
            table.add_row(key, "-" if text is None else text, str(number))
    finally:
        settings.close_read(handle)

    console.print(table)


@session.command("save")
@click.argument("name")
@click.option("--string", "-s", "strings", type=(str, str), multiple=True, help="KEY VALUE text setting")
@click.option("--int", "-i", "ints", type=(str, int), multiple=True, help="KEY NUMBER integer setting")
@click.pass_context
def session_save(ctx: click.Context, name: str, strings: tuple, ints: tuple) -> None:
    """Write settings to a session.

    The file backend rewrites the whole session file, so settings not
    given here are dropped from it.
    """
    settings = build_storage(ctx).settings
    try:
        handle = settings.open_write(name)
    except BackendUnavailableError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    for key, value in strings:
        settings.set(handle, key, value)
    for key, number in ints:
        settings.set(handle, key, number)

    try:
        settings.close_write(handle)
    except PersistenceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    console.print(f"[green]Saved {len(strings) + len(ints)} setting(s) to {name}[/green]")


@session.command("delete")
@click.argument("name")
@click.pass_context
def session_delete(ctx: click.Context, name: str) -> None:
    """Delete a session."""
    build_storage(ctx).settings.delete(name)
    console.print(f"[green]Deleted {name}[/green]")
