"""Host key cache commands."""

import click
from rich.console import Console

from ...errors import PersistenceError
from ...types import KeyStatus
from ..app import build_storage

console = Console()

_STATUS_STYLE = {
    KeyStatus.MATCH: "[green]match[/green]",
    KeyStatus.MISMATCH: "[red]MISMATCH[/red]",
    KeyStatus.ABSENT: "[yellow]not cached[/yellow]",
}


@click.group()
def hostkey() -> None:
    """Verify or store cached host keys.

    Examples:

        termstore hostkey verify example.com 22 ssh-ed25519 0x1234,0x5678

        termstore hostkey store example.com 22 ssh-ed25519 0x1234,0x5678
    """


@hostkey.command("verify")
@click.argument("hostname")
@click.argument("port", type=int)
@click.argument("keytype")
@click.argument("key")
@click.pass_context
def hostkey_verify(ctx: click.Context, hostname: str, port: int, keytype: str, key: str) -> None:
    """Compare KEY with the cached key. Exit code 0 match, 1 absent, 2 mismatch."""
    status = build_storage(ctx).host_keys.verify(hostname, port, keytype, key)
    console.print(f"{keytype}@{port}:{hostname}: {_STATUS_STYLE[status]}")
    if status == KeyStatus.ABSENT:
        raise SystemExit(1)
    if status == KeyStatus.MISMATCH:
        raise SystemExit(2)


@hostkey.command("store")
@click.argument("hostname")
@click.argument("port", type=int)
@click.argument("keytype")
@click.argument("key")
@click.pass_context
def hostkey_store(ctx: click.Context, hostname: str, port: int, keytype: str, key: str) -> None:
    """Cache KEY for the host."""
    try:
        build_storage(ctx).host_keys.store(hostname, port, keytype, key)
    except PersistenceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)
    console.print(f"[green]Stored {keytype} key for {hostname}:{port}[/green]")
