"""Termstore CLI application."""

import os
from pathlib import Path

import click
from rich.console import Console

from .. import __version__
from ..config import StoreConfig
from ..reporting import format_error
from ..storage import Storage
from ..types import BackendType, Confirmation
from ..utils.logging import setup_logging

console = Console()
err_console = Console(stderr=True)


def find_config() -> str | None:
    """
    Find config file using standard priority order:

    1. TERMSTORE_CONFIG environment variable
    2. .termstore.yaml in current directory (project config)
    3. ~/.config/termstore/config.yaml (user config)

    Returns None if no config found.
    """
    env_config = os.environ.get("TERMSTORE_CONFIG")
    if env_config:
        path = Path(env_config)
        if path.exists():
            return str(path)

    project_config = Path.cwd() / ".termstore.yaml"
    if project_config.exists():
        return str(project_config)

    user_config = Path.home() / ".config" / "termstore" / "config.yaml"
    if user_config.exists():
        return str(user_config)

    return None


def console_reporter(message: str, param: str | None = None) -> None:
    """Show storage errors on stderr."""
    err_console.print(f"[red]{format_error(message, param)}[/red]")


def prompt_confirmation(prompt: str) -> Confirmation:
    """Ask whether a registry-cached host key should move to a file."""
    err_console.print(f"[yellow]{prompt}[/yellow]")
    choice = click.prompt(
        "Move, copy or cancel",
        type=click.Choice(["move", "copy", "cancel"]),
        default="cancel",
    )
    return {
        "move": Confirmation.AFFIRM,
        "copy": Confirmation.DECLINE,
    }.get(choice, Confirmation.CANCEL)


def build_storage(ctx: click.Context) -> Storage:
    """Build Storage from CLI context."""
    obj = ctx.obj
    config = StoreConfig.load(obj["config"]) if obj.get("config") else StoreConfig()
    if obj.get("backend"):
        config.backend = BackendType(obj["backend"])
    if obj.get("hive"):
        config.hive_file = obj["hive"]
    if obj.get("debug"):
        config.log_level = "DEBUG"
    elif not obj.get("verbose") and config.log_level.upper() == "INFO":
        config.log_level = "WARNING"
    setup_logging(config)
    return Storage(config, confirm=prompt_confirmation, reporter=console_reporter)


@click.group()
@click.version_option(version=__version__, prog_name="termstore")
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--no-config", is_flag=True, help="Disable config auto-loading")
@click.option("--backend", "-b", type=click.Choice(["registry", "file"]), default=None,
              help="Storage backend (default: from config or registry)")
@click.option("--hive", type=click.Path(dir_okay=False), help="YAML file holding the structured store")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--debug", is_flag=True, help="Debug mode")
@click.pass_context
def cli(ctx: click.Context, config: str, no_config: bool, backend: str, hive: str,
        verbose: bool, debug: bool) -> None:
    """Termstore: saved sessions, host keys and seed for a terminal client.

    Config file locations (in priority order):

        1. -c/--config PATH (explicit)

        2. TERMSTORE_CONFIG env var

        3. .termstore.yaml (project config)

        4. ~/.config/termstore/config.yaml (user config)

    Examples:

        termstore session list

        termstore -b file session save "My Server" -s HostName example.com -i PortNumber 22

        termstore hostkey verify example.com 22 ssh-ed25519 AAAA...
    """
    ctx.ensure_object(dict)

    if no_config:
        config = None
    elif config is None:
        config = find_config()
        if config and verbose:
            console.print(f"[dim]Using config: {config}[/dim]")

    ctx.obj["config"] = config
    ctx.obj["backend"] = backend
    ctx.obj["hive"] = hive
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug


# Import and register commands
from .commands import cleanup, hostkey, recent, seed, session, version

cli.add_command(session.session)
cli.add_command(recent.recent)
cli.add_command(hostkey.hostkey)
cli.add_command(seed.seed)
cli.add_command(cleanup.cleanup)
cli.add_command(version.version)
