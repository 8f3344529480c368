"""Utility CLI commands - version."""
import typer
from rich.console import Console

from kmuc_hoster import __version__

# Module-level console instance (will be set by register function)
console: Console = Console()


def version():
    """Show kmuc-hoster version."""
    console.print(f"kmuc-hoster v{__version__}")


def register_utility_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register utility commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(version)
