"""Shared utilities for kmuc-hoster CLI modules."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

RESUME_HINT = "Progress was saved. Run 'kmuc-hoster init' again to resume."
NO_RESUME_HINT = "Progress could not be saved; the next 'kmuc-hoster init' will start over."
PROJECT_DIR_HINT = "Create a project directory first: mkdir my-project && cd my-project && kmuc-hoster init"


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from kmuc_hoster.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def confirm_action(message: str, default: bool = True, yes_flag: bool = False) -> bool:
    """Prompt user for confirmation unless --yes was given.

    Args:
        message: Confirmation message to display
        default: Answer used on empty input
        yes_flag: Skip prompt if True (from --yes flag)

    Returns:
        True if confirmed, False otherwise
    """
    if yes_flag:
        return True
    return typer.confirm(message, default=default)


def handle_cli_error(
    e: Exception,
    console: Console,
    hint: Optional[str] = None,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Print a short diagnostic plus an actionable hint and exit.

    Args:
        e: Exception to handle
        console: Rich console for output
        hint: Follow-up instruction for the operator
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    print_error(console, f"Error: {e}")
    if hint:
        print_warning(console, hint)
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {message}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {message}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}")
