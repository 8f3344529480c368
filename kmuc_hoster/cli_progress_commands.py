"""Inspect or discard the saved init checkpoint."""
import typer
from rich.console import Console
from rich.table import Table

from kmuc_hoster.cli_support import print_info, print_success, print_warning
from kmuc_hoster.core.progress_store import ProgressStore

ProgressTyper = typer.Typer(help="Inspect or discard saved init progress")


def register_progress_commands(root: typer.Typer, console: Console) -> None:
    """Attach progress-related commands to the main CLI."""

    @ProgressTyper.command("show")
    def show_command() -> None:
        """Show where the last interrupted init will resume."""
        store = ProgressStore()
        state = store.load()
        if state is None:
            if store.exists():
                print_warning(console, f"Progress file {store.progress_file} is unreadable")
            else:
                print_info(console, "No saved progress")
            return

        table = Table(title="Saved init progress", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Project", state.project_name or "-")
        table.add_row("Resume at", state.current_step.value)
        table.add_row("Path", state.project_path)
        table.add_row("Saved", state.timestamp or "-")
        table.add_row("Answers", ", ".join(sorted(state.answers)) or "-")
        console.print(table)

    @ProgressTyper.command("clear")
    def clear_command() -> None:
        """Discard saved progress so the next init starts fresh."""
        ProgressStore().clear()
        print_success(console, "Saved progress cleared")

    root.add_typer(ProgressTyper, name="progress")
