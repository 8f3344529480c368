"""The ``init`` command: question flow, resume handling and step sequencing."""
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from kmuc_hoster.cli_support import (
    NO_RESUME_HINT,
    PROJECT_DIR_HINT,
    RESUME_HINT,
    confirm_action,
    handle_cli_error,
    print_info,
    print_success,
    print_warning,
    setup_file_logging,
)
from kmuc_hoster.core.errors import KmucError, UnsafeDirectoryError
from kmuc_hoster.core.logger import get_logger
from kmuc_hoster.core.progress_store import ProgressStore
from kmuc_hoster.core.safety import ensure_safe_directory
from kmuc_hoster.core.sequencer import InitSequencer
from kmuc_hoster.core.steps import InitStep
from kmuc_hoster.models.answers import ProjectAnswers
from kmuc_hoster.prompts import (
    PROJECT_QUESTIONS,
    ConsolePrompter,
    Prompter,
    QuestionFlow,
    finalize_primary,
    target_questions,
)

# Module-level instances (will be set by register function)
console: Console = Console()
logger = get_logger(__name__)


def get_prompter(shared_console: Console) -> Prompter:
    """Prompter used for the interactive questions."""
    return ConsolePrompter(shared_console)


def _offer_resume(store: ProgressStore) -> Tuple[Dict[str, Any], Optional[InitStep]]:
    """Return (answers, step to resume at) or ({}, None) for a fresh start.

    Declining, or an unusable checkpoint, clears the stored progress.
    """
    if not store.exists():
        return {}, None

    state = store.load()
    if state is None:
        print_warning(console, "Saved progress is unreadable, starting fresh")
        store.clear()
        return {}, None

    try:
        ProjectAnswers.from_answers(state.answers)
    except ValidationError as e:
        logger.debug(f"Discarding checkpoint with invalid answers: {e}")
        print_warning(console, "Saved progress is incomplete, starting fresh")
        store.clear()
        return {}, None

    if confirm_action(f"Continue with the last project \"{state.project_name}\"?", default=True):
        if Path(state.project_path) != Path.cwd():
            print_warning(
                console,
                f"Progress was saved in {state.project_path}; files are written to {Path.cwd()}",
            )
        console.print(f"\n[yellow]⏩ Resuming at step: {state.current_step.value}[/yellow]\n")
        return dict(state.answers), state.current_step

    store.clear()
    return {}, None


def _show_summary(answers: ProjectAnswers, written: List[Path], project_path: Path) -> None:
    files = "\n".join(f"  ✓ {path.relative_to(project_path)}" for path in written) or "  (none)"
    console.print(Panel(files, title="📦 Files written", border_style="green"))

    console.print("\n[bold cyan]⚡ Next steps[/bold cyan]")
    console.print("  1. cp .env.example .env  [dim](and adjust)[/dim]")
    console.print("  2. docker-compose up -d")

    if answers.deploys_remotely:
        console.print("\n[bold cyan]🚀 Deployment[/bold cyan]")
        if answers.deployment_target == "vps":
            console.print("  ./scripts/deploy.sh               [dim]deploy to the server[/dim]")
        else:
            console.print("  ./scripts/deploy-cloud.sh         [dim]cloud deployment notes[/dim]")
        if answers.wants_domain:
            console.print("  ./scripts/setup-domain.sh         [dim]domain & SSL[/dim]")
        console.print("  ./scripts/docker-helpers.sh logs  [dim]show logs[/dim]")
    console.print()


def init(
    directory: str = typer.Option(".", "--directory", "-d", help="Target directory (checked by the safety guard)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and tracebacks"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Initialize a Docker setup for the project in the current directory.

    Asks a few questions, then writes Dockerfile, docker-compose.yml,
    .dockerignore, deploy scripts, .env.example and README.md. Progress is
    saved after every step; if anything fails, run init again to resume.

    Examples:
        kmuc-hoster init
        kmuc-hoster init --verbose
    """
    if verbose or log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    console.print("\n[bold cyan]🚀 Welcome to kmuc-hoster![/bold cyan]\n")

    project_path = Path.cwd()
    try:
        ensure_safe_directory(project_path)
        ensure_safe_directory(directory)
    except UnsafeDirectoryError as e:
        handle_cli_error(e, console, hint=PROJECT_DIR_HINT, verbose=verbose)

    store = ProgressStore()
    answers_map, resume_step = _offer_resume(store)
    if resume_step is None:
        console.print("[dim]Answer a few questions and I'll create your project setup.[/dim]\n")

    flow = QuestionFlow(get_prompter(console), console)

    try:
        if resume_step is None:
            answers_map = finalize_primary(flow.ask(PROJECT_QUESTIONS))
            store.save(answers_map, InitStep.ADDITIONAL_QUESTIONS, project_path)
            resume_step = InitStep.ADDITIONAL_QUESTIONS

        if resume_step.needs_target_questions:
            flow.ask(target_questions(answers_map), answers_map)
            store.save(answers_map, InitStep.DOCKERFILE, project_path)
            resume_step = InitStep.DOCKERFILE

        answers = ProjectAnswers.from_answers(answers_map)
        sequencer = InitSequencer(project_path, store, console)
        written = sequencer.run(answers, resume_step)

    except (KmucError, OSError, ValidationError) as e:
        logger.debug(f"init aborted: {e}")
        hint = RESUME_HINT if store.resumable else NO_RESUME_HINT
        handle_cli_error(e, console, hint=hint, verbose=verbose)

    print_success(console, "[bold]Setup complete![/bold]")
    _show_summary(answers, written, project_path)
    print_info(console, "Run 'docker-compose up -d' to start the project")


def register_init_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register the init command with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(init)
