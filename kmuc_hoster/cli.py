#!/usr/bin/env python3
"""kmuc-hoster CLI - Docker setup for small web projects."""

import typer
from rich.console import Console

from kmuc_hoster.cli_init_commands import register_init_commands
from kmuc_hoster.cli_progress_commands import register_progress_commands
from kmuc_hoster.cli_utility_commands import register_utility_commands
from kmuc_hoster.core.logger import get_logger

app = typer.Typer(
    name="kmuc-hoster",
    help="""kmuc-hoster - Docker setup for small web projects

Answer a few questions, get a Dockerfile, docker-compose.yml and deploy scripts.

Quick start:
  mkdir my-app && cd my-app
  kmuc-hoster init                # Interactive setup (resumable)
  docker-compose up -d            # Start it

More commands: kmuc-hoster --help
""",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = get_logger(__name__)

# Attach modular subcommands
register_init_commands(app, console)
register_progress_commands(app, console)
register_utility_commands(app, console)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
