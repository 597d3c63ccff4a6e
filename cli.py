#!/usr/bin/env python3
"""
Notes CLI Client.

Command-line client for the notes API.
Built with Typer for type-safe commands and Rich for formatted output.
Requires a running server (python run.py --action server).

Usage:
    python cli.py --help                              # Show help
    python cli.py notes list                          # Active notes, newest first
    python cli.py notes list --archived               # Archived notes
    python cli.py notes search groceries              # Search titles and content
    python cli.py notes show <id>                     # Show one note
    python cli.py notes create "Title" -c "Body"      # Create a note
    python cli.py notes edit <id> --title "New"       # Change title/content
    python cli.py notes archive <id>                  # Archive a note
    python cli.py notes unarchive <id>                # Restore a note
    python cli.py notes delete <id> --yes             # Delete permanently

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from nodash.cli.commands import notes_app

app = typer.Typer(
    name="cli",
    help="Notes CLI - list, search and edit notes through the API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(notes_app, name="notes")


def _validate_project_root() -> None:
    """Validate that we're running from the project root."""
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notes CLI.

    Talks to the notes API configured in config/settings/application.yaml.
    """
    _validate_project_root()

    if debug:
        from nodash.backend.core.logging import setup_logging
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        from nodash.backend.core.logging import setup_logging
        setup_logging(level="INFO", format_type="console")


if __name__ == "__main__":
    app()
