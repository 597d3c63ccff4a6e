"""
Note Commands.

Commands for listing, searching and editing notes (requires running server).
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nodash.cli.client import APIError, NotesAPI, get_api_client

app = typer.Typer(help="Note commands")
console = Console()


def _run(action: Callable[[NotesAPI], Awaitable[Any]]) -> Any:
    """Run an async action against the notes API, mapping failures to exit 1."""

    async def _call() -> Any:
        client = get_api_client()
        try:
            return await action(NotesAPI(client))
        finally:
            await client.close()

    try:
        return asyncio.run(_call())
    except APIError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red] [dim]({e.status_code})[/dim]")
        raise typer.Exit(1)
    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python run.py --action server[/dim]")
        raise typer.Exit(1)


def _display_notes(data: dict[str, Any], title: str) -> None:
    """Render a page of notes as a table."""
    notes = data.get("data", [])
    if not notes:
        console.print("[yellow]No notes found[/yellow]")
        return

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Updated", no_wrap=True)

    for note in notes:
        title_text = escape(note["title"])
        if note.get("archived"):
            title_text += " [dim](archived)[/dim]"
        table.add_row(
            note["id"],
            title_text,
            note["updatedAt"][:16].replace("T", " "),
        )

    console.print(table)
    shown = data.get("offset", 0) + len(notes)
    console.print(f"[dim]Showing {shown} of {data.get('total', len(notes))}[/dim]")


def _display_note(note: dict[str, Any]) -> None:
    """Render a single note."""
    status = "[yellow]archived[/yellow]" if note.get("archived") else "[green]active[/green]"
    console.print(Panel(
        escape(note.get("content", "")) or "[dim](empty)[/dim]",
        title=f"[bold]{escape(note['title'])}[/bold]",
        subtitle=f"{note['id']} · {status}",
    ))
    console.print(f"[dim]Created: {note['createdAt']}  Updated: {note['updatedAt']}[/dim]")


@app.command("list")
def list_notes(
    archived: bool = typer.Option(False, "--archived", "-a", help="Show archived notes"),
    limit: int = typer.Option(100, "--limit", "-n", help="Maximum number of notes"),
    offset: int = typer.Option(0, "--offset", help="Number of notes to skip"),
    sort_by: str = typer.Option("updatedAt", "--sort-by", help="createdAt, updatedAt or title"),
    sort_order: str = typer.Option("desc", "--sort-order", help="asc or desc"),
) -> None:
    """
    List notes, most recently updated first.

    Examples:
        cli.py notes list
        cli.py notes list --archived
        cli.py notes list --sort-by title --sort-order asc
    """
    data = _run(lambda api: api.list_notes(
        archived=archived,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
    ))
    _display_notes(data, "Archived Notes" if archived else "Notes")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in titles and content"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum number of results"),
) -> None:
    """
    Search non-archived notes by title and content.

    Examples:
        cli.py notes search groceries
    """
    data = _run(lambda api: api.search_notes(query, limit=limit))
    _display_notes(data, f"Search: {query}")


@app.command()
def show(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Show a single note."""
    _display_note(_run(lambda api: api.get_note(note_id)))


@app.command()
def create(
    title: str = typer.Argument(..., help="Note title"),
    content: str = typer.Option("", "--content", "-c", help="Note content"),
) -> None:
    """
    Create a note.

    Examples:
        cli.py notes create "Shopping" -c "milk, eggs"
    """
    note = _run(lambda api: api.create_note(title, content))
    console.print(f"[green]✓ Created note {note['id']}[/green]")


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    content: str | None = typer.Option(None, "--content", "-c", help="New content"),
) -> None:
    """Change the title and/or content of a note."""
    if title is None and content is None:
        console.print("[red]Error: give --title and/or --content[/red]")
        raise typer.Exit(1)

    note = _run(lambda api: api.update_note(note_id, title=title, content=content))
    _display_note(note)


@app.command()
def archive(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Archive a note (hides it from the default list and from search)."""
    _run(lambda api: api.update_note(note_id, archived=True))
    console.print(f"[green]✓ Archived note {note_id}[/green]")


@app.command()
def unarchive(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Restore an archived note."""
    _run(lambda api: api.update_note(note_id, archived=False))
    console.print(f"[green]✓ Restored note {note_id}[/green]")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete a note."""
    if not yes:
        typer.confirm(f"Delete note {note_id}?", abort=True)

    _run(lambda api: api.delete_note(note_id))
    console.print(f"[green]✓ Deleted note {note_id}[/green]")
