"""
Notes TUI Client.

Two-pane terminal client for the notes API: a search bar and archived
view toggle on top, the note list on the left, and an editor on the
right that saves changes one second after typing stops.
Requires a running server (python run.py --action server).

Usage:
    python tui.py
    python tui.py --debug
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any

import httpx
from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.timer import Timer
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    ListItem,
    ListView,
    Static,
    TextArea,
)

from nodash.backend.core.logging import get_logger, log_with_source, setup_logging
from nodash.cli.client import APIClient, APIError, NotesAPI

logger = get_logger(__name__)

SAVE_DELAY = 1.0
SEARCH_DELAY = 0.3
PREVIEW_LENGTH = 40
NEW_NOTE_TITLE = "Untitled"


def format_date(value: str) -> str:
    """Short month/day label for a note timestamp, e.g. ``Mar 07``."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%b %d")
    except ValueError:
        return ""


def preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    """First characters of the content on a single line."""
    line = " ".join(content.split())
    if len(line) > length:
        return line[: length - 1] + "…"
    return line


def filter_for_view(notes: list[dict[str, Any]], archived: bool) -> list[dict[str, Any]]:
    """Keep the notes whose archived state matches the current view."""
    return [note for note in notes if bool(note.get("archived")) == archived]


class PendingChanges:
    """Field edits waiting to be saved for one note."""

    def __init__(self) -> None:
        self.note_id: str | None = None
        self.fields: dict[str, str] = {}

    def record(self, note_id: str, field: str, value: str) -> None:
        if note_id != self.note_id:
            self.fields = {}
            self.note_id = note_id
        self.fields[field] = value

    def take(self) -> tuple[str | None, dict[str, str]]:
        """Return and clear the pending edits."""
        taken = self.note_id, self.fields
        self.note_id, self.fields = None, {}
        return taken

    def __bool__(self) -> bool:
        return bool(self.fields)


class NoteItem(ListItem):
    """Sidebar entry for one note."""

    def __init__(self, note: dict[str, Any]) -> None:
        self.note_id = note["id"]
        label = Text()
        label.append(note["title"] or NEW_NOTE_TITLE, style="bold")
        label.append(f"  {format_date(note['updatedAt'])}", style="dim")
        body = preview(note.get("content", ""))
        if body:
            label.append(f"\n{body}", style="italic")
        super().__init__(Static(label))


class NotesTUI(App):
    """Terminal client for browsing and editing notes."""

    TITLE = "nodash"
    SUB_TITLE = "Notes"

    CSS = """
    #top-bar {
        height: 3;
    }

    #search {
        width: 1fr;
    }

    #body {
        height: 1fr;
    }

    #sidebar {
        width: 40;
        border-right: solid $primary;
    }

    #sidebar-title {
        text-style: bold;
        padding: 0 1;
    }

    #note-count {
        color: $text-muted;
        padding: 0 1;
    }

    #editor {
        width: 1fr;
        padding: 0 1;
    }

    #content {
        height: 1fr;
    }

    #editor-actions {
        height: 3;
    }

    #save-status {
        color: $text-muted;
        padding: 1 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "new_note", "New"),
        Binding("ctrl+a", "toggle_view", "Archived view"),
        Binding("ctrl+e", "archive_note", "Archive/Restore"),
        Binding("ctrl+d", "delete_note", "Delete"),
        Binding("ctrl+f", "focus_search", "Search"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, api: NotesAPI | None = None, debug: bool = False) -> None:
        super().__init__()
        self._debug = debug
        self.api = api or NotesAPI(APIClient(frontend="tui"))
        self.notes: list[dict[str, Any]] = []
        self.selected_id: str | None = None
        self.archived_view = False
        self.search_query = ""
        self.pending = PendingChanges()
        self._save_timer: Timer | None = None
        self._search_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="top-bar"):
            yield Input(placeholder="Search notes...", id="search")
            yield Button("Archived", id="toggle-archived")
            yield Button("New note", id="new-note", variant="primary")
        with Horizontal(id="body"):
            with Vertical(id="sidebar"):
                yield Label("All Notes", id="sidebar-title")
                yield Label("0 notes", id="note-count")
                yield ListView(id="note-list")
            with Vertical(id="editor"):
                yield Input(placeholder="Title", id="title", disabled=True)
                yield TextArea(id="content", disabled=True)
                with Horizontal(id="editor-actions"):
                    yield Button("Archive", id="archive", disabled=True)
                    yield Button("Delete", id="delete", variant="error", disabled=True)
                    yield Label("", id="save-status")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_notes()

    @property
    def selected_note(self) -> dict[str, Any] | None:
        for note in self.notes:
            if note["id"] == self.selected_id:
                return note
        return None

    def _report_error(self, action: str, error: Exception) -> None:
        log_with_source(logger, "tui", "error", f"Failed to {action}", error=str(error))
        message = error.message if isinstance(error, APIError) else str(error)
        self.notify(f"Failed to {action}: {message}", severity="error")

    # -- loading ---------------------------------------------------------

    @work(exclusive=True, group="fetch")
    async def refresh_notes(self) -> None:
        """Reload the sidebar for the current view and search query."""
        try:
            if self.search_query:
                response = await self.api.search_notes(self.search_query)
                notes = filter_for_view(response["data"], self.archived_view)
            else:
                response = await self.api.list_notes(
                    archived=self.archived_view,
                    sort_by="updatedAt",
                    sort_order="desc",
                )
                notes = response["data"]
        except (APIError, httpx.HTTPError) as e:
            self._report_error("load notes", e)
            return

        self.notes = notes
        await self._render_sidebar()
        if self.selected_note is None:
            self._show_note(None)

    async def _render_sidebar(self) -> None:
        title = "Archived Notes" if self.archived_view else "All Notes"
        self.query_one("#sidebar-title", Label).update(title)
        count = len(self.notes)
        self.query_one("#note-count", Label).update(f"{count} {'note' if count == 1 else 'notes'}")

        list_view = self.query_one("#note-list", ListView)
        await list_view.clear()
        await list_view.extend(NoteItem(note) for note in self.notes)
        for index, note in enumerate(self.notes):
            if note["id"] == self.selected_id:
                list_view.index = index
                break

    def _show_note(self, note: dict[str, Any] | None) -> None:
        """Load a note into the editor, or clear it."""
        self.selected_id = note["id"] if note else None
        title = self.query_one("#title", Input)
        content = self.query_one("#content", TextArea)
        archive = self.query_one("#archive", Button)
        delete = self.query_one("#delete", Button)

        title.value = note["title"] if note else ""
        content.load_text(note["content"] if note else "")
        for widget in (title, content, archive, delete):
            widget.disabled = note is None
        archive.label = "Restore" if note and note.get("archived") else "Archive"
        self.query_one("#save-status", Label).update("")

    # -- saving ----------------------------------------------------------

    def _schedule_save(self, field: str, value: str) -> None:
        note = self.selected_note
        if note is None:
            return
        if value == note.get(field) and not self.pending:
            return

        note[field] = value
        self.pending.record(note["id"], field, value)
        self.query_one("#save-status", Label).update("Unsaved changes")

        if self._save_timer is not None:
            self._save_timer.stop()
        self._save_timer = self.set_timer(SAVE_DELAY, self.save_pending)

    @work(group="save")
    async def save_pending(self) -> None:
        await self._flush()

    async def _flush(self) -> None:
        """Send the pending edits, if any."""
        if self._save_timer is not None:
            self._save_timer.stop()
            self._save_timer = None
        note_id, fields = self.pending.take()
        if note_id is None or not fields:
            return

        status = self.query_one("#save-status", Label)
        status.update("Saving...")
        try:
            saved = await self.api.update_note(note_id, **fields)
        except (APIError, httpx.HTTPError) as e:
            status.update("Save failed")
            self._report_error("save note", e)
            return

        for note in self.notes:
            if note["id"] == note_id:
                note["updatedAt"] = saved["updatedAt"]
        status.update("Saved")
        log_with_source(logger, "tui", "debug", "Note saved", note_id=note_id, fields=list(fields))

    @on(Input.Changed, "#title")
    def on_title_changed(self, event: Input.Changed) -> None:
        self._schedule_save("title", event.value)

    @on(TextArea.Changed, "#content")
    def on_content_changed(self, event: TextArea.Changed) -> None:
        self._schedule_save("content", event.text_area.text)

    # -- navigation ------------------------------------------------------

    @on(ListView.Selected, "#note-list")
    async def on_note_selected(self, event: ListView.Selected) -> None:
        if not isinstance(event.item, NoteItem) or event.item.note_id == self.selected_id:
            return
        await self._flush()
        for note in self.notes:
            if note["id"] == event.item.note_id:
                self._show_note(note)
                break

    @on(Input.Changed, "#search")
    def on_search_changed(self, event: Input.Changed) -> None:
        if self._search_timer is not None:
            self._search_timer.stop()
        query = event.value.strip()

        def _apply() -> None:
            self.search_query = query
            self.refresh_notes()

        self._search_timer = self.set_timer(SEARCH_DELAY, _apply)

    @on(Button.Pressed, "#toggle-archived")
    def on_toggle_pressed(self) -> None:
        self.run_action("toggle_view")

    @on(Button.Pressed, "#new-note")
    def on_new_pressed(self) -> None:
        self.run_action("new_note")

    @on(Button.Pressed, "#archive")
    def on_archive_pressed(self) -> None:
        self.run_action("archive_note")

    @on(Button.Pressed, "#delete")
    def on_delete_pressed(self) -> None:
        self.run_action("delete_note")

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    async def action_toggle_view(self) -> None:
        await self._flush()
        self.archived_view = not self.archived_view
        self.query_one("#toggle-archived", Button).label = (
            "Active" if self.archived_view else "Archived"
        )
        self._show_note(None)
        self.refresh_notes()

    # -- mutations -------------------------------------------------------

    async def action_new_note(self) -> None:
        await self._flush()
        try:
            note = await self.api.create_note(NEW_NOTE_TITLE, "")
        except (APIError, httpx.HTTPError) as e:
            self._report_error("create note", e)
            return

        log_with_source(logger, "tui", "info", "Note created", note_id=note["id"])
        if self.archived_view:
            self.archived_view = False
            self.query_one("#toggle-archived", Button).label = "Archived"
        self.notes.insert(0, note)
        self._show_note(note)
        self.refresh_notes()
        self.query_one("#title", Input).focus()

    async def action_archive_note(self) -> None:
        note = self.selected_note
        if note is None:
            return
        await self._flush()
        archived = not note.get("archived")
        try:
            await self.api.update_note(note["id"], archived=archived)
        except (APIError, httpx.HTTPError) as e:
            self._report_error("archive note" if archived else "restore note", e)
            return

        self.notify("Note archived" if archived else "Note restored")
        self._drop_selected()

    async def action_delete_note(self) -> None:
        note = self.selected_note
        if note is None:
            return
        self.pending.take()
        try:
            await self.api.delete_note(note["id"])
        except (APIError, httpx.HTTPError) as e:
            self._report_error("delete note", e)
            return

        log_with_source(logger, "tui", "info", "Note deleted", note_id=note["id"])
        self.notify("Note deleted")
        self._drop_selected()

    def _drop_selected(self) -> None:
        """Remove the selected note from the current view."""
        self.notes = [n for n in self.notes if n["id"] != self.selected_id]
        self._show_note(None)
        self.refresh_notes()

    async def action_quit(self) -> None:
        await self._flush()
        await self.api.client.close()
        self.exit()


def main() -> None:
    debug = "--debug" in sys.argv
    setup_logging(
        level="DEBUG" if debug else "WARNING",
        enable_console=False,
    )
    app = NotesTUI(debug=debug)
    app.run()


if __name__ == "__main__":
    main()
