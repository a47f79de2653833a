"""
Note Manager MCP Server

Exposes the note operations (text notes and checklists) as tools via the
Model Context Protocol.  Runs on port 8001 with SSE transport.
"""

import atexit
import logging
from datetime import UTC, datetime

from mcp.server.fastmcp import FastMCP
from prometheus_client import start_http_server

from notes.app import NotesApp
from notes.config import settings
from notes.models import Note
from notes.store import NoteError

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger("note_manager")

# ---------------------------------------------------------------------------
# MCP server + application instance (started in __main__)
# ---------------------------------------------------------------------------
mcp = FastMCP("note-manager", host=settings.mcp_host, port=settings.mcp_port)
notes_app = NotesApp.from_settings(settings)


def _dump(note: Note) -> dict:
    return note.model_dump(mode="json", by_alias=True)


def _outcome(applied: bool, note_id: int) -> dict:
    note = notes_app.get(note_id)
    return {
        "applied": applied,
        "note": _dump(note) if note is not None else None,
    }


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool()
def create_note(note_type: str = "text") -> dict:
    """Create an empty note at the top of the board.

    Args:
        note_type: Either "text" for a free-text note or "checklist".

    Returns:
        Dictionary with the new note, or an error message for an unknown type.
    """
    try:
        note = notes_app.create(note_type)
    except NoteError as exc:
        logger.warning("Tool create_note rejected: %s", exc)
        return {"error": str(exc)}
    logger.info("Tool create_note invoked — id=%d type=%s", note.id, note.type)
    return {"note": _dump(note), "message": f"Note '{note.title}' created."}


@mcp.tool()
def list_notes() -> dict:
    """List every note in board order (first note is shown first).

    Returns:
        Dictionary with the notes and their count.
    """
    notes = notes_app.list_notes()
    logger.info("Tool list_notes invoked — found=%d", len(notes))
    return {"count": len(notes), "notes": [_dump(n) for n in notes]}


@mcp.tool()
def get_note(note_id: int) -> dict:
    """Fetch a single note by id.

    Returns:
        Dictionary with the note, or ``None`` when it does not exist.
    """
    note = notes_app.get(note_id)
    return {"note": _dump(note) if note is not None else None}


@mcp.tool()
def update_note(
    note_id: int,
    title: str,
    content: str | None = None,
    items: list[dict] | None = None,
) -> dict:
    """Replace a note's title and content.

    A blank title falls back to "Untitled Note" / "Untitled Checklist".
    When neither ``content`` nor ``items`` is given the current body is kept,
    so the tool can be used to rename a note.

    Args:
        note_id: Note to update.
        title: New title.
        content: New body for a text note (omit to keep the current body).
        items: Full item list for a checklist, each {"text", "completed"}
            (omit to keep the current items).

    Returns:
        Dictionary with ``applied`` and the updated note.
    """
    if items is not None:
        new_content = items
    elif content is not None:
        new_content = content
    else:
        current = notes_app.get(note_id)
        if current is None:
            return {"applied": False, "note": None}
        new_content = current.content
    try:
        applied = notes_app.update_title_and_content(note_id, title, new_content)
    except NoteError as exc:
        logger.warning("Tool update_note rejected: %s", exc)
        return {"applied": False, "error": str(exc)}
    return _outcome(applied, note_id)


@mcp.tool()
def delete_note(note_id: int) -> dict:
    """Delete a note. Deleting a missing note does nothing."""
    applied = notes_app.delete(note_id)
    logger.info("Tool delete_note invoked — id=%d applied=%s", note_id, applied)
    return {"applied": applied, "count": len(notes_app.list_notes())}


@mcp.tool()
def reorder_notes(dragged_id: int, target_id: int) -> dict:
    """Move one note to the position currently held by another.

    Returns:
        Dictionary with ``applied`` and the resulting id order.
    """
    applied = notes_app.reorder(dragged_id, target_id)
    return {"applied": applied, "order": [n.id for n in notes_app.list_notes()]}


@mcp.tool()
def add_checklist_item(note_id: int, text: str) -> dict:
    """Append an unchecked item to a checklist. Blank text is ignored."""
    return _outcome(notes_app.add_checklist_item(note_id, text), note_id)


@mcp.tool()
def toggle_checklist_item(note_id: int, index: int, completed: bool) -> dict:
    """Check or uncheck the item at ``index`` (0-based) of a checklist."""
    return _outcome(notes_app.toggle_checklist_item(note_id, index, completed), note_id)


@mcp.tool()
def set_checklist_item_text(note_id: int, index: int, text: str) -> dict:
    """Replace the text of the item at ``index`` (0-based) of a checklist."""
    return _outcome(notes_app.set_checklist_item_text(note_id, index, text), note_id)


@mcp.tool()
def delete_checklist_item(note_id: int, index: int) -> dict:
    """Remove the item at ``index`` (0-based); later items move up."""
    return _outcome(notes_app.delete_checklist_item(note_id, index), note_id)


@mcp.tool()
def health_check() -> dict:
    """Check whether the Note Manager server is healthy.

    Returns:
        Dictionary with server status, note count, and timestamp.
    """
    logger.info("Tool health_check invoked")
    return {
        "status": "healthy",
        "server": "note-manager",
        "total_notes": len(notes_app.list_notes()),
        "timestamp": datetime.now(UTC).isoformat(),
    }


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    notes_app.start()
    atexit.register(notes_app.close)
    if settings.metrics_port:
        start_http_server(settings.metrics_port)
        logger.info("Prometheus metrics on port %d", settings.metrics_port)
    logger.info("Starting Note Manager MCP server on port %d ...", settings.mcp_port)
    mcp.run(transport="sse")
