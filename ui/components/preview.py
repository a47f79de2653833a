"""HTML fragments for note cards.

No Streamlit calls here, so the markup can be checked in plain unit tests.
Every piece of note text goes through ``escape_html`` before it is placed
in markup.
"""

from __future__ import annotations

import re
from datetime import datetime

from notes.markup import escape_html
from notes.models import ChecklistNote, Note

PREVIEW_ITEMS = 4  # checklist items shown on a card

_MARKDOWN_SPECIALS = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$:])")


def format_timestamp(iso: str) -> str:
    """Render an ISO-8601 timestamp as e.g. ``Mar 4, 2025 at 09:30``."""
    try:
        dt = datetime.fromisoformat(iso)
    except ValueError:
        return escape_html(iso)
    return f"{dt:%b} {dt.day}, {dt.year} at {dt:%H:%M}"


def literal_markdown(text: str) -> str:
    """Backslash-escape Markdown syntax so Streamlit shows ``text`` verbatim."""
    return _MARKDOWN_SPECIALS.sub(r"\\\1", text)


def completion_label(note: ChecklistNote) -> str:
    return f"{note.completed_count}/{len(note.content)} items completed"


def _muted(text: str) -> str:
    return f'<div class="note-preview" style="opacity: 0.6; font-style: italic;">{text}</div>'


def _content_preview(note: Note) -> str:
    if not isinstance(note, ChecklistNote):
        if not note.content:
            return _muted("Empty note")
        return (
            f'<div class="note-preview">{escape_html(note.content)}</div>'
            f'<div class="note-meta">{len(note.content)} characters</div>'
        )

    items = note.content
    if not items:
        return _muted("No items")

    lines = [
        f'<div class="checklist-preview-item">{"☑" if item.completed else "☐"} '
        f"{'<s>' if item.completed else ''}{escape_html(item.text)}"
        f"{'</s>' if item.completed else ''}</div>"
        for item in items[:PREVIEW_ITEMS]
    ]
    if len(items) > PREVIEW_ITEMS:
        lines.append(
            f'<div class="note-meta">+ {len(items) - PREVIEW_ITEMS} more items</div>'
        )
    lines.append(
        f'<div class="checklist-stats">{note.completed_count}/{len(items)} completed</div>'
    )
    return "".join(lines)


def card_html(note: Note) -> str:
    """Markup for one card on the board: title, last update, preview."""
    return (
        f'<div class="note-card {note.type}-note" data-id="{note.id}">'
        f'<div class="note-title"><strong>{escape_html(note.title)}</strong></div>'
        f'<div class="note-meta">{format_timestamp(note.updated_at)}</div>'
        f'<div class="note-content">{_content_preview(note)}</div>'
        "</div>"
    )
