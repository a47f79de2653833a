"""Draft state for a note while it is open for editing."""

from __future__ import annotations

from typing import Protocol

from .models import ChecklistItem, ChecklistNote, Note


class _Updatable(Protocol):
    def update_title_and_content(self, note_id: int, title, content) -> bool: ...


class EditSession:
    """Working copy of one note's title and content.

    Nothing reaches the note until :meth:`commit`; discarding the session
    cancels the edit. Item operations mirror the store's checklist
    operations, including ignoring out-of-range indices.
    """

    def __init__(self, note_id: int, note_type: str, title: str, content) -> None:
        self.note_id = note_id
        self.note_type = note_type
        self.title = title
        self.content = content

    @classmethod
    def open(cls, note: Note) -> EditSession:
        if isinstance(note, ChecklistNote):
            content = [item.model_copy() for item in note.content]
        else:
            content = note.content
        return cls(note.id, note.type, note.title, content)

    @property
    def is_checklist(self) -> bool:
        return self.note_type == "checklist"

    @property
    def items(self) -> list[ChecklistItem]:
        return self.content if self.is_checklist else []

    def add_item(self, text: str) -> bool:
        value = (text or "").strip()
        if not self.is_checklist or not value:
            return False
        self.content.append(ChecklistItem(text=value))
        return True

    def remove_item(self, index: int) -> bool:
        if not self._has_item(index):
            return False
        del self.content[index]
        return True

    def toggle_item(self, index: int, completed: bool) -> bool:
        if not self._has_item(index):
            return False
        self.content[index].completed = bool(completed)
        return True

    def set_item_text(self, index: int, text: str) -> bool:
        if not self._has_item(index):
            return False
        self.content[index].text = text
        return True

    def commit(self, target: _Updatable) -> bool:
        """Write the draft through ``target`` (a NoteStore or NotesApp)."""
        return target.update_title_and_content(self.note_id, self.title, self.content)

    def _has_item(self, index: int) -> bool:
        return self.is_checklist and isinstance(index, int) and 0 <= index < len(self.content)
