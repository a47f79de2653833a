"""In-memory note collection and every operation that mutates it.

The store does no I/O. Callers persist its state after a mutation and
re-render from :meth:`NoteStore.list_notes`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from .models import (
    NOTE_CLASSES,
    ChecklistItem,
    ChecklistNote,
    Note,
    TextNote,
    checklist_items_adapter,
    utc_now,
)

logger = logging.getLogger("note_manager.store")


class NoteError(ValueError):
    """An argument to a note operation was rejected."""


class InvalidNoteTypeError(NoteError):
    """The requested note type is neither ``text`` nor ``checklist``."""


class InvalidNoteContentError(NoteError):
    """Content does not have the shape required by the note's type."""


class NoteStore:
    """Ordered collection of notes plus the id counter.

    New notes go to the front of the collection. Operations that reference
    a missing note or an out-of-range checklist index change nothing and
    return ``False``: such references come from views rendered before a
    deletion.
    """

    def __init__(
        self,
        notes: Iterable[Note] = (),
        next_id: int = 1,
        clock: Callable[[], str] = utc_now,
    ) -> None:
        self._notes: list[Note] = list(notes)
        ids = [n.id for n in self._notes]
        if len(ids) != len(set(ids)):
            raise NoteError("Duplicate note ids in initial collection")
        self._next_id = max([next_id, 1, *(i + 1 for i in ids)])
        self._clock = clock

    @property
    def next_id(self) -> int:
        """Id the next created note will receive."""
        return self._next_id

    @property
    def count(self) -> int:
        """Number of notes in the collection."""
        return len(self._notes)

    def list_notes(self) -> list[Note]:
        """Return the notes in display order (a copy of the ordering)."""
        return list(self._notes)

    def get(self, note_id: int) -> Note | None:
        """Return the note with ``note_id``, or ``None``."""
        index = self._index_of(note_id)
        return None if index is None else self._notes[index]

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    def create(self, note_type: str) -> Note:
        """Create an empty note of ``note_type`` at the front of the list."""
        note_cls = NOTE_CLASSES.get(note_type) if isinstance(note_type, str) else None
        if note_cls is None:
            raise InvalidNoteTypeError(f"Unknown note type: {note_type!r}")

        now = self._clock()
        note = note_cls(
            id=self._next_id,
            title=note_cls.default_title,
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1
        self._notes.insert(0, note)
        logger.info("Created %s note %d", note.type, note.id)
        return note

    def delete(self, note_id: int) -> bool:
        """Remove a note. Unknown ids are ignored."""
        index = self._index_of(note_id)
        if index is None:
            logger.debug("delete: note %s not found", note_id)
            return False
        del self._notes[index]
        logger.info("Deleted note %d", note_id)
        return True

    def update_title_and_content(
        self, note_id: int, title: str | None, content: str | Sequence[Any]
    ) -> bool:
        """Commit an edit: new title (blank means default) and full content."""
        note = self.get(note_id)
        if note is None:
            logger.debug("update: note %s not found", note_id)
            return False

        note.content = self._coerce_content(note, content)
        note.title = (title or "").strip() or note.default_title
        note.updated_at = self._clock()
        return True

    def reorder(self, dragged_id: int, target_id: int) -> bool:
        """Move ``dragged_id`` to the position currently held by ``target_id``.

        The dragged note is removed and re-inserted at the target's index,
        so every note in between shifts by one; it is not a swap.
        """
        if dragged_id == target_id:
            return False
        source = self._index_of(dragged_id)
        destination = self._index_of(target_id)
        if source is None or destination is None:
            return False

        note = self._notes.pop(source)
        self._notes.insert(destination, note)
        return True

    # ------------------------------------------------------------------
    # Checklist items
    # ------------------------------------------------------------------

    def toggle_checklist_item(self, note_id: int, index: int, completed: bool) -> bool:
        note = self._checklist(note_id)
        if note is None or not _in_bounds(note.content, index):
            return False
        note.content[index].completed = bool(completed)
        note.updated_at = self._clock()
        return True

    def set_checklist_item_text(self, note_id: int, index: int, text: str) -> bool:
        note = self._checklist(note_id)
        if note is None or not _in_bounds(note.content, index):
            return False
        note.content[index].text = text
        note.updated_at = self._clock()
        return True

    def delete_checklist_item(self, note_id: int, index: int) -> bool:
        note = self._checklist(note_id)
        if note is None or not _in_bounds(note.content, index):
            return False
        del note.content[index]
        note.updated_at = self._clock()
        return True

    def add_checklist_item(self, note_id: int, text: str) -> bool:
        """Append an unchecked item. Blank text is ignored."""
        value = (text or "").strip()
        note = self._checklist(note_id)
        if note is None or not value:
            return False
        note.content.append(ChecklistItem(text=value))
        note.updated_at = self._clock()
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _index_of(self, note_id: int) -> int | None:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                return i
        return None

    def _checklist(self, note_id: int) -> ChecklistNote | None:
        note = self.get(note_id)
        if not isinstance(note, ChecklistNote):
            logger.debug("Ignoring item operation on note %s", note_id)
            return None
        return note

    @staticmethod
    def _coerce_content(note: Note, content: Any) -> str | list[ChecklistItem]:
        if isinstance(note, TextNote):
            if not isinstance(content, str):
                raise InvalidNoteContentError(
                    f"Text note {note.id} needs string content, got {type(content).__name__}"
                )
            return content

        if isinstance(content, str):
            raise InvalidNoteContentError(
                f"Checklist note {note.id} needs a sequence of items"
            )
        try:
            # Dump model instances so the note never shares items with the caller.
            return checklist_items_adapter.validate_python(
                [
                    item.model_dump() if isinstance(item, ChecklistItem) else item
                    for item in content
                ]
            )
        except (TypeError, ValidationError) as exc:
            raise InvalidNoteContentError(
                f"Invalid checklist items for note {note.id}: {exc}"
            ) from exc


def _in_bounds(items: list[ChecklistItem], index: int) -> bool:
    return isinstance(index, int) and 0 <= index < len(items)
