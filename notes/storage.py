"""Persistence of the note collection under a single key-value store key."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from pydantic import ValidationError

from .kv import KeyValueStore
from .metrics import PERSISTENCE_FAILURES
from .models import Note, NoteState, TextNote, utc_now

logger = logging.getLogger("note_manager.storage")

DEFAULT_STORAGE_KEY = "rupertg_notes"

SAMPLE_TITLE = "Welcome to RupertG Notes!"
SAMPLE_CONTENT = (
    "This is a sample note to get you started. You can create text notes "
    "and checklists. Your notes are automatically saved and will persist "
    "when you reload the page."
)


def sample_note(now: str) -> TextNote:
    """The welcome note shown when there is no stored state."""
    return TextNote(
        id=1,
        title=SAMPLE_TITLE,
        content=SAMPLE_CONTENT,
        created_at=now,
        updated_at=now,
    )


class NoteStorage:
    """Reads and writes the full note state under one storage key.

    Storage problems never reach the caller: a failed load falls back to
    the sample note, a failed save is logged and reported as ``False``.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], str] = utc_now,
    ) -> None:
        self._kv = kv
        self._key = key
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> tuple[list[Note], int]:
        """Return ``(notes, next_id)`` from storage, or the sample state."""
        try:
            raw = self._kv.get_item(self._key)
        except OSError as exc:
            logger.error("Failed to read notes: %s — starting with sample note", exc)
            PERSISTENCE_FAILURES.labels(operation="load").inc()
            return self._bootstrap()

        if not raw:
            logger.info("No stored notes under '%s' — starting with sample note", self._key)
            return self._bootstrap()

        try:
            state = NoteState.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Failed to load notes: %s — starting with sample note", exc)
            PERSISTENCE_FAILURES.labels(operation="load").inc()
            return self._bootstrap()

        notes = _unique_by_id(state.notes)
        next_id = max([state.next_id, 1, *(n.id + 1 for n in notes)])
        if next_id != state.next_id:
            logger.warning(
                "Stored nextId %d would reissue ids — using %d", state.next_id, next_id
            )
        logger.info("Loaded %d notes from '%s'", len(notes), self._key)
        return notes, next_id

    def save(self, notes: Sequence[Note], next_id: int) -> bool:
        """Write ``{notes, nextId, version}``. Returns False if the write failed."""
        try:
            state = NoteState(notes=list(notes), next_id=next_id)
            self._kv.set_item(self._key, state.model_dump_json(by_alias=True))
        except (OSError, ValueError) as exc:
            logger.error("Failed to save notes: %s", exc)
            PERSISTENCE_FAILURES.labels(operation="save").inc()
            return False
        logger.debug("Saved %d notes under '%s'", len(state.notes), self._key)
        return True

    def _bootstrap(self) -> tuple[list[Note], int]:
        return [sample_note(self._clock())], 2


def _unique_by_id(notes: list[Note]) -> list[Note]:
    seen: set[int] = set()
    unique: list[Note] = []
    for note in notes:
        if note.id in seen:
            logger.warning("Dropping duplicate stored note id %d", note.id)
            continue
        seen.add(note.id)
        unique.append(note)
    return unique
