"""Application instance: one note store wired to its persistence.

Presentation layers construct a :class:`NotesApp`, call :meth:`start`
once, route every user action through it and call :meth:`close` (or
:meth:`flush`) when the page is hidden or the process exits.

One instance may be shared by several threads (Streamlit runs each browser
session on its own thread). A re-entrant lock makes each mutation and the
save that follows it a single step.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any

from .config import Settings
from .kv import FileKeyValueStore
from .metrics import NOTE_OPERATIONS, NOTES_STORED
from .models import Note, utc_now
from .storage import NoteStorage
from .store import NoteError, NoteStore

logger = logging.getLogger("note_manager.app")


class NotesApp:
    """Runs note operations and saves after each one that changed state."""

    def __init__(self, storage: NoteStorage, clock: Callable[[], str] = utc_now) -> None:
        self._storage = storage
        self._clock = clock
        self._store: NoteStore | None = None
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> NotesApp:
        """Build an app backed by the file store in ``settings.data_dir``."""
        kv = FileKeyValueStore(
            settings.data_dir,
            quota_bytes=settings.storage_quota_bytes or None,
        )
        return cls(NoteStorage(kv, key=settings.storage_key))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> NoteStore:
        if self._store is None:
            raise RuntimeError("NotesApp has not been started")
        return self._store

    def start(self) -> NotesApp:
        """Load stored state and write it back (persists the sample note)."""
        with self._lock:
            notes, next_id = self._storage.load()
            self._store = NoteStore(notes, next_id, clock=self._clock)
            self.flush()
            logger.info("Notes app started with %d notes", self._store.count)
        return self

    def flush(self) -> bool:
        """Save the current state unconditionally."""
        with self._lock:
            store = self.store
            NOTES_STORED.set(store.count)
            return self._storage.save(store.list_notes(), store.next_id)

    def close(self) -> None:
        with self._lock:
            if self._store is None:
                return
            self.flush()
            self._store = None
        logger.info("Notes app closed")

    def __enter__(self) -> NotesApp:
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_notes(self) -> list[Note]:
        with self._lock:
            return self.store.list_notes()

    def get(self, note_id: int) -> Note | None:
        with self._lock:
            return self.store.get(note_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, note_type: str) -> Note:
        with self._lock:
            try:
                note = self.store.create(note_type)
            except NoteError:
                NOTE_OPERATIONS.labels(operation="create", result="rejected").inc()
                raise
            self._record("create", True)
            return note

    def delete(self, note_id: int) -> bool:
        with self._lock:
            return self._record("delete", self.store.delete(note_id))

    def update_title_and_content(
        self, note_id: int, title: str | None, content: str | Sequence[Any]
    ) -> bool:
        with self._lock:
            try:
                applied = self.store.update_title_and_content(note_id, title, content)
            except NoteError:
                NOTE_OPERATIONS.labels(operation="update", result="rejected").inc()
                raise
            return self._record("update", applied)

    def reorder(self, dragged_id: int, target_id: int) -> bool:
        with self._lock:
            return self._record("reorder", self.store.reorder(dragged_id, target_id))

    def toggle_checklist_item(self, note_id: int, index: int, completed: bool) -> bool:
        with self._lock:
            applied = self.store.toggle_checklist_item(note_id, index, completed)
            return self._record("toggle_item", applied)

    def set_checklist_item_text(self, note_id: int, index: int, text: str) -> bool:
        with self._lock:
            applied = self.store.set_checklist_item_text(note_id, index, text)
            return self._record("set_item_text", applied)

    def delete_checklist_item(self, note_id: int, index: int) -> bool:
        with self._lock:
            applied = self.store.delete_checklist_item(note_id, index)
            return self._record("delete_item", applied)

    def add_checklist_item(self, note_id: int, text: str) -> bool:
        with self._lock:
            applied = self.store.add_checklist_item(note_id, text)
            return self._record("add_item", applied)

    def _record(self, operation: str, applied: bool) -> bool:
        # Caller holds the lock.
        NOTE_OPERATIONS.labels(
            operation=operation, result="applied" if applied else "ignored"
        ).inc()
        if applied:
            self.flush()
        return applied
