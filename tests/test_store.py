"""Unit tests for notes.store — the in-memory note collection."""

from __future__ import annotations

import itertools

import pytest

from notes.models import ChecklistItem, ChecklistNote, TextNote
from notes.store import InvalidNoteContentError, InvalidNoteTypeError, NoteStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clock():
    """Deterministic clock: every call returns a later timestamp."""
    counter = itertools.count(1)
    return lambda: f"2025-01-01T00:00:{next(counter):02d}+00:00"


def _store_with(count: int) -> NoteStore:
    """Store holding text notes with ids 1..count in order [1, 2, ..., count]."""
    notes = [
        TextNote(id=i, title=f"Note {i}", created_at="t", updated_at="t")
        for i in range(1, count + 1)
    ]
    return NoteStore(notes, next_id=count + 1, clock=_clock())


def _ids(store: NoteStore) -> list[int]:
    return [n.id for n in store.list_notes()]


@pytest.fixture()
def store() -> NoteStore:
    return NoteStore(clock=_clock())


@pytest.fixture()
def checklist(store: NoteStore) -> ChecklistNote:
    note = store.create("checklist")
    store.add_checklist_item(note.id, "milk")
    store.add_checklist_item(note.id, "eggs")
    return note


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreate:
    def test_text_defaults(self, store: NoteStore) -> None:
        note = store.create("text")
        assert isinstance(note, TextNote)
        assert note.id == 1
        assert note.title == "Untitled Note"
        assert note.content == ""
        assert note.created_at == note.updated_at

    def test_checklist_defaults(self, store: NoteStore) -> None:
        note = store.create("checklist")
        assert isinstance(note, ChecklistNote)
        assert note.title == "Untitled Checklist"
        assert note.content == []

    def test_inserted_at_front(self, store: NoteStore) -> None:
        first = store.create("text")
        second = store.create("checklist")
        assert store.list_notes()[0] is second
        assert _ids(store) == [second.id, first.id]

    def test_ids_strictly_increasing_across_deletes(self, store: NoteStore) -> None:
        issued = []
        for i in range(6):
            note = store.create("text" if i % 2 else "checklist")
            issued.append(note.id)
            if i % 3 == 0:
                store.delete(note.id)
        assert issued == sorted(set(issued))
        assert store.next_id == issued[-1] + 1

    def test_deleted_ids_not_reused(self, store: NoteStore) -> None:
        a = store.create("text")
        store.delete(a.id)
        b = store.create("text")
        assert b.id != a.id

    def test_unknown_type_rejected(self, store: NoteStore) -> None:
        with pytest.raises(InvalidNoteTypeError):
            store.create("drawing")
        assert store.list_notes() == []
        assert store.next_id == 1

    def test_non_string_type_rejected(self, store: NoteStore) -> None:
        with pytest.raises(InvalidNoteTypeError):
            store.create(["text"])  # type: ignore[arg-type]


class TestInitialState:
    def test_next_id_raised_above_existing_ids(self) -> None:
        notes = [TextNote(id=7, title="x")]
        assert NoteStore(notes, next_id=3).next_id == 8

    def test_duplicate_ids_rejected(self) -> None:
        notes = [TextNote(id=1, title="a"), TextNote(id=1, title="b")]
        with pytest.raises(ValueError):
            NoteStore(notes)

    def test_list_is_a_copy(self) -> None:
        store = _store_with(2)
        store.list_notes().clear()
        assert store.count == 2


# ---------------------------------------------------------------------------
# delete / update
# ---------------------------------------------------------------------------


class TestDelete:
    def test_delete_existing(self) -> None:
        store = _store_with(3)
        assert store.delete(2) is True
        assert _ids(store) == [1, 3]

    def test_delete_missing_is_noop(self) -> None:
        store = _store_with(3)
        before = store.list_notes()
        assert store.delete(99) is False
        assert store.list_notes() == before


class TestUpdateTitleAndContent:
    def test_updates_text_note(self, store: NoteStore) -> None:
        note = store.create("text")
        created = note.updated_at
        assert store.update_title_and_content(note.id, "  Plans  ", "body") is True
        assert note.title == "Plans"
        assert note.content == "body"
        assert note.updated_at != created
        assert note.created_at == created

    def test_blank_title_gets_type_default(self, store: NoteStore) -> None:
        text = store.create("text")
        todo = store.create("checklist")
        store.update_title_and_content(text.id, "   ", "x")
        store.update_title_and_content(todo.id, "", [])
        assert text.title == "Untitled Note"
        assert todo.title == "Untitled Checklist"

    def test_checklist_content_replaced_wholesale(self, checklist: ChecklistNote, store: NoteStore) -> None:
        items = [{"text": "bread", "completed": True}, ChecklistItem(text="jam")]
        store.update_title_and_content(checklist.id, "Shop", items)
        assert checklist.content == [
            ChecklistItem(text="bread", completed=True),
            ChecklistItem(text="jam", completed=False),
        ]

    def test_checklist_items_not_shared_with_caller(self, checklist: ChecklistNote, store: NoteStore) -> None:
        draft = [ChecklistItem(text="bread")]
        store.update_title_and_content(checklist.id, "Shop", draft)
        draft[0].text = "changed"
        assert checklist.content[0].text == "bread"

    def test_missing_note(self, store: NoteStore) -> None:
        assert store.update_title_and_content(42, "t", "c") is False

    def test_wrong_content_shape_rejected(self, store: NoteStore, checklist: ChecklistNote) -> None:
        text = store.create("text")
        with pytest.raises(InvalidNoteContentError):
            store.update_title_and_content(text.id, "t", [{"text": "a"}])
        with pytest.raises(InvalidNoteContentError):
            store.update_title_and_content(checklist.id, "t", "not items")
        with pytest.raises(InvalidNoteContentError):
            store.update_title_and_content(checklist.id, "t", [{"completed": True}])
        assert text.title == "Untitled Note"


# ---------------------------------------------------------------------------
# reorder
# ---------------------------------------------------------------------------


class TestReorder:
    def test_moves_forward_with_shift(self) -> None:
        store = _store_with(4)
        assert store.reorder(1, 3) is True
        assert _ids(store) == [2, 3, 1, 4]

    def test_moves_backward_with_shift(self) -> None:
        store = _store_with(4)
        store.reorder(4, 2)
        assert _ids(store) == [1, 4, 2, 3]

    def test_adjacent_round_trip_restores_order(self) -> None:
        store = _store_with(4)
        store.reorder(2, 3)
        store.reorder(3, 2)
        assert _ids(store) == [1, 2, 3, 4]

    def test_round_trip_not_identity_when_apart(self) -> None:
        store = _store_with(4)
        store.reorder(1, 3)
        store.reorder(3, 1)
        assert _ids(store) == [2, 1, 3, 4]

    @pytest.mark.parametrize("dragged, target", [(1, 1), (1, 99), (99, 1)])
    def test_noop_cases(self, dragged: int, target: int) -> None:
        store = _store_with(3)
        assert store.reorder(dragged, target) is False
        assert _ids(store) == [1, 2, 3]


# ---------------------------------------------------------------------------
# Checklist items
# ---------------------------------------------------------------------------


class TestChecklistItems:
    def test_scenario_add_and_toggle(self, store: NoteStore) -> None:
        note = store.create("checklist")
        store.add_checklist_item(note.id, "milk")
        store.add_checklist_item(note.id, "eggs")
        store.toggle_checklist_item(note.id, 0, True)
        assert store.list_notes()[0].content == [
            ChecklistItem(text="milk", completed=True),
            ChecklistItem(text="eggs", completed=False),
        ]

    def test_add_trims_and_ignores_blank(self, checklist: ChecklistNote, store: NoteStore) -> None:
        stamp = checklist.updated_at
        assert store.add_checklist_item(checklist.id, "") is False
        assert store.add_checklist_item(checklist.id, "   ") is False
        assert len(checklist.content) == 2
        assert checklist.updated_at == stamp
        store.add_checklist_item(checklist.id, "  bread ")
        assert checklist.content[-1].text == "bread"

    def test_toggle_out_of_bounds_changes_nothing(self, checklist: ChecklistNote, store: NoteStore) -> None:
        stamp = checklist.updated_at
        before = [item.model_copy() for item in checklist.content]
        assert store.toggle_checklist_item(checklist.id, 5, True) is False
        assert store.toggle_checklist_item(checklist.id, -1, True) is False
        assert checklist.updated_at == stamp
        assert checklist.content == before

    def test_set_item_text(self, checklist: ChecklistNote, store: NoteStore) -> None:
        stamp = checklist.updated_at
        assert store.set_checklist_item_text(checklist.id, 1, "duck eggs") is True
        assert checklist.content[1].text == "duck eggs"
        assert checklist.updated_at != stamp

    def test_delete_item_shifts_indices(self, checklist: ChecklistNote, store: NoteStore) -> None:
        store.add_checklist_item(checklist.id, "bread")
        assert store.delete_checklist_item(checklist.id, 0) is True
        assert [i.text for i in checklist.content] == ["eggs", "bread"]
        assert store.delete_checklist_item(checklist.id, 2) is False

    def test_item_ops_ignore_text_notes_and_missing_ids(self, store: NoteStore) -> None:
        text = store.create("text")
        for note_id in (text.id, 404):
            assert store.add_checklist_item(note_id, "x") is False
            assert store.toggle_checklist_item(note_id, 0, True) is False
            assert store.set_checklist_item_text(note_id, 0, "x") is False
            assert store.delete_checklist_item(note_id, 0) is False
        assert text.content == ""
