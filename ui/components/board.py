"""Board page: note cards, new-note picker, view dialog, delete and reorder."""

from __future__ import annotations

import streamlit as st

from notes.app import NotesApp
from notes.models import ChecklistNote, Note
from notes.session import EditSession
from ui.components import editor
from ui.components.preview import (
    card_html,
    completion_label,
    format_timestamp,
    literal_markdown,
)
from ui.state import get_notes_app

_COLUMNS = 3

# (button label, note type)
_NOTE_TYPES: list[tuple[str, str]] = [
    ("📝 Text note", "text"),
    ("☑️ Checklist", "checklist"),
]


def render() -> None:
    """Render the board, or the editor while an edit session is open."""
    app = get_notes_app()

    st.title("📝 RupertG Notes")

    session: EditSession | None = st.session_state.get("edit_session")
    if session is not None:
        editor.render(app, session)
        return

    _render_new_note(app)

    notes = app.list_notes()
    if not notes:
        st.info("**No Notes Yet** — click *New note* to create your first note.")
        return

    cols = st.columns(_COLUMNS)
    for i, note in enumerate(notes):
        with cols[i % _COLUMNS]:
            _render_card(app, note, notes)


# ---------------------------------------------------------------------------
# Callbacks (run before the rerun they trigger)
# ---------------------------------------------------------------------------


def _create(app: NotesApp, note_type: str) -> None:
    note = app.create(note_type)
    st.session_state.edit_session = EditSession.open(note)


def _open_editor(app: NotesApp, note_id: int) -> None:
    note = app.get(note_id)
    if note is not None:
        st.session_state.edit_session = EditSession.open(note)


def _ask_delete(note_id: int) -> None:
    st.session_state.confirm_delete = note_id


def _confirm_delete(app: NotesApp, note_id: int) -> None:
    app.delete(note_id)
    st.session_state.pop("confirm_delete", None)


def _cancel_delete() -> None:
    st.session_state.pop("confirm_delete", None)


def _move(app: NotesApp, note_id: int, key: str) -> None:
    target = st.session_state.get(key)
    if target is not None:
        app.reorder(note_id, target)
    st.session_state[key] = None


def _toggle(app: NotesApp, note_id: int, index: int, key: str) -> None:
    app.toggle_checklist_item(note_id, index, st.session_state[key])


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_new_note(app: NotesApp) -> None:
    with st.popover("➕ New note"):
        st.markdown("**Choose note type**")
        for label, note_type in _NOTE_TYPES:
            st.button(
                label,
                key=f"new_{note_type}",
                use_container_width=True,
                on_click=_create,
                args=(app, note_type),
            )


def _render_card(app: NotesApp, note: Note, notes: list[Note]) -> None:
    with st.container(border=True):
        st.markdown(card_html(note), unsafe_allow_html=True)

        view_col, edit_col, delete_col = st.columns(3)
        if view_col.button("👁️ View", key=f"view_{note.id}", use_container_width=True):
            _view_dialog(app, note.id)
        edit_col.button(
            "✏️ Edit",
            key=f"edit_{note.id}",
            use_container_width=True,
            on_click=_open_editor,
            args=(app, note.id),
        )
        delete_col.button(
            "🗑️ Delete",
            key=f"delete_{note.id}",
            use_container_width=True,
            on_click=_ask_delete,
            args=(note.id,),
        )

        if st.session_state.get("confirm_delete") == note.id:
            st.warning("Are you sure you want to delete this note?")
            yes_col, no_col = st.columns(2)
            yes_col.button(
                "Delete",
                key=f"confirm_delete_{note.id}",
                type="primary",
                on_click=_confirm_delete,
                args=(app, note.id),
            )
            no_col.button("Cancel", key=f"cancel_delete_{note.id}", on_click=_cancel_delete)

        if len(notes) > 1:
            titles = {n.id: n.title for n in notes}
            key = f"move_{note.id}"
            st.selectbox(
                "Move",
                options=[None, *(n.id for n in notes if n.id != note.id)],
                format_func=lambda i: "Move to position of…" if i is None else titles[i],
                key=key,
                label_visibility="collapsed",
                on_change=_move,
                args=(app, note.id, key),
            )


@st.dialog("View Note", width="large")
def _view_dialog(app: NotesApp, note_id: int) -> None:
    note = app.get(note_id)
    if note is None:
        st.write("This note no longer exists.")
        return

    st.header(literal_markdown(note.title), anchor=False)
    st.caption(f"Created: {format_timestamp(note.created_at)}")
    st.caption(f"Last updated: {format_timestamp(note.updated_at)}")

    if isinstance(note, ChecklistNote):
        st.markdown(f"**{completion_label(note)}**")
        for i, item in enumerate(note.content):
            key = f"view_item_{note.id}_{i}"
            st.checkbox(
                literal_markdown(item.text) or "(empty item)",
                value=item.completed,
                key=key,
                on_change=_toggle,
                args=(app, note.id, i, key),
            )
    elif note.content:
        st.text(note.content)
    else:
        st.caption("*No content*")

    if st.button("✏️ Edit", type="primary"):
        _open_editor(app, note.id)
        st.rerun()
