"""Edit panel: changes stay in the EditSession draft until Save."""

from __future__ import annotations

import streamlit as st

from notes.app import NotesApp
from notes.session import EditSession
from notes.store import NoteError


def _close() -> None:
    st.session_state.pop("edit_session", None)
    st.session_state.pop("edit_rev", None)


def _bump() -> None:
    st.session_state.edit_rev = st.session_state.get("edit_rev", 0) + 1


def _remove_item(session: EditSession, index: int) -> None:
    session.remove_item(index)
    _bump()


def _add_item(session: EditSession, key: str) -> None:
    if session.add_item(st.session_state.get(key, "")):
        st.session_state[key] = ""
        _bump()


def render(app: NotesApp, session: EditSession) -> None:
    """Render the editor for the open session."""
    st.subheader("Edit Note")
    rev = st.session_state.get("edit_rev", 0)
    prefix = f"edit_{session.note_id}"

    session.title = st.text_input(
        "Title",
        value=session.title,
        key=f"{prefix}_title",
        placeholder="Checklist title" if session.is_checklist else "Note title",
    )

    if session.is_checklist:
        _render_items(session, f"{prefix}_{rev}")
    else:
        session.content = st.text_area(
            "Content",
            value=session.content,
            key=f"{prefix}_content",
            height=320,
            placeholder="Start writing...",
        )

    cancel_col, save_col = st.columns(2)
    if cancel_col.button("Cancel", use_container_width=True):
        _close()
        st.rerun()
    if save_col.button("Save", type="primary", use_container_width=True):
        try:
            session.commit(app)
        except NoteError as exc:
            st.error(f"Could not save note: {exc}")
            return
        _close()
        st.rerun()


def _render_items(session: EditSession, prefix: str) -> None:
    for i, item in enumerate(session.items):
        done_col, text_col, delete_col = st.columns([1, 8, 2])
        done = done_col.checkbox(
            "Done",
            value=item.completed,
            key=f"{prefix}_done_{i}",
            label_visibility="collapsed",
        )
        text = text_col.text_input(
            "Item",
            value=item.text,
            key=f"{prefix}_text_{i}",
            label_visibility="collapsed",
        )
        session.toggle_item(i, done)
        session.set_item_text(i, text)
        delete_col.button(
            "Delete",
            key=f"{prefix}_delete_{i}",
            on_click=_remove_item,
            args=(session, i),
        )

    new_key = f"{prefix}_new_item"
    input_col, add_col = st.columns([8, 3])
    input_col.text_input(
        "New item",
        key=new_key,
        placeholder="Add new item...",
        label_visibility="collapsed",
        on_change=_add_item,
        args=(session, new_key),
    )
    add_col.button(
        "Add Item",
        key=f"{prefix}_add",
        on_click=_add_item,
        args=(session, new_key),
    )
