"""Process-wide notes app shared by every Streamlit session."""

from __future__ import annotations

import atexit

import streamlit as st

from notes.app import NotesApp
from notes.config import settings


@st.cache_resource
def get_notes_app() -> NotesApp:
    """Start the app once per server process and flush it on exit."""
    app = NotesApp.from_settings(settings).start()
    atexit.register(app.close)
    return app
