"""RupertG Notes — Streamlit note board.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` and `notes.*` imports
# resolve regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="RupertG Notes",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="collapsed",
)

from notes.config import settings  # noqa: E402
from ui.components import board  # noqa: E402
from ui.state import get_notes_app  # noqa: E402

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)

board.render()

# Footer
st.divider()
st.caption(
    f"{len(get_notes_app().list_notes())} notes · saved locally in {settings.data_dir}"
)
