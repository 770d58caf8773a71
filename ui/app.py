"""Note Assist — Streamlit note editor.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` and `notes.*` imports
# resolve regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="Note Assist",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded",
)

from notes.storage import DEFAULT_DATA_DIR, JsonFileStorage  # noqa: E402
from notes.store import NoteStore  # noqa: E402
from ui import api  # noqa: E402
from ui.assist import AssistSession  # noqa: E402
from ui.components import editor, notes_list  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)


def _ensure_session() -> None:
    """Build the note store and assist session once per browser session."""
    if "store" not in st.session_state:
        data_dir = os.getenv("NOTES_DATA_DIR", str(DEFAULT_DATA_DIR))
        st.session_state.store = NoteStore(JsonFileStorage(data_dir))
    if "assist" not in st.session_state:
        st.session_state.assist = AssistSession()


_ensure_session()

notes_list.render(st.session_state.store)
editor.render(st.session_state.store, st.session_state.assist)

# Footer
st.divider()
try:
    _mode = api.get_health().get("mode", "unknown")
except Exception:
    _mode = "offline"
_labels = {
    "provider": "AI assist connected",
    "demo": "AI assist in demo mode",
    "offline": "AI assist server unreachable",
}
st.caption(f"Note Assist | {_labels.get(_mode, _mode)}")
