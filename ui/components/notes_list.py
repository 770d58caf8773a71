"""Sidebar: note list with create, select and delete controls."""

from __future__ import annotations

import streamlit as st

from notes.models import Note, parse_timestamp
from notes.store import NoteStore

EMPTY_PREVIEW = "Empty note"
_PREVIEW_CHARS = 60


def preview(note: Note, limit: int = _PREVIEW_CHARS) -> str:
    """First line of the note body, truncated for the list."""
    text = note.content.strip()
    if not text:
        return EMPTY_PREVIEW
    first_line = text.splitlines()[0]
    if len(first_line) > limit:
        return first_line[: limit - 1].rstrip() + "…"
    return first_line


def format_date(timestamp: str) -> str:
    """Calendar date of a stored timestamp, e.g. ``Mar 04, 2025``."""
    return parse_timestamp(timestamp).strftime("%b %d, %Y")


def _delete(store: NoteStore, note_id: str) -> None:
    store.delete(note_id)


def render(store: NoteStore) -> None:
    """Render the note list in the sidebar."""
    with st.sidebar:
        st.button(
            "➕ New Note",
            use_container_width=True,
            type="primary",
            on_click=store.create,
        )
        st.divider()

        if not len(store):
            st.caption("No notes yet.")
            return

        selected = store.selected
        for note in store.notes:
            is_selected = selected is not None and selected.id == note.id
            with st.container(border=True):
                left, right = st.columns([5, 1])
                with left:
                    st.button(
                        note.title or "(untitled)",
                        key=f"select_{note.id}",
                        type="primary" if is_selected else "tertiary",
                        on_click=store.select,
                        args=(note.id,),
                    )
                    st.caption(preview(note))
                    st.caption(format_date(note.updated_at))
                with right:
                    st.button(
                        "🗑️",
                        key=f"delete_{note.id}",
                        help="Delete note",
                        on_click=_delete,
                        args=(store, note.id),
                    )
