"""Editor pane: title, body and the AI assist bar."""

from __future__ import annotations

import streamlit as st

from notes.store import NoteStore
from ui.assist import AssistSession

PROMPT_KEY = "ai_prompt"
SUBMIT_KEY = "ai_submit"
ASSIST_FORM_KEY = "ai_assist_form"


def _widget_key(field: str, note_id: str) -> str:
    return f"{field}_{note_id}"


def _seed(key: str, value: str) -> None:
    """Give a widget its initial value the first time a note is opened."""
    if key not in st.session_state:
        st.session_state[key] = value


def _sync_field(store: NoteStore, note_id: str, field: str) -> None:
    store.update(note_id, **{field: st.session_state[_widget_key(field, note_id)]})


def _run_assist(store: NoteStore, session: AssistSession) -> None:
    """Form callback: run the request and push the new body into the widget."""
    prompt = st.session_state.get(PROMPT_KEY, "")
    outcome = session.run(store, prompt)

    if outcome.applied and store.selected is not None:
        note = store.selected
        st.session_state[_widget_key("content", note.id)] = note.content
        if outcome.demo:
            st.toast("Demo response — no API key configured on the server.")
    elif outcome.status == "failed":
        st.toast("AI assist failed. Your note was not changed.")

    st.session_state[PROMPT_KEY] = ""


def _render_placeholder() -> None:
    st.write("")
    st.markdown(
        "<div style='text-align:center; opacity:0.5; padding-top:8rem'>"
        "<h1>💾</h1>"
        "<p>Select a note or create a new one to get started</p>"
        "</div>",
        unsafe_allow_html=True,
    )


def render(store: NoteStore, session: AssistSession) -> None:
    """Render the editor for the selected note."""
    note = store.selected
    if note is None:
        _render_placeholder()
        return

    title_key = _widget_key("title", note.id)
    content_key = _widget_key("content", note.id)
    _seed(title_key, note.title)
    _seed(content_key, note.content)

    st.text_input(
        "Title",
        key=title_key,
        placeholder="Note title...",
        label_visibility="collapsed",
        on_change=_sync_field,
        args=(store, note.id, "title"),
    )
    st.text_area(
        "Content",
        key=content_key,
        height=420,
        placeholder="Start writing your notes here...",
        label_visibility="collapsed",
        on_change=_sync_field,
        args=(store, note.id, "content"),
    )

    st.divider()
    # A form commits the prompt together with the submit, and Enter submits.
    with st.form(ASSIST_FORM_KEY, border=False):
        prompt_col, button_col = st.columns([5, 1])
        with prompt_col:
            st.text_input(
                "AI prompt",
                key=PROMPT_KEY,
                placeholder="Ask AI to brainstorm, expand, or improve your notes...",
                label_visibility="collapsed",
                disabled=session.busy,
            )
        with button_col:
            st.form_submit_button(
                "✨ AI Assist",
                key=SUBMIT_KEY,
                use_container_width=True,
                disabled=session.busy,
                on_click=_run_assist,
                args=(store, session),
            )
