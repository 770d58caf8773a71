"""Tests for the Streamlit editor, driven through streamlit.testing.AppTest."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from streamlit.testing.v1 import AppTest

from notes.storage import MemoryStorage
from notes.store import NoteStore
from ui.assist import SEPARATOR, AssistSession
from ui.components.editor import PROMPT_KEY, SUBMIT_KEY

APP_PATH = str(Path(__file__).resolve().parent.parent / "ui" / "app.py")


@pytest.fixture()
def store() -> NoteStore:
    store = NoteStore(MemoryStorage())
    note = store.create()
    store.update(note.id, content="Existing text")
    return store


def _start(store: NoteStore, send: MagicMock) -> AppTest:
    at = AppTest.from_file(APP_PATH, default_timeout=15)
    at.session_state["store"] = store
    at.session_state["assist"] = AssistSession(send)
    return at.run()


class TestAssistForm:
    def test_typed_prompt_submits_on_first_click(self, store: NoteStore) -> None:
        """Typing then submitting in one go sends the prompt that was typed."""
        send = MagicMock(return_value={"result": "More ideas"})
        at = _start(store, send)

        at.text_input(key=PROMPT_KEY).input("brainstorm ideas")
        at.button(key=SUBMIT_KEY).click().run()

        send.assert_called_once_with("brainstorm ideas", "Existing text")
        assert store.selected.content == "Existing text" + SEPARATOR + "More ideas"
        assert at.text_input(key=PROMPT_KEY).value == ""

    def test_submit_without_prompt_sends_nothing(self, store: NoteStore) -> None:
        send = MagicMock()
        at = _start(store, send)

        at.button(key=SUBMIT_KEY).click().run()

        send.assert_not_called()
        assert store.selected.content == "Existing text"

    def test_failure_leaves_note(self, store: NoteStore) -> None:
        send = MagicMock(side_effect=ValueError("bad json"))
        at = _start(store, send)

        at.text_input(key=PROMPT_KEY).input("expand")
        at.button(key=SUBMIT_KEY).click().run()

        assert store.selected.content == "Existing text"
        assert at.session_state["assist"].busy is False
