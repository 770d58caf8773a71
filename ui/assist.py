"""AI assist flow for the editor: call the backend, append the reply.

Kept free of Streamlit so the busy flag and the failure path can be
exercised without a browser.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from notes.store import NoteStore
from ui import api

logger = logging.getLogger(__name__)

Sender = Callable[[str, Optional[str]], dict[str, Any]]

SEPARATOR = "\n\n"


@dataclass
class AssistOutcome:
    """What happened to one AI assist submission."""

    status: str  # applied, empty, discarded, failed or skipped
    text: str = ""
    error: str | None = None
    demo: bool = False

    @property
    def applied(self) -> bool:
        return self.status == "applied"


class AssistSession:
    """Runs AI assist requests for one editor session, one at a time."""

    def __init__(self, send: Sender = api.assist) -> None:
        self._send = send
        self.busy = False

    def can_submit(self, store: NoteStore, prompt: str) -> bool:
        return bool(prompt) and store.selected is not None and not self.busy

    def run(self, store: NoteStore, prompt: str) -> AssistOutcome:
        """Send *prompt* with the selected note as context.

        On success the reply is appended to the note after a blank line.
        Failures are logged and leave the note untouched.
        """
        note = store.selected
        if note is None or not self.can_submit(store, prompt):
            return AssistOutcome(status="skipped")

        self.busy = True
        try:
            data = self._send(prompt, note.content)
        except (requests.RequestException, ValueError) as e:
            logger.error("AI assist error: %s", e)
            return AssistOutcome(status="failed", error=str(e))
        finally:
            self.busy = False

        result = data.get("result") if isinstance(data, dict) else None
        if not result:
            return AssistOutcome(status="empty")

        # The note may have been edited while the request was in flight.
        current = store.get(note.id)
        if current is None:
            return AssistOutcome(status="discarded", text=result)
        store.update(note.id, content=current.content + SEPARATOR + result)
        return AssistOutcome(
            status="applied", text=result, demo=bool(data.get("demo"))
        )
