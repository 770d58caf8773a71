"""In-memory note collection mirrored to a snapshot storage."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Callable, Iterator

from .models import Note, parse_timestamp, to_timestamp
from .storage import SnapshotStorage

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"title", "content"})


def _utcnow() -> datetime:
    return datetime.now(UTC)


class NoteStore:
    """Ordered notes plus the current selection.

    Notes are kept newest-first. Every mutation that leaves the collection
    non-empty writes the whole collection to ``storage``.
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._notes: dict[str, Note] = {}
        for note in storage.load():
            if note.id in self._notes:
                logger.warning("Duplicate note id %s in snapshot, keeping the first", note.id)
                continue
            self._notes[note.id] = note
        self._selected_id: str | None = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def notes(self) -> list[Note]:
        """All notes in display order."""
        return list(self._notes.values())

    @property
    def selected(self) -> Note | None:
        """The note currently open for editing, if any."""
        if self._selected_id is None:
            return None
        return self._notes.get(self._selected_id)

    def get(self, note_id: str) -> Note | None:
        return self._notes.get(note_id)

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._notes

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self) -> Note:
        """Create an empty note at the top of the list and select it."""
        now = self._clock()
        stamp = to_timestamp(now)
        note = Note(
            id=self._next_id(now),
            created_at=stamp,
            updated_at=stamp,
        )
        self._notes = {note.id: note, **self._notes}
        self._selected_id = note.id
        logger.debug("Created note %s", note.id)
        self._persist()
        return note

    def update(self, note_id: str, **fields: Any) -> Note | None:
        """Apply title/content changes to a note. Unknown ids are ignored."""
        illegal = set(fields) - EDITABLE_FIELDS
        if illegal:
            raise ValueError(f"Cannot update note fields: {sorted(illegal)}")

        note = self._notes.get(note_id)
        if note is None:
            return None

        # Rebuilt through validation so a bad value never reaches the snapshot.
        updated = Note.model_validate(
            {**note.model_dump(), **fields, "updated_at": self._touch(note)}
        )
        # Reassigning an existing key keeps its position.
        self._notes[note_id] = updated
        self._persist()
        return updated

    def delete(self, note_id: str) -> bool:
        """Remove a note. Returns False when the id is unknown."""
        if note_id not in self._notes:
            return False
        del self._notes[note_id]
        if self._selected_id == note_id:
            self._selected_id = None
        logger.debug("Deleted note %s", note_id)
        self._persist()
        return True

    def select(self, note: Note | str | None) -> None:
        """Set the note open for editing. Does not touch storage."""
        if note is None:
            self._selected_id = None
            return
        note_id = note.id if isinstance(note, Note) else note
        if note_id not in self._notes:
            raise KeyError(note_id)
        self._selected_id = note_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _next_id(self, now: datetime) -> str:
        candidate = int(now.timestamp() * 1000)
        while str(candidate) in self._notes:
            candidate += 1
        return str(candidate)

    def _touch(self, note: Note) -> str:
        """Fresh updatedAt, never earlier than the note's current one."""
        now = self._clock()
        previous = parse_timestamp(note.updated_at)
        return to_timestamp(max(now, previous))

    def _persist(self) -> None:
        if not self._notes:
            return
        self._storage.save(self._notes.values())
