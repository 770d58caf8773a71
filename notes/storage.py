"""Snapshot storage for the note collection.

The whole collection is kept as a single entry: a JSON array of note
records stored under a fixed key. ``JsonFileStorage`` keeps that entry in
``<directory>/<key>.json``; ``MemoryStorage`` keeps it in process.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Protocol

from pydantic import ValidationError

from .models import Note, NoteList

logger = logging.getLogger(__name__)

STORAGE_KEY = "notes"
DEFAULT_DATA_DIR = Path.home() / ".note_assist"


class SnapshotStorage(Protocol):
    """Capability used by the note store to read and write its snapshot."""

    def load(self) -> list[Note]: ...

    def save(self, notes: Iterable[Note]) -> None: ...


def dump_snapshot(notes: Iterable[Note]) -> bytes:
    """Serialize *notes* into the snapshot format."""
    return NoteList.dump_json(list(notes), by_alias=True)


def parse_snapshot(raw: str | bytes, source: str = "snapshot") -> list[Note]:
    """Deserialize a snapshot. Malformed data yields an empty list."""
    try:
        return NoteList.validate_json(raw)
    except ValidationError as exc:
        logger.error(
            "Malformed note snapshot in %s (%d errors) — starting empty",
            source,
            exc.error_count(),
        )
        return []


class JsonFileStorage:
    """Keeps the snapshot in a JSON file named after the storage key."""

    def __init__(
        self, directory: Path | str = DEFAULT_DATA_DIR, key: str = STORAGE_KEY
    ) -> None:
        self._path = Path(directory).expanduser() / f"{key}.json"

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Note]:
        """Read the snapshot from disk. Missing or corrupt files load as empty."""
        if not self._path.exists():
            logger.info("No snapshot found at %s — starting fresh", self._path)
            return []
        notes = parse_snapshot(self._path.read_bytes(), source=str(self._path))
        logger.info("Loaded %d notes from %s", len(notes), self._path)
        return notes

    def save(self, notes: Iterable[Note]) -> None:
        """Overwrite the snapshot with *notes*."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".json.tmp")
        tmp.write_bytes(dump_snapshot(notes))
        os.replace(tmp, self._path)


class MemoryStorage:
    """In-process snapshot, for tests and throwaway sessions."""

    def __init__(self, snapshot: str | bytes | None = None) -> None:
        self.snapshot = snapshot
        self.saves = 0

    def load(self) -> list[Note]:
        if self.snapshot is None:
            return []
        return parse_snapshot(self.snapshot, source="memory")

    def save(self, notes: Iterable[Note]) -> None:
        self.snapshot = dump_snapshot(notes)
        self.saves += 1
