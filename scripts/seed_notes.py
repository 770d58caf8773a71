"""Seed the local note snapshot with realistic data for screenshots.

Creates a handful of notes through the NoteStore so the snapshot has the
same shape the editor writes. Existing notes are kept unless --reset is
given.

Usage:
    python scripts/seed_notes.py [--data-dir ~/.note_assist] [--reset]
"""

from __future__ import annotations

import argparse
import os
import sys

from notes.storage import DEFAULT_DATA_DIR, JsonFileStorage
from notes.store import NoteStore

# Each entry: (title, content). Created in order, so the last one ends up
# at the top of the list.
NOTES: list[tuple[str, str]] = [
    (
        "Reading List",
        "Papers to read:\n- Attention Is All You Need\n"
        "- ReAct: Synergizing Reasoning and Acting\n- Toolformer",
    ),
    (
        "Meeting Notes",
        "Discussed migrating the monolith to microservices. Key decision: "
        "use event-driven architecture for inter-service communication.",
    ),
    (
        "Project Ideas",
        "Build a code review assistant that runs static analysis and "
        "summarises findings for the pull request author.",
    ),
    ("Shopping list", ""),
]


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--data-dir",
        default=os.getenv("NOTES_DATA_DIR", str(DEFAULT_DATA_DIR)),
        help="Directory holding the notes snapshot",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete existing notes before seeding",
    )
    args = parser.parse_args()

    storage = JsonFileStorage(args.data_dir)
    if args.reset and storage.path.exists():
        storage.path.unlink()
        print(f"Removed {storage.path}")

    store = NoteStore(storage)
    print(f"Seeding {len(NOTES)} notes into {storage.path}")
    for title, content in NOTES:
        note = store.create()
        store.update(note.id, title=title, content=content)
        print(f"  + {title}")

    print(f"Done — {len(store)} notes in snapshot.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
