"""
Keyword search over notes: case-insensitive substring match.
"""

from __future__ import annotations

from typing import Iterable, List

from .datamodel import Note


def note_matches(note: Note, query: str) -> bool:
    """True when `query` occurs in the note's title, body or category."""
    needle = query.lower()
    return (
        needle in note.title.lower()
        or needle in note.body.lower()
        or needle in note.category.lower()
    )


def search_notes(notes: Iterable[Note], query: str) -> List[Note]:
    """
    Filter `notes` down to those matching `query`, keeping their order.
    A blank query returns every note.
    """
    notes = list(notes)
    if not query or not query.strip():
        return notes
    return [note for note in notes if note_matches(note, query)]
