"""
Typed failures raised by the note store.
"""

from __future__ import annotations

from typing import Optional


class NoteStoreError(Exception):
    """Base class for every failure the store reports."""


class ValidationError(NoteStoreError):
    """Input failed a field constraint. The caller can correct it and retry."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(NoteStoreError):
    """An operation referenced a note id the store does not hold."""

    def __init__(self, note_id: str, message: Optional[str] = None):
        super().__init__(message or f"Note not found: {note_id}")
        self.note_id = note_id
