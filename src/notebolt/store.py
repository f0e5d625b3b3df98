"""
In-memory note store: the single source of truth for notes, the active
category filter and the cached filtered view.

Every public operation is synchronous and runs under one re-entrant lock, so
callers on different threads observe a total order of mutations. Observers
registered through subscribe() are called after each successful state change,
before the mutating call returns.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from .categories import category_matches
from .config import DEFAULT_CATEGORIES
from .datamodel import ALL_CATEGORY, Note, new_note_id, utc_now
from .errors import NoteStoreError, NotFoundError, ValidationError
from .observers import ChangeNotifier, Listener
from .search import search_notes
from .validation import validate_body, validate_category, validate_emoji, validate_title

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"
UPDATABLE_FIELDS = ("title", "body", "category", "emoji")
_ID_ATTEMPTS = 16

SAMPLE_NOTES = [
    {
        "title": "Flutter UI Design Guidelines",
        "body": "Key principles for creating beautiful and responsive Flutter interfaces with proper state management...",
        "category": "Work",
        "emoji": "🎨",
        "hours_ago": 2,
    },
    {
        "title": "Meeting Notes - Q4 Planning",
        "body": "Discussed upcoming features, timeline adjustments, and resource allocation for the next quarter...",
        "category": "Work",
        "emoji": "📝",
        "hours_ago": 5,
    },
    {
        "title": "Book Ideas: The Creative Process",
        "body": "Exploring different approaches to creativity and how to maintain consistent inspiration...",
        "category": "Personal",
        "emoji": "💡",
        "hours_ago": 24,
    },
    {
        "title": "Travel Itinerary: Japan 2024",
        "body": "Tokyo -> Kyoto -> Osaka. Must visit temples, best ramen spots, and cultural experiences...",
        "category": "Personal",
        "emoji": "🗾",
        "hours_ago": 72,
    },
    {
        "title": "React vs Flutter Comparison",
        "body": "Performance benchmarks, development speed, and ecosystem analysis for mobile development...",
        "category": "Reading",
        "emoji": "⚡",
        "hours_ago": 168,
    },
]


class NoteStore:
    """Owns the note collection and everything derived from it."""

    def __init__(
        self,
        categories: Optional[Iterable[str]] = None,
        notifier: Optional[ChangeNotifier] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._categories = self._check_categories(
            DEFAULT_CATEGORIES if categories is None else categories
        )
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._clock = clock or utc_now
        self._id_factory = id_factory or new_note_id
        self._lock = threading.RLock()

        self._notes: List[Note] = []
        self._selected_category = ALL_CATEGORY
        self._last_operation = ""

        # Bumped on every mutation of _notes; the cache is keyed on it.
        self._version = 0
        self._cached_filtered: Optional[List[Note]] = None
        self._cached_category: Optional[str] = None
        self._cached_version: Optional[int] = None

    @staticmethod
    def _check_categories(categories: Iterable[str]) -> Tuple[str, ...]:
        seen = []
        for category in categories:
            category = (category or "").strip()
            if not category:
                raise ValidationError("Category labels cannot be empty", field="category")
            if category == ALL_CATEGORY:
                raise ValidationError(
                    f"'{ALL_CATEGORY}' is reserved for the unfiltered view",
                    field="category",
                )
            if category not in seen:
                seen.append(category)
        if not seen:
            raise ValidationError("At least one category is required", field="category")
        return tuple(seen)

    # ------------------------------------------------------------------
    # Observers

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        return self._notifier.subscribe(callback)

    def unsubscribe(self, callback: Listener) -> None:
        self._notifier.unsubscribe(callback)

    # ------------------------------------------------------------------
    # Read accessors

    @property
    def categories(self) -> Tuple[str, ...]:
        return self._categories

    @property
    def filter_options(self) -> Tuple[str, ...]:
        return (ALL_CATEGORY,) + self._categories

    @property
    def selected_category(self) -> str:
        return self._selected_category

    @property
    def last_operation(self) -> str:
        return self._last_operation

    @property
    def all_notes(self) -> List[Note]:
        with self._lock:
            return list(self._notes)

    @property
    def filtered_notes(self) -> List[Note]:
        """Notes under the active filter, newest first."""
        with self._lock:
            return list(self._filtered())

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def is_category_selected(self, category: str) -> bool:
        return self._selected_category == category

    def get_note_by_id(self, note_id: str) -> Optional[Note]:
        with self._lock:
            index = self._index_of(note_id)
            return self._notes[index] if index != -1 else None

    def note_exists(self, note_id: str) -> bool:
        with self._lock:
            return self._index_of(note_id) != -1

    def notes_by_category(self, category: str) -> List[Note]:
        with self._lock:
            return [n for n in self._notes if category_matches(n.category, category)]

    def category_stats(self) -> Dict[str, int]:
        """Note count per filter option, 'All' being the total."""
        with self._lock:
            stats = {ALL_CATEGORY: len(self._notes)}
            for category in self._categories:
                stats[category] = 0
            for note in self._notes:
                stats[note.category] += 1
            return stats

    def search(self, query: str) -> List[Note]:
        """
        Case-insensitive match over title, body and category within the
        filtered view. Does not touch store state, so repeated calls with the
        same query return the same notes until the next mutation.
        """
        with self._lock:
            return search_notes(self._filtered(), query or "")

    def performance_stats(self) -> Dict[str, Any]:
        with self._lock:
            cached = self._cache_is_fresh()
            stats = {
                "total_notes": len(self._notes),
                "selected_category": self._selected_category,
                "filtered_notes": len(self._filtered()),
                "cache": "CACHED" if cached else "UNCACHED",
                "last_operation": self._last_operation,
            }
        logger.debug("Store stats: %s", stats)
        return stats

    # ------------------------------------------------------------------
    # Mutations

    def create(self, title: str, body: str, category: str, emoji: str) -> Note:
        """
        Validate and insert a new note at the front of the collection.

        When a specific category is being viewed and the note belongs to a
        different one, the filter switches to the note's category so the new
        note is visible straight away.
        """
        with self._lock, self._recording("adding note"):
            fields = {
                "title": validate_title(title),
                "body": validate_body(body),
                "category": validate_category(category, self._categories),
                "emoji": validate_emoji(emoji),
            }
            note = Note(id=self._allocate_id(), created_at=self._clock(), **fields)
            self._notes.insert(0, note)
            if self._selected_category not in (ALL_CATEGORY, note.category):
                logger.debug(
                    "Switching filter %s -> %s to show new note",
                    self._selected_category,
                    note.category,
                )
                self._selected_category = note.category
            self._changed(f"Added note: {note.title}")
            return note

    def update(
        self,
        note_id: str,
        *,
        title: Optional[str] = None,
        body: Optional[str] = None,
        category: Optional[str] = None,
        emoji: Optional[str] = None,
    ) -> Note:
        """Replace the given fields of a note, keeping its id, created_at and position."""
        with self._lock, self._recording("updating note"):
            index = self._require(note_id)
            changes = self._validated_changes(
                {"title": title, "body": body, "category": category, "emoji": emoji}
            )
            updated = self._notes[index].model_copy(update=changes)
            self._notes[index] = updated
            self._changed(f"Updated note: {updated.title}")
            return updated

    def delete(self, note_id: str) -> None:
        with self._lock, self._recording("deleting note"):
            index = self._require(note_id)
            removed = self._notes.pop(index)
            self._changed(f"Deleted note: {removed.title}")

    def duplicate(self, note_id: str) -> Note:
        """Create a copy of a note titled '<title> (Copy)'."""
        with self._lock, self._recording("duplicating note"):
            source = self._notes[self._require(note_id)]
            return self.create(
                source.title + COPY_SUFFIX, source.body, source.category, source.emoji
            )

    def select_category(self, category: str) -> None:
        """Change the active filter. Re-selecting the active one is a silent no-op."""
        with self._lock, self._recording("selecting category"):
            if category == self._selected_category:
                return
            if category != ALL_CATEGORY:
                validate_category(category, self._categories)
            self._selected_category = category
            self._changed(f"Category filter: {category}")

    def delete_many(self, note_ids: Sequence[str]) -> int:
        """Remove several notes at once. Either all are removed or none."""
        with self._lock, self._recording("in bulk delete"):
            targets = set(note_ids)
            if not targets:
                raise ValidationError("No notes to delete")
            for note_id in targets:
                self._require(note_id)
            self._notes = [n for n in self._notes if n.id not in targets]
            self._changed(f"Deleted {len(targets)} notes")
            return len(targets)

    def update_many(self, updates: Mapping[str, Mapping[str, Optional[str]]]) -> int:
        """Apply per-note field updates atomically: every entry is checked first."""
        with self._lock, self._recording("in bulk update"):
            if not updates:
                raise ValidationError("No updates to apply")
            planned: Dict[int, Dict[str, str]] = {}
            for note_id, fields in updates.items():
                index = self._require(note_id)
                unknown = set(fields) - set(UPDATABLE_FIELDS)
                if unknown:
                    raise ValidationError(
                        f"Unknown note fields: {', '.join(sorted(unknown))}"
                    )
                planned[index] = self._validated_changes(fields)
            for index, changes in planned.items():
                self._notes[index] = self._notes[index].model_copy(update=changes)
            self._changed(f"Bulk updated {len(planned)} notes")
            return len(planned)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._notes)
            if removed:
                self._notes = []
                self._changed(f"Cleared all notes ({removed} deleted)")
            return removed

    def load_samples(self) -> int:
        """Replace the collection with the built-in sample notes."""
        with self._lock:
            self._notes = self._sample_notes()
            self._changed(f"Loaded {len(self._notes)} sample notes")
            return len(self._notes)

    def reset(self) -> None:
        """Back to the initial state: sample notes, no filter."""
        with self._lock:
            self._selected_category = ALL_CATEGORY
            self._notes = self._sample_notes()
            self._changed("Store reset")

    # ------------------------------------------------------------------
    # Import / export hooks

    def export_all(self) -> List[Note]:
        with self._lock:
            notes = list(self._notes)
            self._last_operation = f"Exported {len(notes)} notes"
        return notes

    def export_json(self) -> List[Dict[str, Any]]:
        return [note.to_json() for note in self.export_all()]

    def import_all(self, notes: Iterable[Note]) -> int:
        """
        Append notes (skipping ids already held) and re-sort the whole
        collection newest first. Returns how many notes were added.
        """
        with self._lock, self._recording("importing notes"):
            incoming = list(notes)
            if not incoming:
                raise ValidationError("No data to import")

            known = {n.id for n in self._notes}
            accepted: List[Note] = []
            for note in incoming:
                checked = self._checked_import(note)
                if checked.id in known:
                    logger.debug("Skipping already present note %s", checked.id)
                    continue
                known.add(checked.id)
                accepted.append(checked)

            if accepted:
                merged = self._notes + accepted
                merged.sort(key=lambda n: n.created_at, reverse=True)
                self._notes = merged
                self._changed(f"Imported {len(accepted)} notes")
            return len(accepted)

    def import_json(self, records: Iterable[Mapping[str, Any]]) -> int:
        with self._lock, self._recording("importing notes"):
            notes = [Note.from_json(record) for record in records]
        return self.import_all(notes)

    # ------------------------------------------------------------------
    # Internals

    def _filtered(self) -> List[Note]:
        if self._cache_is_fresh():
            return self._cached_filtered

        category = self._selected_category
        if category == ALL_CATEGORY:
            result = list(self._notes)
        else:
            result = [n for n in self._notes if n.category == category]

        self._cached_filtered = result
        self._cached_category = category
        self._cached_version = self._version
        return result

    def _cache_is_fresh(self) -> bool:
        return (
            self._cached_filtered is not None
            and self._cached_category == self._selected_category
            and self._cached_version == self._version
        )

    def _clear_cache(self) -> None:
        self._cached_filtered = None
        self._cached_category = None
        self._cached_version = None

    def _changed(self, description: str) -> None:
        self._version += 1
        self._clear_cache()
        self._last_operation = description
        logger.debug(description)
        self._notifier.notify()

    @contextmanager
    def _recording(self, action: str) -> Iterator[None]:
        version = self._version
        try:
            yield
        except NoteStoreError as exc:
            if self._version != version:
                # Raised by a listener after the change was applied.
                raise
            self._last_operation = f"Error {action}: {exc}"
            logger.debug("Error %s: %s", action, exc)
            raise

    def _index_of(self, note_id: str) -> int:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return -1

    def _require(self, note_id: str) -> int:
        index = self._index_of(note_id)
        if index == -1:
            raise NotFoundError(note_id)
        return index

    def _allocate_id(self) -> str:
        for _ in range(_ID_ATTEMPTS):
            note_id = self._id_factory()
            if note_id and self._index_of(note_id) == -1:
                return note_id
        raise NoteStoreError("Could not allocate a unique note id")

    def _validated_changes(self, fields: Mapping[str, Optional[str]]) -> Dict[str, str]:
        changes: Dict[str, str] = {}
        if fields.get("title") is not None:
            changes["title"] = validate_title(fields["title"])
        if fields.get("body") is not None:
            changes["body"] = validate_body(fields["body"])
        if fields.get("category") is not None:
            changes["category"] = validate_category(fields["category"], self._categories)
        if fields.get("emoji") is not None:
            changes["emoji"] = validate_emoji(fields["emoji"])
        return changes

    def _checked_import(self, note: Note) -> Note:
        return note.model_copy(
            update={
                "title": validate_title(note.title),
                "body": validate_body(note.body),
                "category": validate_category(note.category, self._categories),
                "emoji": validate_emoji(note.emoji),
            }
        )

    def _sample_notes(self) -> List[Note]:
        now = self._clock()
        notes = []
        for spec in SAMPLE_NOTES:
            if spec["category"] not in self._categories:
                continue
            notes.append(Note.sample(now=now, note_id=self._allocate_id(), **spec))
        return notes
