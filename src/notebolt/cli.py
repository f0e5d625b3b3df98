#!/usr/bin/env python3
"""
CLI interface for the note store.

Each invocation works on an in-memory session: sample notes (unless disabled)
plus any JSON export passed with --import.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .categories import default_emoji, normalize_category
from .config import load_config
from .datamodel import ALL_CATEGORY, Note
from .errors import NoteStoreError, ValidationError
from .logging_setup import configure_logging
from .store import NoteStore

logger = logging.getLogger(__name__)


class NotesCLI:
    """Command-line front end over a NoteStore."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        load_samples: Optional[bool] = None,
        store: Optional[NoteStore] = None,
    ):
        self.config = load_config(config_path)
        if store is None:
            store = NoteStore(categories=self.config.get("categories"))
        self.store = store

        if load_samples is None:
            load_samples = bool(self.config.get("load_samples", True))
        if load_samples:
            self.store.load_samples()

    def import_file(self, path: Path) -> int:
        """Load notes from a JSON export into the session."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ValidationError(f"Could not read {path}: {exc}") from exc
        if not isinstance(records, list):
            raise ValidationError(f"{path} does not contain a list of notes")

        count = self.store.import_json(records)
        logger.info("Imported %d notes from %s", count, path)
        return count

    def _resolve_category(self, value: Optional[str]) -> str:
        if value is None:
            return ALL_CATEGORY
        category = normalize_category(value, self.store.categories)
        if category is None:
            raise ValidationError(
                f"Unknown category: {value} (choose from {', '.join(self.store.filter_options)})",
                field="category",
            )
        return category

    def list_notes(self, category: Optional[str] = None):
        """List notes under a category filter."""
        self.store.select_category(self._resolve_category(category))
        notes = self.store.filtered_notes

        if not notes:
            print("No notes found.")
            return

        print(f"\n{self.store.selected_category} notes: {len(notes)}\n")
        self._print_notes(notes)

    def search_notes(self, query: str, category: Optional[str] = None):
        """Search notes in a category."""
        self.store.select_category(self._resolve_category(category))
        results = self.store.search(query)

        if not results:
            print("No results found.")
            return

        print(f"\nFound {len(results)} results:\n")
        self._print_notes(results)

    def get_note(self, note_id: str):
        """Display a note."""
        note = self.store.get_note_by_id(note_id)

        if not note:
            print(f"Note not found: {note_id}")
            return

        print(f"\nID: {note.id}")
        print(f"Title: {note.emoji} {note.title}")
        print(f"Category: {note.category}")
        print(f"Created: {note.created_at.strftime('%Y-%m-%d %H:%M:%S')} ({note.formatted_timestamp()})")
        print(f"\nContent:\n{'-' * 80}")
        print(note.body)
        print("-" * 80)

    def add_note(self, title: str, body: str, category: str, emoji: Optional[str] = None) -> Note:
        """Add a note to the session."""
        resolved = self._resolve_category(category)
        if resolved == ALL_CATEGORY:
            raise ValidationError("Pick a specific category for a new note", field="category")

        note = self.store.create(title, body, resolved, emoji or default_emoji(resolved))
        print(f"Created note: {note.id}")
        print(f"Title: {note.title}")
        return note

    def show_stats(self):
        """Print note counts per category."""
        stats = self.store.category_stats()
        width = max(len(name) for name in stats)
        for name, count in stats.items():
            print(f"{name.ljust(width)}  {count}")

    def export_notes(self):
        """Print the session as a JSON export."""
        print(json.dumps(self.store.export_json(), indent=2, ensure_ascii=False))

    @staticmethod
    def _print_notes(notes: List[Note]):
        for note in notes:
            print(f"{note.emoji} {note.title}")
            print(f"  ID: {note.id}")
            print(f"  Category: {note.category}")
            print(f"  Created: {note.formatted_timestamp()}")
            print()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="In-memory notes CLI")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    parser.add_argument(
        "--import",
        dest="import_path",
        type=Path,
        help="Load notes from a JSON export before running the command",
    )
    parser.add_argument(
        "--no-samples", action="store_true", help="Start without the sample notes"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # List
    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List notes")
    list_parser.add_argument("-c", "--category", help="Only show this category")

    # Search
    search_parser = subparsers.add_parser(
        "search", aliases=["find"], help="Search notes"
    )
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("-c", "--category", help="Only search this category")

    # Show
    show_parser = subparsers.add_parser("show", aliases=["get"], help="Display a note")
    show_parser.add_argument("note_id", help="Note ID")

    # Add
    add_parser = subparsers.add_parser(
        "add", aliases=["new"], help="Add a note to the session"
    )
    add_parser.add_argument("title", help="Note title")
    add_parser.add_argument("body", help="Note content")
    add_parser.add_argument("-c", "--category", default="Personal", help="Category")
    add_parser.add_argument("-e", "--emoji", help="Display emoji")
    add_parser.add_argument(
        "--json", action="store_true", help="Print the session as JSON afterwards"
    )

    subparsers.add_parser("stats", help="Show note counts per category")
    subparsers.add_parser("export", help="Print all notes as JSON")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        cli = NotesCLI(args.config, load_samples=False if args.no_samples else None)
    except NoteStoreError as exc:
        print(f"Error: {exc}")
        return 1
    configure_logging("DEBUG" if args.verbose else cli.config.get("log_level", "WARNING"))

    try:
        if args.import_path:
            cli.import_file(args.import_path)

        if args.command in ["list", "ls"]:
            cli.list_notes(args.category)
        elif args.command in ["search", "find"]:
            cli.search_notes(args.query, args.category)
        elif args.command in ["show", "get"]:
            cli.get_note(args.note_id)
        elif args.command in ["add", "new"]:
            cli.add_note(args.title, args.body, args.category, args.emoji)
            if args.json:
                cli.export_notes()
        elif args.command == "stats":
            cli.show_stats()
        elif args.command == "export":
            cli.export_notes()
    except NoteStoreError as exc:
        print(f"Error: {exc}")
        return 1
    finally:
        cli.store.performance_stats()

    return 0


if __name__ == "__main__":
    sys.exit(main())
