import pytest

from notebolt.categories import category_matches, default_emoji, normalize_category
from notebolt.datamodel import ALL_CATEGORY, Note
from notebolt.errors import ValidationError
from notebolt.search import note_matches, search_notes
from notebolt.validation import (
    validate_body,
    validate_category,
    validate_emoji,
    validate_title,
)


CATEGORIES = ("Work", "Personal", "Reading")


def test_validate_title_messages():
    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_title(None)
    with pytest.raises(ValidationError, match="at least 3"):
        validate_title(" ab ")
    with pytest.raises(ValidationError, match="at most 100"):
        validate_title("x" * 101)
    assert validate_title("  abc ") == "abc"


def test_validate_body_messages():
    with pytest.raises(ValidationError, match="Content cannot be empty"):
        validate_body("   ")
    with pytest.raises(ValidationError, match="at least 10"):
        validate_body("123456789")
    assert validate_body(" 1234567890 ") == "1234567890"


def test_validate_category_and_emoji():
    assert validate_category("Work", CATEGORIES) == "Work"
    with pytest.raises(ValidationError):
        validate_category("work", CATEGORIES)
    with pytest.raises(ValidationError):
        validate_category(ALL_CATEGORY, CATEGORIES)
    assert validate_emoji(" 💼 ") == "💼"
    with pytest.raises(ValidationError):
        validate_emoji("")


def test_normalize_category():
    assert normalize_category("  work ", CATEGORIES) == "Work"
    assert normalize_category("ALL", CATEGORIES) == ALL_CATEGORY
    assert normalize_category("Gardening", CATEGORIES) is None
    assert normalize_category("", CATEGORIES) is None


def test_category_matches():
    assert category_matches("Work", ALL_CATEGORY)
    assert category_matches("Work", None)
    assert category_matches("Work", "Work")
    assert not category_matches("Work", "Personal")


def test_default_emoji():
    assert default_emoji("Travel") == "✈️"
    assert default_emoji("Recipes") == "📝"


def test_search_notes_matches_any_text_field():
    notes = [
        Note(title="Groceries", body="Milk, eggs and bread", category="Personal", emoji="🏠"),
        Note(title="Standup", body="Talk about the release", category="Work", emoji="💼"),
    ]

    assert note_matches(notes[0], "MILK")
    assert not note_matches(notes[1], "milk")
    assert search_notes(notes, "work") == [notes[1]]
    assert search_notes(notes, "") == notes
    assert search_notes(notes, "   ") == notes
    assert search_notes(notes, "nothing here") == []
