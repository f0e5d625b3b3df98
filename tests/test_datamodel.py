from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from notebolt.datamodel import Note
from notebolt.errors import ValidationError


NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _note(**overrides):
    fields = dict(
        title="Trip Plan",
        body="Visit Kyoto and Osaka next spring",
        category="Personal",
        emoji="✈️",
        created_at=NOW,
    )
    fields.update(overrides)
    return Note(**fields)


def test_note_is_immutable():
    note = _note()

    with pytest.raises(PydanticValidationError):
        note.title = "Changed"


def test_formatted_timestamp():
    note = _note()

    assert note.formatted_timestamp(NOW + timedelta(minutes=5)) == "5 minutes ago"
    assert note.formatted_timestamp(NOW + timedelta(hours=3)) == "3 hours ago"
    assert note.formatted_timestamp(NOW + timedelta(days=2)) == "2 days ago"
    assert note.formatted_timestamp(NOW + timedelta(days=15)) == "2 weeks ago"


def test_sample_is_backdated():
    note = Note.sample("Old idea", "Something from last week", "Ideas", "💡", hours_ago=168, now=NOW)

    assert note.created_at == NOW - timedelta(hours=168)
    assert note.id


def test_json_uses_export_key_names():
    data = _note(id="abc123").to_json()

    assert data == {
        "id": "abc123",
        "title": "Trip Plan",
        "snippet": "Visit Kyoto and Osaka next spring",
        "tag": "Personal",
        "emoji": "✈️",
        "createdAt": NOW.isoformat(),
    }
    assert Note.from_json(data) == _note(id="abc123")


def test_from_json_reads_naive_timestamps_as_utc():
    data = _note(id="abc123").to_json()
    data["createdAt"] = "2024-05-01T12:00:00"

    assert Note.from_json(data).created_at == NOW


def test_from_json_rejects_bad_records():
    data = _note().to_json()
    del data["snippet"]
    with pytest.raises(ValidationError, match="snippet"):
        Note.from_json(data)

    data = _note().to_json()
    data["createdAt"] = "not a date"
    with pytest.raises(ValidationError):
        Note.from_json(data)

    with pytest.raises(ValidationError):
        Note.from_json("not a record")


def test_naive_created_at_is_treated_as_utc():
    note = _note(created_at=datetime(2024, 5, 1, 12, 0))

    assert note.created_at == NOW
    assert note.formatted_timestamp(NOW + timedelta(hours=2)) == "2 hours ago"
    assert "ago" in note.formatted_timestamp()
