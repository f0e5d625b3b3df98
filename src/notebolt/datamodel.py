"""
Core datamodel for the note store.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


ALL_CATEGORY = "All"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_note_id() -> str:
    return uuid.uuid4().hex


class Note(BaseModel):
    """A single note. Immutable: updates produce a new value with the same id."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_note_id, min_length=1)
    title: str
    body: str
    category: str
    emoji: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Naive timestamps are read as UTC."""
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)

    def formatted_timestamp(self, now: Optional[datetime] = None) -> str:
        """Human readable age of the note, e.g. '5 hours ago'."""
        now = now or utc_now()
        delta = now - self.created_at
        minutes = int(delta.total_seconds() // 60)
        if minutes < 60:
            return f"{minutes} minutes ago"
        hours = minutes // 60
        if hours < 24:
            return f"{hours} hours ago"
        days = hours // 24
        if days < 7:
            return f"{days} days ago"
        return f"{days // 7} weeks ago"

    @classmethod
    def sample(
        cls,
        title: str,
        body: str,
        category: str,
        emoji: str,
        hours_ago: int,
        now: Optional[datetime] = None,
        note_id: Optional[str] = None,
    ) -> "Note":
        """Build a seed note that pretends to be `hours_ago` hours old."""
        now = now or utc_now()
        return cls(
            id=note_id or new_note_id(),
            title=title,
            body=body,
            category=category,
            emoji=emoji,
            created_at=now - timedelta(hours=hours_ago),
        )

    def to_json(self) -> Dict[str, Any]:
        """Export record using the app's historical key names."""
        return {
            "id": self.id,
            "title": self.title,
            "snippet": self.body,
            "tag": self.category,
            "emoji": self.emoji,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Note":
        """Inverse of to_json."""
        try:
            return cls(
                id=data["id"],
                title=data["title"],
                body=data["snippet"],
                category=data["tag"],
                emoji=data["emoji"],
                created_at=data["createdAt"],
            )
        except KeyError as exc:
            raise ValidationError(f"Missing field in note record: {exc.args[0]}") from exc
        except (PydanticValidationError, TypeError) as exc:
            raise ValidationError(f"Malformed note record: {exc}") from exc
