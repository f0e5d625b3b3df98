"""
Field rules shared by note creation, update and import.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .errors import ValidationError


TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
BODY_MIN_LENGTH = 10


def validate_title(raw: Optional[str]) -> str:
    """Return the trimmed title or raise ValidationError."""
    title = (raw or "").strip()
    if not title:
        raise ValidationError("Title cannot be empty", field="title")
    if len(title) < TITLE_MIN_LENGTH:
        raise ValidationError(
            f"Title must be at least {TITLE_MIN_LENGTH} characters long", field="title"
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters long", field="title"
        )
    return title


def validate_body(raw: Optional[str]) -> str:
    """Return the trimmed body or raise ValidationError."""
    body = (raw or "").strip()
    if not body:
        raise ValidationError("Content cannot be empty", field="body")
    if len(body) < BODY_MIN_LENGTH:
        raise ValidationError(
            f"Content must be at least {BODY_MIN_LENGTH} characters long", field="body"
        )
    return body


def validate_category(value: Optional[str], categories: Iterable[str]) -> str:
    allowed = tuple(categories)
    if value not in allowed:
        raise ValidationError(
            f"Unknown category: {value!r} (expected one of {', '.join(allowed)})",
            field="category",
        )
    return value


def validate_emoji(value: Optional[str]) -> str:
    emoji = (value or "").strip()
    if not emoji:
        raise ValidationError("Emoji cannot be empty", field="emoji")
    return emoji
