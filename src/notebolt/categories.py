from __future__ import annotations

import re
from typing import Iterable, Optional

from .datamodel import ALL_CATEGORY


_CATEGORY_WS = re.compile(r"\s+")

DEFAULT_EMOJI = {
    "Work": "💼",
    "Personal": "🏠",
    "Reading": "📚",
    "Ideas": "💡",
    "Travel": "✈️",
    "Health": "🩺",
}
FALLBACK_EMOJI = "📝"


def _fold(value: str) -> str:
    return _CATEGORY_WS.sub(" ", value.strip()).casefold()


def normalize_category(value: Optional[str], categories: Iterable[str]) -> Optional[str]:
    """
    Map a user-typed label onto the closed category set.
    - Case-insensitive
    - Collapses inner whitespace
    - "all" maps to the All sentinel
    Returns None when nothing matches.
    """
    if not value or not value.strip():
        return None
    folded = _fold(value)
    if folded == ALL_CATEGORY.casefold():
        return ALL_CATEGORY
    for category in categories:
        if _fold(category) == folded:
            return category
    return None


def category_matches(note_category: str, filter_category: Optional[str]) -> bool:
    """
    Returns True when a note with `note_category` is visible under the filter.
    - filter_category="All" or None matches everything
    """
    if not filter_category or filter_category == ALL_CATEGORY:
        return True
    return note_category == filter_category


def default_emoji(category: str) -> str:
    return DEFAULT_EMOJI.get(category, FALLBACK_EMOJI)
