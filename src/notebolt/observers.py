"""
Synchronous publish/subscribe used by the store to announce state changes.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeNotifier:
    """
    Holds a list of zero-argument callbacks and calls them on notify().

    Delivery happens on the caller's thread before notify() returns. Callbacks
    carry no payload; observers re-read whatever state they care about.
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register `callback`. Returns a function that removes it again."""
        self._listeners.append(callback)

        def _unsubscribe() -> None:
            self.unsubscribe(callback)

        return _unsubscribe

    def unsubscribe(self, callback: Listener) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def notify(self) -> None:
        """
        Call every subscriber. A failing subscriber does not stop delivery to
        the others; the first failure is re-raised once all have been called.
        """
        first_error: Optional[BaseException] = None
        for callback in list(self._listeners):
            try:
                callback()
            except Exception as exc:
                logger.warning("Change listener %r failed: %s", callback, exc)
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error
