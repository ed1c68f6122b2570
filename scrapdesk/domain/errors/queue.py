"""Notification queue errors."""

from __future__ import annotations

from scrapdesk.domain.exceptions import ScrapdeskError


class EmptyQueueError(ScrapdeskError):
    """Raised when pop_front() is called on an empty queue.

    This is a programming error in the caller, which must check
    ``is_empty`` first. It is never absorbed by the engine.
    """

    def __init__(self) -> None:
        super().__init__("pop_front() called on an empty notification queue")
