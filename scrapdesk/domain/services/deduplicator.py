"""Near-duplicate detection for redelivered feed events.

The feed may redeliver the same change within one burst (transport
retries). A short window collapses those without losing a legitimately
fast sequence of distinct edits.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from scrapdesk.domain.models.notification import QueuedNotification

DEFAULT_DEDUP_WINDOW = timedelta(milliseconds=1000)


def is_duplicate(
    queued: Iterable[QueuedNotification],
    candidate: QueuedNotification,
    window: timedelta = DEFAULT_DEDUP_WINDOW,
) -> bool:
    """Check whether a candidate notification duplicates one already queued.

    A candidate is a duplicate when some queued notification has the same
    transaction id AND the same kind AND an enqueue time strictly closer
    than ``window`` (in either direction, since delivery is unordered).

    Args:
        queued: Current queue contents.
        candidate: The notification about to be inserted.
        window: Dedup window.

    Returns:
        True if the candidate should be dropped.
    """
    for existing in queued:
        if existing.transaction_id != candidate.transaction_id:
            continue
        if existing.kind is not candidate.kind:
            continue
        if abs(candidate.enqueued_at - existing.enqueued_at) < window:
            return True
    return False
