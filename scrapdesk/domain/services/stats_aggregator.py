"""Queue statistics aggregation."""

from __future__ import annotations

from collections.abc import Iterable

from scrapdesk.domain.models.notification import Priority, QueuedNotification
from scrapdesk.domain.models.queue_stats import QueueStats


def aggregate_stats(notifications: Iterable[QueuedNotification]) -> QueueStats:
    """Compute QueueStats from the full set of queued notifications.

    Always a full recount; callers never patch stats incrementally.

    Args:
        notifications: Current queue contents.

    Returns:
        QueueStats for exactly these notifications.
    """
    counts = {Priority.HIGH: 0, Priority.MEDIUM: 0, Priority.LOW: 0}
    processed = 0
    for notification in notifications:
        counts[notification.priority] += 1
        if notification.processed:
            processed += 1

    return QueueStats(
        total=sum(counts.values()),
        high=counts[Priority.HIGH],
        medium=counts[Priority.MEDIUM],
        low=counts[Priority.LOW],
        processed=processed,
    )
