"""Queued notification domain model.

Wraps a TransactionEvent with the metadata the engine assigns at
enqueue time: a value-typed identifier, a priority tier, the enqueue
timestamp, an expiry and the processed flag.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from scrapdesk.domain.models.transaction_event import EventKind, TransactionEvent


class Priority(Enum):
    """Priority tier governing queue order and urgency.

    Tiers (highest first):
        HIGH: Operator must act (new transactions, large edits)
        MEDIUM: Notable edits
        LOW: Informational (deletions, small edits)
    """

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        """Numeric rank, larger is more urgent."""
        return _PRIORITY_RANK[self]

    def is_below(self, other: Priority) -> bool:
        """Check if this tier is strictly below ``other``."""
        return self.rank < other.rank


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


@dataclass(frozen=True, eq=True, order=False)
class NotificationId:
    """Identifier of one enqueue of one change.

    Two genuinely distinct events on the same transaction never collide:
    ``sequence`` is assigned by the queue and strictly increases, so even
    enqueues within the same clock tick get different identifiers.

    Attributes:
        transaction_id: Underlying transaction identifier.
        kind: Change kind of the enqueued event.
        enqueued_at: Enqueue timestamp.
        sequence: Queue-local enqueue counter.
    """

    transaction_id: str
    kind: EventKind
    enqueued_at: datetime
    sequence: int

    def __str__(self) -> str:
        return (
            f"{self.transaction_id}:{self.kind.value}:"
            f"{self.enqueued_at.isoformat()}:{self.sequence}"
        )


@dataclass(frozen=True, eq=True)
class QueuedNotification:
    """A transaction event waiting in the notification queue.

    ``processed`` is the only field that ever changes, and only through
    ``with_processed()``, which returns a new instance.

    Attributes:
        notification_id: Value-typed identifier for this enqueue.
        event: The wrapped transaction event.
        priority: Priority tier assigned by the classifier.
        enqueued_at: When the notification entered the queue.
        expires_at: When the notification stops being relevant.
        processed: True once the operator completed it.
    """

    notification_id: NotificationId
    event: TransactionEvent
    priority: Priority
    enqueued_at: datetime
    expires_at: datetime
    processed: bool = field(default=False)

    @property
    def transaction_id(self) -> str:
        return self.event.transaction_id

    @property
    def kind(self) -> EventKind:
        return self.event.kind

    @property
    def sort_key(self) -> tuple[int, datetime]:
        """Key ordering the queue by priority desc, then enqueue time asc."""
        return (-self.priority.rank, self.enqueued_at)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def with_processed(self) -> QueuedNotification:
        """Return a copy marked as processed.

        Idempotent: an already-processed notification is returned as-is.
        """
        if self.processed:
            return self
        return replace(self, processed=True)
