"""Notification queue domain model.

NotificationQueue is an immutable, tuple-backed priority queue. Every
operation returns a new queue instead of editing in place, so a reader
holding a queue always sees one fully consistent snapshot.

Ordering invariant:
    Entries are sorted by (priority desc, enqueued_at asc). The sort is
    stable, so entries with equal keys keep their insertion order. The
    sort runs on insert only; removals keep the relative order of the
    remaining entries.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

from scrapdesk.domain.errors.queue import EmptyQueueError
from scrapdesk.domain.models.notification import (
    NotificationId,
    Priority,
    QueuedNotification,
)
from scrapdesk.domain.models.queue_policy import DEFAULT_QUEUE_POLICY, QueuePolicy
from scrapdesk.domain.models.queue_stats import QueueStats
from scrapdesk.domain.models.transaction_event import TransactionEvent
from scrapdesk.domain.services.classifier import classify
from scrapdesk.domain.services.deduplicator import is_duplicate
from scrapdesk.domain.services.stats_aggregator import aggregate_stats


@dataclass(frozen=True, eq=True)
class InsertResult:
    """Outcome of NotificationQueue.insert().

    Attributes:
        queue: The queue after the insert (unchanged when duplicate).
        notification: The candidate notification that was built.
        accepted: False when the candidate was dropped as a duplicate.
        became_active: True when the queue went from empty to non-empty.
    """

    queue: NotificationQueue
    notification: QueuedNotification
    accepted: bool
    became_active: bool = False


@dataclass(frozen=True, eq=True)
class NotificationQueue:
    """Ordered collection of pending notifications.

    Attributes:
        items: Notifications in display order.
        next_sequence: Sequence number the next accepted insert receives.
        policy: Classification, dedup and expiry rules for inserts.
    """

    items: tuple[QueuedNotification, ...] = field(default=())
    next_sequence: int = field(default=0)
    policy: QueuePolicy = field(default=DEFAULT_QUEUE_POLICY, compare=False)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[QueuedNotification]:
        return iter(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def head(self) -> QueuedNotification | None:
        return self.items[0] if self.items else None

    def ids(self) -> tuple[NotificationId, ...]:
        return tuple(item.notification_id for item in self.items)

    def get(self, notification_id: NotificationId) -> QueuedNotification | None:
        for item in self.items:
            if item.notification_id == notification_id:
                return item
        return None

    def index_of(self, notification_id: NotificationId) -> int | None:
        for index, item in enumerate(self.items):
            if item.notification_id == notification_id:
                return index
        return None

    def insert(self, event: TransactionEvent, now: datetime) -> InsertResult:
        """Classify, dedup-check and insert an event.

        Args:
            event: Canonical transaction event.
            now: Enqueue timestamp.

        Returns:
            InsertResult. On a duplicate the returned queue is ``self``.
        """
        priority = classify(
            event,
            high_threshold=self.policy.high_threshold,
            medium_threshold=self.policy.medium_threshold,
        )
        candidate = QueuedNotification(
            notification_id=NotificationId(
                transaction_id=event.transaction_id,
                kind=event.kind,
                enqueued_at=now,
                sequence=self.next_sequence,
            ),
            event=event,
            priority=priority,
            enqueued_at=now,
            expires_at=now + self.policy.expiry_for(event.kind),
        )

        if is_duplicate(self.items, candidate, self.policy.dedup_window):
            return InsertResult(queue=self, notification=candidate, accepted=False)

        # sorted() is stable: equal keys keep insertion order.
        items = tuple(
            sorted((*self.items, candidate), key=lambda item: item.sort_key)
        )
        new_queue = NotificationQueue(
            items=items,
            next_sequence=self.next_sequence + 1,
            policy=self.policy,
        )
        return InsertResult(
            queue=new_queue,
            notification=candidate,
            accepted=True,
            became_active=self.is_empty,
        )

    def pop_front(self) -> tuple[NotificationQueue, QueuedNotification]:
        """Remove and return the head notification.

        Raises:
            EmptyQueueError: If the queue is empty. Callers must check
                ``is_empty`` first.
        """
        if not self.items:
            raise EmptyQueueError()
        return self._with_items(self.items[1:]), self.items[0]

    def mark_processed(self, notification_id: NotificationId) -> NotificationQueue:
        """Mark a notification processed.

        Tolerates a notification that has already been removed: the
        queue is returned unchanged.
        """
        index = self.index_of(notification_id)
        if index is None:
            return self
        item = self.items[index]
        if item.processed:
            return self
        items = self.items[:index] + (item.with_processed(),) + self.items[index + 1 :]
        return self._with_items(items)

    def remove(self, notification_id: NotificationId) -> NotificationQueue:
        """Remove one notification by id; absent ids are a no-op."""
        if self.index_of(notification_id) is None:
            return self
        return self._with_items(
            tuple(item for item in self.items if item.notification_id != notification_id)
        )

    def clear_all(self) -> NotificationQueue:
        return self._with_items(())

    def clear_below(self, priority: Priority) -> NotificationQueue:
        """Remove every notification strictly below ``priority``."""
        return self._with_items(
            tuple(item for item in self.items if not item.priority.is_below(priority))
        )

    def expire(self, now: datetime) -> NotificationQueue:
        """Drop unprocessed notifications whose expiry has passed."""
        return self._with_items(
            tuple(
                item
                for item in self.items
                if item.processed or not item.is_expired(now)
            )
        )

    def stats(self) -> QueueStats:
        return aggregate_stats(self.items)

    def _with_items(self, items: tuple[QueuedNotification, ...]) -> NotificationQueue:
        if items == self.items:
            return self
        return NotificationQueue(
            items=items,
            next_sequence=self.next_sequence,
            policy=self.policy,
        )


def empty_queue(policy: QueuePolicy = DEFAULT_QUEUE_POLICY) -> NotificationQueue:
    """Create an empty queue governed by ``policy``."""
    return NotificationQueue(policy=policy)
