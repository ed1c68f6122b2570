"""Queue policy value object.

Bundles the tunables the queue applies on insert (classification
thresholds, dedup window and expiry horizons) so the domain layer
stays free of configuration loading. Built from NotificationEngineConfig
by the application layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal

from scrapdesk.domain.models.transaction_event import EventKind
from scrapdesk.domain.services.classifier import (
    DEFAULT_HIGH_AMOUNT_THRESHOLD,
    DEFAULT_MEDIUM_AMOUNT_THRESHOLD,
)
from scrapdesk.domain.services.deduplicator import DEFAULT_DEDUP_WINDOW

DEFAULT_EXPIRY = timedelta(hours=24)
DEFAULT_DELETE_EXPIRY = timedelta(hours=1)


@dataclass(frozen=True, eq=True)
class QueuePolicy:
    """Rules applied by NotificationQueue.insert().

    Attributes:
        high_threshold: UPDATE amounts above this classify HIGH.
        medium_threshold: UPDATE amounts above this classify MEDIUM.
        dedup_window: Window within which same transaction+kind collapses.
        default_expiry: Lifetime of INSERT/UPDATE notifications.
        delete_expiry: Lifetime of DELETE notifications.
    """

    high_threshold: Decimal = field(default=DEFAULT_HIGH_AMOUNT_THRESHOLD)
    medium_threshold: Decimal = field(default=DEFAULT_MEDIUM_AMOUNT_THRESHOLD)
    dedup_window: timedelta = field(default=DEFAULT_DEDUP_WINDOW)
    default_expiry: timedelta = field(default=DEFAULT_EXPIRY)
    delete_expiry: timedelta = field(default=DEFAULT_DELETE_EXPIRY)

    def __post_init__(self) -> None:
        """Validate policy values."""
        if self.medium_threshold >= self.high_threshold:
            raise ValueError(
                f"medium_threshold ({self.medium_threshold}) must be less than "
                f"high_threshold ({self.high_threshold})"
            )
        if self.dedup_window < timedelta(0):
            raise ValueError("dedup_window must be non-negative")
        if self.default_expiry <= timedelta(0) or self.delete_expiry <= timedelta(0):
            raise ValueError("expiry horizons must be positive")

    def expiry_for(self, kind: EventKind) -> timedelta:
        if kind is EventKind.DELETE:
            return self.delete_expiry
        return self.default_expiry


DEFAULT_QUEUE_POLICY = QueuePolicy()
