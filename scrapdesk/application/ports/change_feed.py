"""Change feed port.

Defines the contract for the realtime transport that pushes
insert/update/delete changes of transaction rows. Delivery is
at-least-once and unordered; the engine tolerates duplicates and
reordering, so implementations need not.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SubscriptionStatus(Enum):
    """Lifecycle status reported by a feed subscription.

    Statuses:
        SUBSCRIBED: Channel is live and delivering changes
        CHANNEL_ERROR: Channel failed
        TIMED_OUT: Subscribe handshake timed out
        CLOSED: Channel was closed
    """

    SUBSCRIBED = "SUBSCRIBED"
    CHANNEL_ERROR = "CHANNEL_ERROR"
    TIMED_OUT = "TIMED_OUT"
    CLOSED = "CLOSED"

    @property
    def is_connected(self) -> bool:
        return self is SubscriptionStatus.SUBSCRIBED


@dataclass(frozen=True, eq=True)
class RawChange:
    """One change exactly as the transport delivered it.

    Attributes:
        kind: Raw change kind ("INSERT", "UPDATE", "DELETE").
        table: Table the change belongs to.
        before: Row before the change (DELETE, some UPDATEs), if sent.
        after: Row after the change (INSERT, UPDATE), if sent.
    """

    kind: str
    table: str
    before: Mapping[str, Any] | None = field(default=None)
    after: Mapping[str, Any] | None = field(default=None)


ChangeHandler = Callable[[RawChange], None]
StatusHandler = Callable[[SubscriptionStatus], None]


class FeedSubscriptionProtocol(ABC):
    """Handle to one live feed subscription."""

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivering changes and status updates.

        Must be idempotent: calling it more than once is a no-op.
        """
        ...


class ChangeFeedProtocol(ABC):
    """Abstract interface for the realtime change feed.

    Handlers are invoked on the event loop thread. They must not be
    invoked after the returned subscription has been unsubscribed.
    """

    @abstractmethod
    def subscribe(
        self,
        channel: str,
        table: str,
        handler: ChangeHandler,
        status_handler: StatusHandler,
        event_filter: str = "*",
    ) -> FeedSubscriptionProtocol:
        """Subscribe to row changes of one table.

        Args:
            channel: Channel name for this subscription.
            table: Table whose changes should be delivered.
            handler: Called once per delivered change.
            status_handler: Called on every subscription status change.
            event_filter: Change kinds to deliver, "*" for all.

        Returns:
            Subscription handle used to unsubscribe.
        """
        ...
