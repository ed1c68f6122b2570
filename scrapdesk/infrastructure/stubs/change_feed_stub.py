"""Stub implementation of ChangeFeedProtocol for testing.

An in-memory feed: tests push changes and status updates into it and
the stub fans them out to the live subscriptions of the matching table.

Usage in tests:
    feed = ChangeFeedStub()
    engine = NotificationEngine(feed=feed, ...)
    await engine.start()

    feed.set_status("transactions", SubscriptionStatus.SUBSCRIBED)
    feed.emit(RawChange(kind="INSERT", table="transactions", after={...}))

    assert len(engine.queue) == 1
"""

from __future__ import annotations

from dataclasses import dataclass, field

from scrapdesk.application.ports.change_feed import (
    ChangeFeedProtocol,
    ChangeHandler,
    FeedSubscriptionProtocol,
    RawChange,
    StatusHandler,
    SubscriptionStatus,
)


@dataclass
class StubSubscription(FeedSubscriptionProtocol):
    """Subscription handle recorded by ChangeFeedStub.

    Attributes:
        channel: Channel name passed to subscribe().
        table: Subscribed table.
        handler: Change callback.
        status_handler: Status callback.
        event_filter: Requested change kinds.
        unsubscribe_calls: How many times unsubscribe() was called.
    """

    channel: str
    table: str
    handler: ChangeHandler
    status_handler: StatusHandler
    event_filter: str = "*"
    unsubscribe_calls: int = field(default=0)

    @property
    def active(self) -> bool:
        return self.unsubscribe_calls == 0

    def unsubscribe(self) -> None:
        self.unsubscribe_calls += 1


class ChangeFeedStub(ChangeFeedProtocol):
    """In-memory change feed.

    Attributes:
        subscriptions: Every subscription ever created, in order.
        deliver_after_unsubscribe: When True, emit() also reaches
            unsubscribed handlers, simulating callbacks that race with
            teardown.
    """

    def __init__(self) -> None:
        """Initialize the stub with no subscriptions."""
        self.subscriptions: list[StubSubscription] = []
        self.deliver_after_unsubscribe: bool = False

    def subscribe(
        self,
        channel: str,
        table: str,
        handler: ChangeHandler,
        status_handler: StatusHandler,
        event_filter: str = "*",
    ) -> FeedSubscriptionProtocol:
        subscription = StubSubscription(
            channel=channel,
            table=table,
            handler=handler,
            status_handler=status_handler,
            event_filter=event_filter,
        )
        self.subscriptions.append(subscription)
        return subscription

    # Test control methods

    def emit(self, change: RawChange) -> int:
        """Deliver a change to subscriptions of ``change.table``.

        Returns:
            Number of handlers invoked.
        """
        delivered = 0
        for subscription in self._targets(change.table):
            if subscription.event_filter not in ("*", change.kind):
                continue
            subscription.handler(change)
            delivered += 1
        return delivered

    def set_status(self, table: str, status: SubscriptionStatus) -> None:
        """Report a subscription status for ``table``."""
        for subscription in self._targets(table):
            subscription.status_handler(status)

    def set_all_status(self, status: SubscriptionStatus) -> None:
        for table in {s.table for s in self.subscriptions}:
            self.set_status(table, status)

    def active_subscriptions(self) -> list[StubSubscription]:
        return [s for s in self.subscriptions if s.active]

    def reset(self) -> None:
        """Forget every subscription."""
        self.subscriptions.clear()
        self.deliver_after_unsubscribe = False

    def _targets(self, table: str) -> list[StubSubscription]:
        return [
            s
            for s in self.subscriptions
            if s.table == table and (s.active or self.deliver_after_unsubscribe)
        ]
