"""Notification engine service.

Owns the single EngineState and drives it with the pure reducer. Feed
deliveries, subscription status changes and operator actions all end
up as reducer actions; every step installs the whole new state in one
assignment, so readers never observe a half-applied change.

Lifecycle:
    start() subscribes to the purchase and sales tables. stop()
    unsubscribes, cancels a pending aggregate refresh and makes the
    engine ignore callbacks that arrive late.

Concurrency:
    Single-threaded asyncio. Every public method must be called on the
    event loop thread. skip() is the only operation that awaits an
    external collaborator (the skip confirmation); it re-checks that the
    same notification is still displayed before applying the answer.
"""

from __future__ import annotations

from dataclasses import fields
from enum import Enum
from functools import partial
from typing import Any

from scrapdesk.application.ports.aggregate_refresher import AggregateRefresherProtocol
from scrapdesk.application.ports.change_feed import (
    ChangeFeedProtocol,
    FeedSubscriptionProtocol,
    RawChange,
    SubscriptionStatus,
)
from scrapdesk.application.ports.skip_confirmation import SkipConfirmationProtocol
from scrapdesk.application.ports.time_authority import TimeAuthorityProtocol
from scrapdesk.application.services.base import LoggingMixin
from scrapdesk.application.services.feed_normalizer import FeedNormalizer
from scrapdesk.application.services.refresh_debouncer import RefreshDebouncer
from scrapdesk.config.notification_config import (
    DEFAULT_NOTIFICATION_ENGINE_CONFIG,
    NotificationEngineConfig,
)
from scrapdesk.domain.errors.payload import MalformedPayloadError
from scrapdesk.domain.events.notification_signals import (
    ConnectivityChanged,
    DuplicateSkipped,
    NavigationBlocked,
    NotificationCompleted,
    NotificationEnqueued,
    NotificationSkipped,
    QueueCleared,
    Signal,
)
from scrapdesk.domain.models.notification import (
    NotificationId,
    Priority,
    QueuedNotification,
)
from scrapdesk.domain.models.notification_queue import empty_queue
from scrapdesk.domain.models.queue_stats import QueueStats
from scrapdesk.domain.models.transaction_event import TransactionEvent
from scrapdesk.domain.models.workflow import AcknowledgmentSession, WorkflowState
from scrapdesk.domain.services.engine_reducer import (
    AcknowledgeTick,
    Action,
    AttemptNavigation,
    ClearAll,
    ClearAttemptedNavigation,
    ClearBelow,
    Complete,
    EngineState,
    Enqueue,
    ExpireStale,
    NextNotification,
    PreviousNotification,
    ReducerResult,
    ReviewUnhandled,
    SetConnectivity,
    Skip,
    reduce,
)
from scrapdesk.infrastructure.observability.session_context import (
    generate_operator_session_id,
    set_operator_session_id,
)

# Signals logged below info level
_DEBUG_SIGNALS: tuple[type, ...] = (DuplicateSkipped,)


class NotificationEngine(LoggingMixin):
    """Realtime transaction notification queue with acknowledgment gating.

    Attributes:
        _state: The current EngineState; replaced, never mutated.
    """

    def __init__(
        self,
        feed: ChangeFeedProtocol,
        refresher: AggregateRefresherProtocol,
        skip_confirmation: SkipConfirmationProtocol,
        time_authority: TimeAuthorityProtocol,
        config: NotificationEngineConfig = DEFAULT_NOTIFICATION_ENGINE_CONFIG,
        normalizer: FeedNormalizer | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            feed: Realtime change feed.
            refresher: Aggregate refresh callback, debounced.
            skip_confirmation: Interactive skip confirmation.
            time_authority: Clock for enqueue timestamps and expiry.
            config: Engine configuration.
            normalizer: Feed boundary mapper. Defaults to one built from
                the configured tables.
        """
        self._feed = feed
        self._skip_confirmation = skip_confirmation
        self._time = time_authority
        self._config = config
        self._normalizer = normalizer or FeedNormalizer(config.tables)
        self._debouncer = RefreshDebouncer(refresher, config.refresh_debounce_seconds)
        self._state = EngineState(queue=empty_queue(config.to_queue_policy()))
        self._subscriptions: list[FeedSubscriptionProtocol] = []
        self._statuses: dict[str, SubscriptionStatus] = {}
        self._running: bool = False
        self._init_logger()

    # =========================================================================
    # Read surface
    # =========================================================================

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def current(self) -> QueuedNotification | None:
        """The notification on screen, or None when idle."""
        return self._state.current

    @property
    def queue(self) -> tuple[QueuedNotification, ...]:
        """Snapshot of the queue in display order."""
        return self._state.queue.items

    @property
    def stats(self) -> QueueStats:
        return self._state.stats

    @property
    def session(self) -> AcknowledgmentSession | None:
        return self._state.session

    @property
    def workflow_state(self) -> WorkflowState:
        return self._state.workflow_state

    @property
    def position(self) -> int:
        """1-based position of the displayed notification, 0 when empty."""
        return self._state.navigator.position

    @property
    def navigator_size(self) -> int:
        return self._state.navigator.size

    @property
    def has_next(self) -> bool:
        return self._state.navigator.has_next

    @property
    def has_previous(self) -> bool:
        return self._state.navigator.has_previous

    @property
    def is_connected(self) -> bool:
        return self._state.connected

    @property
    def attempted_navigation(self) -> str | None:
        return self._state.attempted_navigation

    @property
    def skipped(self) -> frozenset[NotificationId]:
        return self._state.skipped

    @property
    def running(self) -> bool:
        return self._running

    @property
    def refresh_debouncer(self) -> RefreshDebouncer:
        return self._debouncer

    # =========================================================================
    # Feed input
    # =========================================================================

    def enqueue(self, event: TransactionEvent) -> bool:
        """Enqueue a canonical event.

        The aggregate refresh is only scheduled while the engine is running.

        Returns:
            True when accepted, False when dropped as a duplicate.
        """
        result = self._dispatch(
            Enqueue(event=event, now=self._time.now()),
            "enqueue",
            transaction_id=event.transaction_id,
            kind=event.kind.value,
        )
        accepted = result.has_signal(NotificationEnqueued)
        if accepted:
            self._schedule_refresh(event.transaction_id)
        return accepted

    def handle_change(self, change: RawChange) -> bool:
        """Feed callback: normalize and enqueue one raw change.

        Malformed payloads are dropped and logged; state is untouched.

        Returns:
            True when a notification was enqueued.
        """
        log = self._log_operation("handle_change", table=change.table, kind=change.kind)
        if not self._running:
            log.debug("late_change_ignored")
            return False
        try:
            event = self._normalizer.normalize(change)
        except MalformedPayloadError as e:
            log.warning("payload_rejected", reason=e.reason)
            return False
        return self.enqueue(event)

    def handle_status(self, table: str, status: SubscriptionStatus) -> None:
        """Feed callback: track subscription status and derive connectivity.

        The engine counts as connected only while every table is SUBSCRIBED.
        """
        if not self._running:
            return
        self._statuses[table] = status
        self._log_operation("handle_status", table=table).debug(
            "subscription_status", status=status.value
        )
        connected = len(self._statuses) == len(self._config.tables) and all(
            s.is_connected for s in self._statuses.values()
        )
        self._dispatch(SetConnectivity(connected=connected), "handle_status")

    # =========================================================================
    # Operator actions
    # =========================================================================

    def acknowledge_tick(self, checked: bool = True) -> bool:
        """Tick or un-tick the payment confirmation.

        Returns:
            True when the workflow state changed.
        """
        before = self._state
        self._dispatch(AcknowledgeTick(checked=checked), "acknowledge_tick", checked=checked)
        return self._state is not before

    def complete(self) -> bool:
        """Complete the displayed notification.

        Returns:
            True when completed, False when rejected or nothing is displayed.
        """
        result = self._dispatch(Complete(), "complete")
        return result.has_signal(NotificationCompleted)

    async def skip(self) -> bool:
        """Skip the displayed notification.

        Gated notifications whose payment is not confirmed first ask the
        skip confirmation; a declined answer leaves everything unchanged.

        Returns:
            True when the notification was skipped.
        """
        session = self._state.session
        notification = self._state.current
        if session is None or notification is None:
            return False

        confirmed = False
        if session.skip_needs_confirmation:
            log = self._log_operation(
                "skip", notification_id=str(session.notification_id)
            )
            log.debug("skip_confirmation_requested")
            confirmed = await self._skip_confirmation.confirm_skip(notification)
            if self._state.session != session:
                log.info("skip_confirmation_stale")
                return False

        result = self._dispatch(Skip(confirmed=confirmed), "skip")
        return result.has_signal(NotificationSkipped)

    def clear_all(self) -> int:
        """Drop every queued notification.

        Returns:
            Number of notifications removed.
        """
        removed = len(self._state.queue)
        self._dispatch(ClearAll(), "clear_all")
        return removed

    def clear_below(self, priority: Priority) -> int:
        """Drop notifications strictly below ``priority``.

        Returns:
            Number of notifications removed.
        """
        removed = len(self._state.queue)
        self._dispatch(ClearBelow(priority=priority), "clear_below", below=priority.value)
        return removed - len(self._state.queue)

    def next(self) -> bool:
        """Page forward. Returns True when the cursor moved."""
        before = self._state.navigator
        self._dispatch(NextNotification(), "next")
        return self._state.navigator != before

    def previous(self) -> bool:
        """Page backward. Returns True when the cursor moved."""
        before = self._state.navigator
        self._dispatch(PreviousNotification(), "previous")
        return self._state.navigator != before

    def review_unhandled(self) -> None:
        """Resurface notifications skipped in this session."""
        self._dispatch(ReviewUnhandled(), "review_unhandled")

    def expire_stale(self) -> int:
        """Drop unprocessed notifications past their expiry.

        Returns:
            Number of notifications removed.
        """
        removed = len(self._state.queue)
        self._dispatch(ExpireStale(now=self._time.now()), "expire_stale")
        return removed - len(self._state.queue)

    def attempt_navigation(self, destination: str) -> bool:
        """Ask to leave the dashboard.

        Refused while a notification is displayed and unhandled
        notifications remain; the destination is then remembered in
        ``attempted_navigation``.

        Returns:
            True when navigation may proceed.
        """
        result = self._dispatch(
            AttemptNavigation(destination=destination),
            "attempt_navigation",
            destination=destination,
        )
        return not result.has_signal(NavigationBlocked)

    def clear_attempted_navigation(self) -> None:
        self._dispatch(ClearAttemptedNavigation(), "clear_attempted_navigation")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Subscribe to the change feed.

        Note:
            Calling start multiple times is safe (idempotent).
        """
        if self._running:
            return

        set_operator_session_id(generate_operator_session_id())
        self._running = True
        self._statuses.clear()
        for table in self._config.tables:
            subscription = self._feed.subscribe(
                channel=self._config.channel_for(table),
                table=table,
                handler=self.handle_change,
                status_handler=partial(self.handle_status, table),
            )
            self._subscriptions.append(subscription)
        self._log_operation("start").info(
            "notification_engine_started",
            tables=sorted(self._config.tables),
        )

    async def stop(self) -> None:
        """Unsubscribe and cancel the pending refresh.

        Note:
            Calling stop when not running is safe.
        """
        self._running = False
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.unsubscribe()
        await self._debouncer.cancel()
        self._dispatch(SetConnectivity(connected=False), "stop")
        self._log_operation("stop").info(
            "notification_engine_stopped",
            unsubscribed=len(subscriptions),
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _dispatch(self, action: Action, operation: str, **context: object) -> ReducerResult:
        result = reduce(self._state, action, self._config.payment_bearing_types)
        self._state = result.state
        if result.signals:
            log = self._log_operation(operation, **context)
            for signal in result.signals:
                self._log_signal(log, signal)
        return result

    def _schedule_refresh(self, transaction_id: str) -> None:
        if not self._running:
            self._log_operation("schedule_refresh", transaction_id=transaction_id).debug(
                "refresh_not_scheduled", reason="engine_not_running"
            )
            return
        self._debouncer.schedule()

    def _log_signal(self, log: Any, signal: Signal) -> None:
        payload = _signal_fields(signal)
        if isinstance(signal, _DEBUG_SIGNALS):
            log.debug(signal.signal_type, **payload)
        elif isinstance(signal, ConnectivityChanged) and not signal.connected:
            log.warning(signal.signal_type, **payload)
        else:
            log.info(signal.signal_type, **payload)
        # One stats line per queue size change
        if isinstance(signal, (NotificationEnqueued, NotificationCompleted, QueueCleared)):
            log.debug("queue_stats", **self._state.stats.to_dict())


def _signal_fields(signal: Signal) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for f in fields(signal):
        value = getattr(signal, f.name)
        if isinstance(value, NotificationId):
            value = str(value)
        elif isinstance(value, Enum):
            value = value.value
        payload[f.name] = value
    return payload
