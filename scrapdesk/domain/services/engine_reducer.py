"""Notification engine reducer.

The whole engine state lives in one immutable EngineState. Every
operator action and every feed delivery is an Action; ``reduce`` maps
``(state, action)`` to a new state plus the signals the step produced.
The reducer performs no I/O and reads no clock: timestamps arrive on
the actions that need them.

Display rules:
    - When the workflow is idle and a displayable notification exists,
      a session is opened on the first displayable entry of the queue.
    - A notification is displayable unless it was skipped in this
      operator session.
    - Completing or skipping re-anchors navigation to the live queue.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field, replace
from datetime import datetime

from scrapdesk.domain.events.notification_signals import (
    CompletionRejected,
    ConnectivityChanged,
    DuplicateSkipped,
    NavigationBlocked,
    NotificationCompleted,
    NotificationDisplayed,
    NotificationEnqueued,
    NotificationsExpired,
    NotificationSkipped,
    QueueBecameActive,
    QueueCleared,
    Signal,
    SkipDeclined,
    WorkflowIdle,
)
from scrapdesk.domain.models.notification import (
    NotificationId,
    Priority,
    QueuedNotification,
)
from scrapdesk.domain.models.notification_queue import NotificationQueue, empty_queue
from scrapdesk.domain.models.queue_stats import QueueStats
from scrapdesk.domain.models.transaction_event import TransactionEvent, TransactionType
from scrapdesk.domain.models.workflow import AcknowledgmentSession, WorkflowState
from scrapdesk.domain.services.acknowledgment_workflow import (
    DEFAULT_PAYMENT_BEARING_TYPES,
    WorkflowResult,
    begin_completion,
    close,
    finish_completion,
    open_session,
    tick,
)
from scrapdesk.domain.services.session_navigator import (
    EMPTY_NAVIGATOR,
    NavigatorState,
    anchor,
    append_arrival,
    next_position,
    previous_position,
    reconcile,
)


@dataclass(frozen=True, eq=True)
class EngineState:
    """Complete notification engine state.

    Attributes:
        queue: Pending notifications in display order.
        session: Workflow session of the displayed notification, None when idle.
        navigator: Cursor over the snapshot being paged.
        connected: Whether the change feed is currently subscribed.
        skipped: Notifications skipped in this operator session.
        attempted_navigation: Destination of the last blocked navigation.
    """

    queue: NotificationQueue = field(default_factory=empty_queue)
    session: AcknowledgmentSession | None = field(default=None)
    navigator: NavigatorState = field(default=EMPTY_NAVIGATOR)
    connected: bool = field(default=False)
    skipped: frozenset[NotificationId] = field(default=frozenset())
    attempted_navigation: str | None = field(default=None)

    @property
    def current(self) -> QueuedNotification | None:
        """The displayed notification, if any."""
        if self.session is None:
            return None
        return self.queue.get(self.session.notification_id)

    @property
    def workflow_state(self) -> WorkflowState:
        if self.session is None:
            return WorkflowState.IDLE
        return self.session.state

    @property
    def stats(self) -> QueueStats:
        return self.queue.stats()

    @property
    def blocks_navigation(self) -> bool:
        """Whether leaving the dashboard must be refused right now."""
        return self.session is not None and self.stats.unhandled_count > 0

    def is_displayable(self, notification_id: NotificationId) -> bool:
        if notification_id in self.skipped:
            return False
        notification = self.queue.get(notification_id)
        return notification is not None and not notification.processed


# Actions


@dataclass(frozen=True, eq=True)
class Enqueue:
    event: TransactionEvent
    now: datetime


@dataclass(frozen=True, eq=True)
class AcknowledgeTick:
    checked: bool = True


@dataclass(frozen=True, eq=True)
class Complete:
    pass


@dataclass(frozen=True, eq=True)
class Skip:
    """Skip the displayed notification.

    ``confirmed`` is the answer of the interactive skip confirmation; it
    is only consulted for gated, unticked notifications.
    """

    confirmed: bool = False


@dataclass(frozen=True, eq=True)
class ClearAll:
    pass


@dataclass(frozen=True, eq=True)
class ClearBelow:
    priority: Priority


@dataclass(frozen=True, eq=True)
class NextNotification:
    pass


@dataclass(frozen=True, eq=True)
class PreviousNotification:
    pass


@dataclass(frozen=True, eq=True)
class ReviewUnhandled:
    pass


@dataclass(frozen=True, eq=True)
class ExpireStale:
    now: datetime


@dataclass(frozen=True, eq=True)
class SetConnectivity:
    connected: bool


@dataclass(frozen=True, eq=True)
class AttemptNavigation:
    destination: str


@dataclass(frozen=True, eq=True)
class ClearAttemptedNavigation:
    pass


Action = (
    Enqueue
    | AcknowledgeTick
    | Complete
    | Skip
    | ClearAll
    | ClearBelow
    | NextNotification
    | PreviousNotification
    | ReviewUnhandled
    | ExpireStale
    | SetConnectivity
    | AttemptNavigation
    | ClearAttemptedNavigation
)


@dataclass(frozen=True, eq=True)
class ReducerResult:
    """New state and the signals one reducer step produced."""

    state: EngineState
    signals: tuple[Signal, ...] = field(default=())

    def has_signal(self, signal_type: type) -> bool:
        return any(isinstance(signal, signal_type) for signal in self.signals)


def reduce(
    state: EngineState,
    action: Action,
    payment_bearing_types: Collection[TransactionType] = DEFAULT_PAYMENT_BEARING_TYPES,
) -> ReducerResult:
    """Apply one action to the engine state.

    Args:
        state: Current engine state.
        action: The action to apply.
        payment_bearing_types: Transaction types whose INSERTs are gated.

    Returns:
        ReducerResult with the new state (``state`` itself when nothing
        changed) and the emitted signals.

    Raises:
        InvalidWorkflowTransitionError: If a workflow transition violates
            the transition matrix. Indicates a bug, never operator input.
        TypeError: If ``action`` is not a known action.
    """
    if isinstance(action, Enqueue):
        return _enqueue(state, action, payment_bearing_types)
    if isinstance(action, AcknowledgeTick):
        outcome = tick(state.session, action.checked)
        if not outcome.applied:
            return ReducerResult(state)
        return ReducerResult(replace(state, session=outcome.session))
    if isinstance(action, Complete):
        return _complete(state, payment_bearing_types)
    if isinstance(action, Skip):
        return _skip(state, action.confirmed, payment_bearing_types)
    if isinstance(action, ClearAll):
        return _clear_all(state)
    if isinstance(action, ClearBelow):
        queue = state.queue.clear_below(action.priority)
        removed = len(state.queue) - len(queue)
        if removed == 0:
            return ReducerResult(state)
        return _after_removal(
            state,
            queue,
            QueueCleared(removed=removed, below=action.priority),
            payment_bearing_types,
        )
    if isinstance(action, ExpireStale):
        queue = state.queue.expire(action.now)
        removed = len(state.queue) - len(queue)
        if removed == 0:
            return ReducerResult(state)
        return _after_removal(
            state, queue, NotificationsExpired(removed=removed), payment_bearing_types
        )
    if isinstance(action, NextNotification):
        return _move(state, next_position(state.navigator), payment_bearing_types)
    if isinstance(action, PreviousNotification):
        return _move(state, previous_position(state.navigator), payment_bearing_types)
    if isinstance(action, ReviewUnhandled):
        return _review_unhandled(state, payment_bearing_types)
    if isinstance(action, SetConnectivity):
        if action.connected == state.connected:
            return ReducerResult(state)
        return ReducerResult(
            replace(state, connected=action.connected),
            (ConnectivityChanged(connected=action.connected),),
        )
    if isinstance(action, AttemptNavigation):
        if state.blocks_navigation:
            return ReducerResult(
                replace(state, attempted_navigation=action.destination),
                (
                    NavigationBlocked(
                        destination=action.destination,
                        unhandled=state.stats.unhandled_count,
                    ),
                ),
            )
        return ReducerResult(replace(state, attempted_navigation=None))
    if isinstance(action, ClearAttemptedNavigation):
        if state.attempted_navigation is None:
            return ReducerResult(state)
        return ReducerResult(replace(state, attempted_navigation=None))
    raise TypeError(f"Unknown engine action: {action!r}")


def _display_next(
    state: EngineState,
    payment_bearing_types: Collection[TransactionType],
) -> tuple[EngineState, tuple[Signal, ...]]:
    """Open a session on the first displayable notification, or go idle."""
    navigator = anchor(state.queue, state.is_displayable)
    notification_id = navigator.current
    if notification_id is not None and state.is_displayable(notification_id):
        session = open_session(state.queue.get(notification_id), payment_bearing_types)
        if session is not None:
            return (
                replace(state, session=session, navigator=navigator),
                (
                    NotificationDisplayed(
                        notification_id=notification_id,
                        requires_acknowledgment=session.requires_acknowledgment,
                    ),
                ),
            )
    return replace(state, session=None, navigator=EMPTY_NAVIGATOR), (WorkflowIdle(),)


def _enqueue(
    state: EngineState,
    action: Enqueue,
    payment_bearing_types: Collection[TransactionType],
) -> ReducerResult:
    result = state.queue.insert(action.event, action.now)
    notification_id = result.notification.notification_id
    if not result.accepted:
        return ReducerResult(state, (DuplicateSkipped(notification_id=notification_id),))

    signals: list[Signal] = [
        NotificationEnqueued(
            notification_id=notification_id,
            priority=result.notification.priority,
        )
    ]
    if result.became_active:
        signals.append(QueueBecameActive(notification_id=notification_id))

    new_state = replace(state, queue=result.queue)
    if new_state.session is None:
        new_state, display_signals = _display_next(new_state, payment_bearing_types)
        signals.extend(display_signals)
    else:
        new_state = replace(
            new_state, navigator=append_arrival(new_state.navigator, notification_id)
        )
    return ReducerResult(new_state, tuple(signals))


def _complete(
    state: EngineState,
    payment_bearing_types: Collection[TransactionType],
) -> ReducerResult:
    outcome = begin_completion(state.session)
    if outcome.result is WorkflowResult.REJECTED and state.session is not None:
        return ReducerResult(
            state, (CompletionRejected(notification_id=state.session.notification_id),)
        )
    if not outcome.applied or outcome.session is None:
        return ReducerResult(state)

    completing = outcome.session
    notification_id = completing.notification_id
    queue = state.queue.mark_processed(notification_id)
    head = queue.head
    if head is not None and head.notification_id == notification_id:
        queue, _ = queue.pop_front()
    else:
        queue = queue.remove(notification_id)
    closed = finish_completion(completing)

    new_state = replace(
        state,
        queue=queue,
        session=None,
        skipped=state.skipped - {notification_id},
    )
    new_state, display_signals = _display_next(new_state, payment_bearing_types)
    return ReducerResult(
        new_state,
        (
            NotificationCompleted(
                notification_id=notification_id,
                acknowledged=closed.acknowledged,
                final_state=closed.state,
            ),
            *display_signals,
        ),
    )


def _skip(
    state: EngineState,
    confirmed: bool,
    payment_bearing_types: Collection[TransactionType],
) -> ReducerResult:
    outcome = close(state.session, confirmed=confirmed)
    if outcome.result is WorkflowResult.DECLINED and state.session is not None:
        return ReducerResult(
            state, (SkipDeclined(notification_id=state.session.notification_id),)
        )
    if not outcome.applied or outcome.session is None:
        return ReducerResult(state)

    notification_id = outcome.session.notification_id
    new_state = replace(
        state,
        session=None,
        skipped=state.skipped | {notification_id},
    )
    new_state, display_signals = _display_next(new_state, payment_bearing_types)
    return ReducerResult(
        new_state,
        (NotificationSkipped(notification_id=notification_id), *display_signals),
    )


def _clear_all(state: EngineState) -> ReducerResult:
    signals: list[Signal] = [QueueCleared(removed=len(state.queue))]
    if state.session is not None:
        signals.append(WorkflowIdle())
    new_state = replace(
        state,
        queue=state.queue.clear_all(),
        session=None,
        navigator=EMPTY_NAVIGATOR,
        skipped=frozenset(),
    )
    return ReducerResult(new_state, tuple(signals))


def _after_removal(
    state: EngineState,
    queue: NotificationQueue,
    signal: Signal,
    payment_bearing_types: Collection[TransactionType],
) -> ReducerResult:
    """Install a queue that lost entries and repair session and navigation."""
    live = set(queue.ids())
    new_state = replace(
        state,
        queue=queue,
        skipped=frozenset(nid for nid in state.skipped if nid in live),
    )
    if new_state.session is not None and new_state.session.notification_id in live:
        navigator = reconcile(new_state.navigator, queue, new_state.is_displayable)
        if navigator.current == new_state.session.notification_id:
            return ReducerResult(replace(new_state, navigator=navigator), (signal,))

    was_displaying = state.session is not None
    new_state, display_signals = _display_next(
        replace(new_state, session=None), payment_bearing_types
    )
    if not was_displaying and new_state.session is None:
        display_signals = ()
    return ReducerResult(new_state, (signal, *display_signals))


def _move(
    state: EngineState,
    navigator: NavigatorState,
    payment_bearing_types: Collection[TransactionType],
) -> ReducerResult:
    """Move the cursor and restart the workflow on the notification under it."""
    if navigator == state.navigator or navigator.current is None:
        return ReducerResult(state)
    session = open_session(state.queue.get(navigator.current), payment_bearing_types)
    new_state = replace(state, navigator=navigator, session=session)
    if session is None:
        return ReducerResult(new_state, (WorkflowIdle(),))
    return ReducerResult(
        new_state,
        (
            NotificationDisplayed(
                notification_id=session.notification_id,
                requires_acknowledgment=session.requires_acknowledgment,
            ),
        ),
    )


def _review_unhandled(
    state: EngineState,
    payment_bearing_types: Collection[TransactionType],
) -> ReducerResult:
    if not state.skipped and state.session is not None:
        return ReducerResult(state)
    new_state = replace(state, skipped=frozenset())
    if new_state.session is not None or new_state.queue.is_empty:
        return ReducerResult(new_state)
    new_state, display_signals = _display_next(new_state, payment_bearing_types)
    return ReducerResult(new_state, display_signals)
