"""Notification engine signals.

Signals are the observable side effects of a reducer step. The reducer
returns them alongside the new EngineState; the engine logs them and
uses them to schedule work (the aggregate refresh is debounced on
NotificationEnqueued). They carry no behaviour of their own.
"""

from __future__ import annotations

from dataclasses import dataclass

from scrapdesk.domain.models.notification import NotificationId, Priority
from scrapdesk.domain.models.workflow import WorkflowState

# Signal type constants, also used as structlog event names
NOTIFICATION_ENQUEUED_SIGNAL: str = "notification_enqueued"
DUPLICATE_SKIPPED_SIGNAL: str = "duplicate_skipped"
QUEUE_BECAME_ACTIVE_SIGNAL: str = "queue_became_active"
NOTIFICATION_DISPLAYED_SIGNAL: str = "notification_displayed"
NOTIFICATION_COMPLETED_SIGNAL: str = "notification_completed"
COMPLETION_REJECTED_SIGNAL: str = "completion_rejected"
NOTIFICATION_SKIPPED_SIGNAL: str = "notification_skipped"
SKIP_DECLINED_SIGNAL: str = "skip_declined"
QUEUE_CLEARED_SIGNAL: str = "queue_cleared"
NOTIFICATIONS_EXPIRED_SIGNAL: str = "notifications_expired"
CONNECTIVITY_CHANGED_SIGNAL: str = "connectivity_changed"
NAVIGATION_BLOCKED_SIGNAL: str = "navigation_blocked"
WORKFLOW_IDLE_SIGNAL: str = "workflow_idle"


@dataclass(frozen=True, eq=True)
class NotificationEnqueued:
    """An event was accepted into the queue."""

    notification_id: NotificationId
    priority: Priority

    signal_type = NOTIFICATION_ENQUEUED_SIGNAL


@dataclass(frozen=True, eq=True)
class DuplicateSkipped:
    """A candidate was dropped as a near-duplicate of a queued entry."""

    notification_id: NotificationId

    signal_type = DUPLICATE_SKIPPED_SIGNAL


@dataclass(frozen=True, eq=True)
class QueueBecameActive:
    """The queue went from empty to non-empty."""

    notification_id: NotificationId

    signal_type = QUEUE_BECAME_ACTIVE_SIGNAL


@dataclass(frozen=True, eq=True)
class NotificationDisplayed:
    """A workflow session was opened on a notification."""

    notification_id: NotificationId
    requires_acknowledgment: bool

    signal_type = NOTIFICATION_DISPLAYED_SIGNAL


@dataclass(frozen=True, eq=True)
class NotificationCompleted:
    """The operator completed a notification; it was processed and removed.

    Attributes:
        notification_id: The completed notification.
        acknowledged: Whether the payment checkbox was ticked.
        final_state: State the session ended in (always CLOSED).
    """

    notification_id: NotificationId
    acknowledged: bool = False
    final_state: WorkflowState = WorkflowState.CLOSED

    signal_type = NOTIFICATION_COMPLETED_SIGNAL


@dataclass(frozen=True, eq=True)
class CompletionRejected:
    """complete() was refused because the acknowledgment gate is unmet."""

    notification_id: NotificationId

    signal_type = COMPLETION_REJECTED_SIGNAL


@dataclass(frozen=True, eq=True)
class NotificationSkipped:
    """The operator skipped a notification; it stays queued unprocessed."""

    notification_id: NotificationId

    signal_type = NOTIFICATION_SKIPPED_SIGNAL


@dataclass(frozen=True, eq=True)
class SkipDeclined:
    """The operator declined the skip confirmation."""

    notification_id: NotificationId

    signal_type = SKIP_DECLINED_SIGNAL


@dataclass(frozen=True, eq=True)
class QueueCleared:
    """Notifications were bulk-removed.

    Attributes:
        removed: Number of notifications removed.
        below: Tier threshold for clear_below, None for clear_all.
    """

    removed: int
    below: Priority | None = None

    signal_type = QUEUE_CLEARED_SIGNAL


@dataclass(frozen=True, eq=True)
class NotificationsExpired:
    """Unprocessed notifications past their expiry were dropped."""

    removed: int

    signal_type = NOTIFICATIONS_EXPIRED_SIGNAL


@dataclass(frozen=True, eq=True)
class ConnectivityChanged:
    """The change feed connectivity flag flipped."""

    connected: bool

    signal_type = CONNECTIVITY_CHANGED_SIGNAL


@dataclass(frozen=True, eq=True)
class NavigationBlocked:
    """Leaving the dashboard was refused while work is pending."""

    destination: str
    unhandled: int

    signal_type = NAVIGATION_BLOCKED_SIGNAL


@dataclass(frozen=True, eq=True)
class WorkflowIdle:
    """No notification is displayed any more."""

    signal_type = WORKFLOW_IDLE_SIGNAL


Signal = (
    NotificationEnqueued
    | DuplicateSkipped
    | QueueBecameActive
    | NotificationDisplayed
    | NotificationCompleted
    | CompletionRejected
    | NotificationSkipped
    | SkipDeclined
    | QueueCleared
    | NotificationsExpired
    | ConnectivityChanged
    | NavigationBlocked
    | WorkflowIdle
)
