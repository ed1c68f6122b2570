"""Acknowledgment workflow transitions.

Pure functions over AcknowledgmentSession. Each returns a
WorkflowOutcome carrying the resulting session and whether the operator
action was applied; nothing here touches the queue. The engine reducer
sequences these with the queue operations.

Gate:
    A notification is gated when it is an INSERT of a payment-bearing
    transaction type. A gated notification cannot be completed until the
    operator ticks the confirmation, and cannot be skipped without an
    explicit interactive confirmation while unticked.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum

from scrapdesk.domain.models.notification import QueuedNotification
from scrapdesk.domain.models.transaction_event import (
    EventKind,
    TransactionEvent,
    TransactionType,
)
from scrapdesk.domain.models.workflow import AcknowledgmentSession, WorkflowState

DEFAULT_PAYMENT_BEARING_TYPES: frozenset[TransactionType] = frozenset(
    {TransactionType.PURCHASE, TransactionType.SALE}
)


class WorkflowResult(Enum):
    """How an operator action was handled."""

    APPLIED = "applied"
    IGNORED = "ignored"
    REJECTED = "rejected"
    DECLINED = "declined"


@dataclass(frozen=True, eq=True)
class WorkflowOutcome:
    """Result of one workflow transition.

    Attributes:
        session: Session after the action (unchanged unless APPLIED).
        result: APPLIED, IGNORED (not meaningful in this state),
            REJECTED (gate not satisfied) or DECLINED (operator declined
            the skip confirmation).
    """

    session: AcknowledgmentSession | None
    result: WorkflowResult

    @property
    def applied(self) -> bool:
        return self.result is WorkflowResult.APPLIED


def requires_acknowledgment(
    event: TransactionEvent,
    payment_bearing_types: Collection[TransactionType] = DEFAULT_PAYMENT_BEARING_TYPES,
) -> bool:
    """Check whether the acknowledgment gate applies to an event."""
    return event.kind is EventKind.INSERT and event.transaction_type in payment_bearing_types


def open_session(
    notification: QueuedNotification | None,
    payment_bearing_types: Collection[TransactionType] = DEFAULT_PAYMENT_BEARING_TYPES,
) -> AcknowledgmentSession | None:
    """Start displaying a notification (IDLE -> AWAITING_DECISION).

    A missing notification or one without a usable event short-circuits
    to idle: ``None`` is returned and nothing is raised.
    """
    if notification is None or not isinstance(notification.event, TransactionEvent):
        return None
    idle = AcknowledgmentSession(
        notification_id=notification.notification_id,
        requires_acknowledgment=requires_acknowledgment(
            notification.event, payment_bearing_types
        ),
        state=WorkflowState.IDLE,
    )
    return idle.with_state(WorkflowState.AWAITING_DECISION)


def tick(session: AcknowledgmentSession | None, checked: bool = True) -> WorkflowOutcome:
    """Set or clear the operator confirmation checkbox.

    Only gated sessions move between AWAITING_DECISION and
    READY_TO_COMPLETE; for ungated sessions the tick is ignored.
    """
    if session is None or not session.requires_acknowledgment:
        return WorkflowOutcome(session, WorkflowResult.IGNORED)

    if checked and session.state is WorkflowState.AWAITING_DECISION:
        return WorkflowOutcome(
            session.with_state(WorkflowState.READY_TO_COMPLETE, acknowledged=True),
            WorkflowResult.APPLIED,
        )
    if not checked and session.state is WorkflowState.READY_TO_COMPLETE:
        return WorkflowOutcome(
            session.with_state(WorkflowState.AWAITING_DECISION, acknowledged=False),
            WorkflowResult.APPLIED,
        )
    return WorkflowOutcome(session, WorkflowResult.IGNORED)


def begin_completion(session: AcknowledgmentSession | None) -> WorkflowOutcome:
    """Move to COMPLETING if the gate allows it.

    A gated session that has not been ticked is REJECTED and stays in
    AWAITING_DECISION.
    """
    if session is None or session.state.is_terminal():
        return WorkflowOutcome(session, WorkflowResult.IGNORED)
    if not session.can_complete:
        return WorkflowOutcome(session, WorkflowResult.REJECTED)
    return WorkflowOutcome(
        session.with_state(WorkflowState.COMPLETING), WorkflowResult.APPLIED
    )


def finish_completion(session: AcknowledgmentSession) -> AcknowledgmentSession:
    """COMPLETING -> CLOSED."""
    return session.with_state(WorkflowState.CLOSED)


def close(session: AcknowledgmentSession | None, *, confirmed: bool) -> WorkflowOutcome:
    """Close the session without completing it (skip).

    Args:
        session: Displayed session.
        confirmed: Answer of the interactive skip confirmation. Only
            consulted when the session is gated and unticked.
    """
    if session is None or session.state not in (
        WorkflowState.AWAITING_DECISION,
        WorkflowState.READY_TO_COMPLETE,
    ):
        return WorkflowOutcome(session, WorkflowResult.IGNORED)
    if session.skip_needs_confirmation and not confirmed:
        return WorkflowOutcome(session, WorkflowResult.DECLINED)
    return WorkflowOutcome(session.with_state(WorkflowState.CLOSED), WorkflowResult.APPLIED)
