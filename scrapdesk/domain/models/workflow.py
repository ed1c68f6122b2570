"""Acknowledgment workflow domain model.

One AcknowledgmentSession exists per displayed notification. Its state
machine decides how that notification may leave the screen.

State Machine:
    IDLE -> AWAITING_DECISION            (a notification is displayed)
    AWAITING_DECISION -> READY_TO_COMPLETE   (operator ticks, gated only)
    AWAITING_DECISION -> COMPLETING      (ungated notification completed)
    AWAITING_DECISION -> CLOSED          (skip / close)
    READY_TO_COMPLETE -> AWAITING_DECISION   (operator un-ticks)
    READY_TO_COMPLETE -> COMPLETING      (operator confirms completion)
    READY_TO_COMPLETE -> CLOSED          (skip after ticking)
    COMPLETING -> CLOSED

Terminal State:
    CLOSED. A new session is created for the next notification.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from scrapdesk.domain.errors.workflow import InvalidWorkflowTransitionError
from scrapdesk.domain.models.notification import NotificationId


class WorkflowState(Enum):
    """State of the acknowledgment workflow.

    States:
        IDLE: No notification displayed
        AWAITING_DECISION: Notification shown, operator has not confirmed
        READY_TO_COMPLETE: Operator ticked the confirmation checkbox
        COMPLETING: Completion in progress
        CLOSED: Terminal for this notification instance
    """

    IDLE = "IDLE"
    AWAITING_DECISION = "AWAITING_DECISION"
    READY_TO_COMPLETE = "READY_TO_COMPLETE"
    COMPLETING = "COMPLETING"
    CLOSED = "CLOSED"

    def is_terminal(self) -> bool:
        return self is WorkflowState.CLOSED

    def valid_transitions(self) -> frozenset[WorkflowState]:
        return WORKFLOW_TRANSITION_MATRIX.get(self, frozenset())


WORKFLOW_TRANSITION_MATRIX: dict[WorkflowState, frozenset[WorkflowState]] = {
    WorkflowState.IDLE: frozenset({WorkflowState.AWAITING_DECISION}),
    WorkflowState.AWAITING_DECISION: frozenset(
        {
            WorkflowState.READY_TO_COMPLETE,
            WorkflowState.COMPLETING,
            WorkflowState.CLOSED,
        }
    ),
    WorkflowState.READY_TO_COMPLETE: frozenset(
        {
            WorkflowState.AWAITING_DECISION,
            WorkflowState.COMPLETING,
            WorkflowState.CLOSED,
        }
    ),
    WorkflowState.COMPLETING: frozenset({WorkflowState.CLOSED}),
    WorkflowState.CLOSED: frozenset(),
}


@dataclass(frozen=True, eq=True)
class AcknowledgmentSession:
    """Workflow state for the currently displayed notification.

    Attributes:
        notification_id: The displayed notification.
        requires_acknowledgment: True when the acknowledgment gate applies.
        state: Current workflow state.
        acknowledged: Operator-set confirmation flag.
    """

    notification_id: NotificationId
    requires_acknowledgment: bool
    state: WorkflowState = field(default=WorkflowState.AWAITING_DECISION)
    acknowledged: bool = field(default=False)

    @property
    def can_complete(self) -> bool:
        """Whether complete() is allowed right now."""
        if self.requires_acknowledgment:
            return self.state is WorkflowState.READY_TO_COMPLETE
        return self.state in (
            WorkflowState.AWAITING_DECISION,
            WorkflowState.READY_TO_COMPLETE,
        )

    @property
    def skip_needs_confirmation(self) -> bool:
        """Whether skipping must first be confirmed interactively."""
        return self.requires_acknowledgment and not self.acknowledged

    def with_state(
        self, new_state: WorkflowState, *, acknowledged: bool | None = None
    ) -> AcknowledgmentSession:
        """Return a session in ``new_state``.

        Raises:
            InvalidWorkflowTransitionError: If the transition matrix does not
                permit ``state -> new_state``.
        """
        allowed = self.state.valid_transitions()
        if new_state not in allowed:
            raise InvalidWorkflowTransitionError(
                from_state=self.state,
                to_state=new_state,
                allowed_transitions=sorted(allowed, key=lambda s: s.value),
            )
        return replace(
            self,
            state=new_state,
            acknowledged=self.acknowledged if acknowledged is None else acknowledged,
        )
