"""Acknowledgment workflow transition errors.

Raised when code attempts a workflow transition that the transition
matrix does not permit. Operator-driven no-ops (ticking an ungated
notification, completing before the gate is satisfied) are NOT errors;
they are reported through engine signals instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scrapdesk.domain.exceptions import ScrapdeskError

if TYPE_CHECKING:
    from scrapdesk.domain.models.workflow import WorkflowState


class InvalidWorkflowTransitionError(ScrapdeskError):
    """Raised when an invalid workflow state transition is attempted.

    Attributes:
        from_state: Current state of the session.
        to_state: Attempted target state.
        allowed_transitions: Valid target states from the current state.
    """

    def __init__(
        self,
        from_state: WorkflowState,
        to_state: WorkflowState,
        allowed_transitions: list[WorkflowState] | None = None,
    ) -> None:
        """Initialize invalid workflow transition error.

        Args:
            from_state: Current workflow state.
            to_state: Attempted invalid target state.
            allowed_transitions: Valid states from current state (optional).
        """
        self.from_state = from_state
        self.to_state = to_state
        self.allowed_transitions = allowed_transitions or []

        allowed_str = (
            f" Valid transitions: {[s.value for s in self.allowed_transitions]}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid workflow transition: {from_state.value} -> {to_state.value}.{allowed_str}"
        )
