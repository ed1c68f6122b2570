"""Unit tests for the acknowledgment workflow state machine model."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from scrapdesk.domain.errors.workflow import InvalidWorkflowTransitionError
from scrapdesk.domain.exceptions import ScrapdeskError
from scrapdesk.domain.models.notification import NotificationId
from scrapdesk.domain.models.transaction_event import EventKind
from scrapdesk.domain.models.workflow import (
    WORKFLOW_TRANSITION_MATRIX,
    AcknowledgmentSession,
    WorkflowState,
)

NID = NotificationId("tx1", EventKind.INSERT, datetime(2026, 1, 15, tzinfo=timezone.utc), 0)


class TestTransitionMatrix:
    """Tests for WORKFLOW_TRANSITION_MATRIX."""

    def test_every_state_has_entry(self) -> None:
        assert set(WORKFLOW_TRANSITION_MATRIX) == set(WorkflowState)

    def test_closed_is_only_terminal_state(self) -> None:
        terminal = {state for state in WorkflowState if state.is_terminal()}
        assert terminal == {WorkflowState.CLOSED}
        assert WorkflowState.CLOSED.valid_transitions() == frozenset()

    def test_idle_only_opens(self) -> None:
        assert WorkflowState.IDLE.valid_transitions() == frozenset(
            {WorkflowState.AWAITING_DECISION}
        )

    def test_completing_only_closes(self) -> None:
        assert WorkflowState.COMPLETING.valid_transitions() == frozenset(
            {WorkflowState.CLOSED}
        )


class TestAcknowledgmentSession:
    """Tests for AcknowledgmentSession."""

    def test_gated_session_cannot_complete_until_ready(self) -> None:
        session = AcknowledgmentSession(NID, requires_acknowledgment=True)
        assert session.can_complete is False
        ready = session.with_state(WorkflowState.READY_TO_COMPLETE, acknowledged=True)
        assert ready.can_complete is True

    def test_ungated_session_can_complete_while_awaiting(self) -> None:
        session = AcknowledgmentSession(NID, requires_acknowledgment=False)
        assert session.can_complete is True

    def test_skip_needs_confirmation_only_when_gated_and_unticked(self) -> None:
        assert AcknowledgmentSession(NID, True).skip_needs_confirmation is True
        assert AcknowledgmentSession(NID, True, acknowledged=True).skip_needs_confirmation is False
        assert AcknowledgmentSession(NID, False).skip_needs_confirmation is False

    def test_with_state_returns_new_session(self) -> None:
        session = AcknowledgmentSession(NID, True)
        closed = session.with_state(WorkflowState.CLOSED)
        assert session.state is WorkflowState.AWAITING_DECISION
        assert closed.state is WorkflowState.CLOSED

    def test_with_state_keeps_acknowledged_by_default(self) -> None:
        ready = AcknowledgmentSession(NID, True).with_state(
            WorkflowState.READY_TO_COMPLETE, acknowledged=True
        )
        assert ready.with_state(WorkflowState.COMPLETING).acknowledged is True

    def test_invalid_transition_raises(self) -> None:
        session = AcknowledgmentSession(NID, True, state=WorkflowState.CLOSED)
        with pytest.raises(InvalidWorkflowTransitionError) as exc_info:
            session.with_state(WorkflowState.AWAITING_DECISION)
        assert exc_info.value.from_state is WorkflowState.CLOSED
        assert exc_info.value.to_state is WorkflowState.AWAITING_DECISION
        assert isinstance(exc_info.value, ScrapdeskError)

    def test_error_lists_allowed_transitions(self) -> None:
        session = AcknowledgmentSession(NID, True, state=WorkflowState.COMPLETING)
        with pytest.raises(InvalidWorkflowTransitionError, match="CLOSED"):
            session.with_state(WorkflowState.READY_TO_COMPLETE)
