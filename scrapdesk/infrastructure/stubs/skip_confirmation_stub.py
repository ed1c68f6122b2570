"""Stub implementation of SkipConfirmationProtocol for testing.

Answers every confirmation with a configured value and records which
notifications were asked about.
"""

from __future__ import annotations

from scrapdesk.application.ports.skip_confirmation import SkipConfirmationProtocol
from scrapdesk.domain.models.notification import QueuedNotification


class SkipConfirmationStub(SkipConfirmationProtocol):
    """Configurable skip confirmation.

    Attributes:
        prompts: Notifications the operator was asked about, in order.
    """

    def __init__(self, answer: bool = True) -> None:
        """Initialize the stub.

        Args:
            answer: Value returned by confirm_skip().
        """
        self.prompts: list[QueuedNotification] = []
        self._answer = answer

    async def confirm_skip(self, notification: QueuedNotification) -> bool:
        self.prompts.append(notification)
        return self._answer

    # Test control methods

    def set_answer(self, answer: bool) -> None:
        self._answer = answer

    def reset(self) -> None:
        self.prompts.clear()
        self._answer = True
