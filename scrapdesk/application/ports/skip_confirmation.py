"""Skip confirmation port.

Skipping a payment-bearing notification whose payment has not been
confirmed needs an explicit operator answer. The prompt is whatever the
rendering layer provides; the engine only awaits the answer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scrapdesk.domain.models.notification import QueuedNotification


class SkipConfirmationProtocol(ABC):
    """Abstract interface for the interactive skip confirmation."""

    @abstractmethod
    async def confirm_skip(self, notification: QueuedNotification) -> bool:
        """Ask the operator whether to skip without confirming payment.

        Args:
            notification: The displayed notification being skipped.

        Returns:
            True to skip anyway, False to stay on the notification.
        """
        ...
