"""Feed payload errors.

Raised at the feed boundary when a change payload cannot be mapped to a
TransactionEvent. The engine absorbs these: the change is dropped and
logged, and no queue or workflow state changes.
"""

from __future__ import annotations

from scrapdesk.domain.exceptions import ScrapdeskError


class MalformedPayloadError(ScrapdeskError):
    """Raised when a change payload has no usable transaction record.

    Attributes:
        table: The table the change was delivered for.
        kind: The raw change kind as delivered (may be unrecognised).
        reason: Short description of what was wrong with the payload.
    """

    def __init__(self, table: str, kind: str, reason: str) -> None:
        """Initialize malformed payload error.

        Args:
            table: Source table name.
            kind: Raw change kind.
            reason: Why the payload was rejected.
        """
        self.table = table
        self.kind = kind
        self.reason = reason
        super().__init__(f"Malformed {kind} payload from '{table}': {reason}")
