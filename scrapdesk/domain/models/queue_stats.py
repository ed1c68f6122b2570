"""Queue statistics value object.

QueueStats is derived, never stored independently: it is recomputed
from the full queue contents after every mutation so counts can never
drift from the queue they describe.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class QueueStats:
    """Counts describing one queue snapshot.

    Invariants:
        total == high + medium + low
        0 <= processed <= total

    Attributes:
        total: Number of queued notifications.
        high: Number of HIGH priority notifications.
        medium: Number of MEDIUM priority notifications.
        low: Number of LOW priority notifications.
        processed: Number of queued notifications already marked processed.
    """

    total: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    processed: int = 0

    def __post_init__(self) -> None:
        """Validate stats invariants."""
        if min(self.total, self.high, self.medium, self.low, self.processed) < 0:
            raise ValueError("queue stats counts must be non-negative")
        if self.total != self.high + self.medium + self.low:
            raise ValueError(
                f"total ({self.total}) must equal high + medium + low "
                f"({self.high} + {self.medium} + {self.low})"
            )
        if self.processed > self.total:
            raise ValueError(
                f"processed ({self.processed}) cannot exceed total ({self.total})"
            )

    @property
    def unhandled_count(self) -> int:
        """Notifications still waiting for the operator (warning badge)."""
        return self.total - self.processed

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "processed": self.processed,
        }


EMPTY_QUEUE_STATS = QueueStats()
