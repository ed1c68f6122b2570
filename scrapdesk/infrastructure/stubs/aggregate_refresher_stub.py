"""Stub implementation of AggregateRefresherProtocol for testing.

Counts refreshes and can be told to fail.

Usage in tests:
    refresher = AggregateRefresherStub()
    refresher.set_fail_refresh(True)
"""

from __future__ import annotations

from scrapdesk.application.ports.aggregate_refresher import AggregateRefresherProtocol


class AggregateRefresherStub(AggregateRefresherProtocol):
    """Records refresh calls.

    Attributes:
        refresh_calls: Number of times refresh() was awaited, including
            failed calls.
    """

    def __init__(self) -> None:
        self.refresh_calls: int = 0
        self._fail_refresh: bool = False

    async def refresh(self) -> None:
        self.refresh_calls += 1
        if self._fail_refresh:
            raise RuntimeError("Simulated aggregate refresh failure")

    # Test control methods

    def set_fail_refresh(self, fail: bool) -> None:
        """Make subsequent refresh() calls raise RuntimeError."""
        self._fail_refresh = fail

    def reset(self) -> None:
        self.refresh_calls = 0
        self._fail_refresh = False
