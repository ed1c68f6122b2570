"""Aggregate refresh port.

The dashboard keeps aggregate figures (daily totals, stock levels) that
must be reloaded after transactions change. The engine triggers the
refresh, debounced, after accepted inserts.
"""

from abc import ABC, abstractmethod


class AggregateRefresherProtocol(ABC):
    """Abstract interface for reloading dashboard aggregates."""

    @abstractmethod
    async def refresh(self) -> None:
        """Reload aggregate figures.

        Raises:
            Exception: Any failure. The engine logs it and carries on;
                refresh failures never affect the queue.
        """
        ...
