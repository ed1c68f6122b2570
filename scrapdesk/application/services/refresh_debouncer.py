"""Debounced aggregate refresh.

A burst of accepted inserts triggers one aggregate refresh after the
burst goes quiet: every schedule() restarts the timer. The refresh runs
as a fire-and-forget task; failures are logged and never reach the
caller of schedule().
"""

from __future__ import annotations

import asyncio
import contextlib

from scrapdesk.application.ports.aggregate_refresher import AggregateRefresherProtocol
from scrapdesk.application.services.base import LoggingMixin

DEFAULT_REFRESH_DEBOUNCE_SECONDS: float = 1.0


class RefreshDebouncer(LoggingMixin):
    """Restartable one-shot timer in front of an AggregateRefresherProtocol."""

    def __init__(
        self,
        refresher: AggregateRefresherProtocol,
        delay_seconds: float = DEFAULT_REFRESH_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize the debouncer.

        Args:
            refresher: Aggregate refresh callback.
            delay_seconds: Quiet period before the refresh fires.
        """
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be non-negative, got {delay_seconds}")
        self._refresher = refresher
        self._delay = delay_seconds
        self._task: asyncio.Task[None] | None = None
        self._refresh_count: int = 0
        self._init_logger()

    @property
    def pending(self) -> bool:
        """Whether a refresh is scheduled or running."""
        return self._task is not None and not self._task.done()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def refresh_count(self) -> int:
        """Number of refreshes that completed successfully."""
        return self._refresh_count

    def schedule(self) -> bool:
        """(Re)start the timer.

        Returns:
            True when a refresh was scheduled, False when no event loop
            is running in this thread.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._log_operation("schedule").debug(
                "refresh_not_scheduled", reason="no_running_loop"
            )
            return False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = loop.create_task(self._fire())
        return True

    async def cancel(self) -> None:
        """Cancel a pending refresh, if any, and wait for it to unwind."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def wait(self) -> None:
        """Wait for the pending refresh to run (no-op when none is pending)."""
        while self._task is not None and not self._task.done():
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if task is self._task:
                    raise

    async def _fire(self) -> None:
        await asyncio.sleep(self._delay)
        log = self._log_operation("refresh_aggregates")
        try:
            await self._refresher.refresh()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.error("refresh_failed", error=str(e), exc_info=True)
            return
        self._refresh_count += 1
        log.debug("refresh_completed", refresh_count=self._refresh_count)
