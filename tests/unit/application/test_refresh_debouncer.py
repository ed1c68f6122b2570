"""Unit tests for RefreshDebouncer."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from structlog.testing import capture_logs

from scrapdesk.application.ports.aggregate_refresher import AggregateRefresherProtocol
from scrapdesk.application.services.refresh_debouncer import RefreshDebouncer
from scrapdesk.infrastructure.stubs import AggregateRefresherStub


@pytest.fixture
def refresher() -> AggregateRefresherStub:
    return AggregateRefresherStub()


class TestRefreshDebouncer:
    """Tests for the restartable refresh timer."""

    def test_negative_delay_rejected(self, refresher: AggregateRefresherStub) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            RefreshDebouncer(refresher, delay_seconds=-1)

    def test_schedule_without_event_loop(self, refresher: AggregateRefresherStub) -> None:
        debouncer = RefreshDebouncer(refresher, delay_seconds=0.0)

        assert debouncer.schedule() is False
        assert not debouncer.pending
        assert refresher.refresh_calls == 0

    async def test_single_schedule_refreshes_once(
        self, refresher: AggregateRefresherStub
    ) -> None:
        debouncer = RefreshDebouncer(refresher, delay_seconds=0.0)

        debouncer.schedule()
        assert debouncer.pending
        await debouncer.wait()

        assert refresher.refresh_calls == 1
        assert debouncer.refresh_count == 1
        assert not debouncer.pending

    async def test_burst_coalesces_to_one_refresh(
        self, refresher: AggregateRefresherStub
    ) -> None:
        debouncer = RefreshDebouncer(refresher, delay_seconds=0.2)

        for _ in range(5):
            debouncer.schedule()
            await asyncio.sleep(0.01)
        await debouncer.wait()

        assert refresher.refresh_calls == 1

    async def test_separate_bursts_refresh_separately(
        self, refresher: AggregateRefresherStub
    ) -> None:
        debouncer = RefreshDebouncer(refresher, delay_seconds=0.0)

        debouncer.schedule()
        await debouncer.wait()
        debouncer.schedule()
        await debouncer.wait()

        assert refresher.refresh_calls == 2

    async def test_cancel_prevents_refresh(self, refresher: AggregateRefresherStub) -> None:
        debouncer = RefreshDebouncer(refresher, delay_seconds=10.0)

        debouncer.schedule()
        await debouncer.cancel()

        assert not debouncer.pending
        assert refresher.refresh_calls == 0

    async def test_cancel_without_pending_is_safe(
        self, refresher: AggregateRefresherStub
    ) -> None:
        debouncer = RefreshDebouncer(refresher)
        await debouncer.cancel()
        await debouncer.wait()
        assert refresher.refresh_calls == 0

    async def test_failure_is_logged_not_raised(
        self, refresher: AggregateRefresherStub
    ) -> None:
        refresher.set_fail_refresh(True)
        with capture_logs() as logs:
            debouncer = RefreshDebouncer(refresher, delay_seconds=0.0)
            debouncer.schedule()
            await debouncer.wait()

        assert refresher.refresh_calls == 1
        assert debouncer.refresh_count == 0
        failures = [entry for entry in logs if entry["event"] == "refresh_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"
        assert "Simulated" in failures[0]["error"]

    async def test_refresh_awaited_through_port(self) -> None:
        refresher = AsyncMock(spec=AggregateRefresherProtocol)
        debouncer = RefreshDebouncer(refresher, delay_seconds=0.0)

        debouncer.schedule()
        await debouncer.wait()

        refresher.refresh.assert_awaited_once_with()
