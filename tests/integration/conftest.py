"""
Integration test configuration.

Wires a NotificationEngine to the in-memory stubs exactly as the
bootstrap does, so the full path feed -> normalizer -> reducer ->
debounced refresh runs without a live change feed.

Usage:
    @pytest.mark.integration
    async def test_example(pipeline: Pipeline) -> None:
        await pipeline.engine.start()
        pipeline.feed.emit(RawChange(...))
"""

from collections.abc import AsyncIterator

import pytest

from scrapdesk.bootstrap.notification_engine import create_notification_engine
from scrapdesk.config import TEST_NOTIFICATION_ENGINE_CONFIG
from scrapdesk.infrastructure.stubs import (
    AggregateRefresherStub,
    ChangeFeedStub,
    SkipConfirmationStub,
)
from tests.helpers import FakeTimeAuthority, Pipeline


@pytest.fixture
async def pipeline(fake_time_authority: FakeTimeAuthority) -> AsyncIterator[Pipeline]:
    """Started engine on stubs; stopped again after the test."""
    feed = ChangeFeedStub()
    refresher = AggregateRefresherStub()
    confirmation = SkipConfirmationStub(answer=True)
    engine = create_notification_engine(
        feed=feed,
        refresher=refresher,
        skip_confirmation=confirmation,
        time_authority=fake_time_authority,
        config=TEST_NOTIFICATION_ENGINE_CONFIG,
    )
    await engine.start()
    yield Pipeline(engine, feed, refresher, confirmation, fake_time_authority)
    await engine.stop()
