"""Bootstrap wiring for notification engine dependencies.

The change feed, aggregate refresher and skip confirmation belong to
the hosting dashboard and are passed in. Without them the in-memory
stubs are used, which is what local development and tests want.
"""

from __future__ import annotations

from structlog import get_logger

from scrapdesk.application.ports.aggregate_refresher import AggregateRefresherProtocol
from scrapdesk.application.ports.change_feed import ChangeFeedProtocol
from scrapdesk.application.ports.skip_confirmation import SkipConfirmationProtocol
from scrapdesk.application.ports.time_authority import TimeAuthorityProtocol
from scrapdesk.application.services.notification_engine import NotificationEngine
from scrapdesk.config.notification_config import NotificationEngineConfig
from scrapdesk.infrastructure.adapters.system_clock import SystemTimeAuthority
from scrapdesk.infrastructure.stubs.aggregate_refresher_stub import (
    AggregateRefresherStub,
)
from scrapdesk.infrastructure.stubs.change_feed_stub import ChangeFeedStub
from scrapdesk.infrastructure.stubs.skip_confirmation_stub import SkipConfirmationStub

logger = get_logger()

_notification_engine_config: NotificationEngineConfig | None = None


def get_notification_engine_config() -> NotificationEngineConfig:
    """Get engine configuration, loaded from the environment once."""
    global _notification_engine_config
    if _notification_engine_config is None:
        _notification_engine_config = NotificationEngineConfig.from_environment()
    return _notification_engine_config


def create_notification_engine(
    feed: ChangeFeedProtocol | None = None,
    refresher: AggregateRefresherProtocol | None = None,
    skip_confirmation: SkipConfirmationProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    config: NotificationEngineConfig | None = None,
) -> NotificationEngine:
    """Build a NotificationEngine, filling missing collaborators with defaults."""
    if feed is None:
        logger.warning(
            "change_feed_stub_in_use",
            message="No change feed provided, using in-memory stub",
        )
        feed = ChangeFeedStub()
    if refresher is None:
        refresher = AggregateRefresherStub()
    if skip_confirmation is None:
        # Without a prompt, gated skips are declined
        skip_confirmation = SkipConfirmationStub(answer=False)

    engine_config = config or get_notification_engine_config()
    logger.info(
        "notification_engine_configured",
        tables=sorted(engine_config.tables),
        dedup_window_ms=engine_config.dedup_window_ms,
        refresh_debounce_seconds=engine_config.refresh_debounce_seconds,
    )
    return NotificationEngine(
        feed=feed,
        refresher=refresher,
        skip_confirmation=skip_confirmation,
        time_authority=time_authority or SystemTimeAuthority(),
        config=engine_config,
    )


def reset_notification_engine_config() -> None:
    """Forget the cached configuration (for testing)."""
    global _notification_engine_config
    _notification_engine_config = None
