"""Infrastructure stubs for development and testing.

Available stubs:
- ChangeFeedStub: In-memory change feed with emit/set_status controls
- AggregateRefresherStub: Counts refreshes, injectable failure
- SkipConfirmationStub: Fixed answer, records prompts
- AssetUrlResolverStub: Deterministic URLs, injectable failures

WARNING: These stubs are NOT for production use.
"""

from scrapdesk.infrastructure.stubs.aggregate_refresher_stub import (
    AggregateRefresherStub,
)
from scrapdesk.infrastructure.stubs.asset_url_resolver_stub import AssetUrlResolverStub
from scrapdesk.infrastructure.stubs.change_feed_stub import (
    ChangeFeedStub,
    StubSubscription,
)
from scrapdesk.infrastructure.stubs.skip_confirmation_stub import SkipConfirmationStub

__all__: list[str] = [
    "AggregateRefresherStub",
    "AssetUrlResolverStub",
    "ChangeFeedStub",
    "SkipConfirmationStub",
    "StubSubscription",
]
