"""Application ports (abstract interfaces to external collaborators).

Ports define the contracts the engine needs from the change feed, the
aggregate refresher, asset URL resolution, skip confirmation and time.
"""

from scrapdesk.application.ports.aggregate_refresher import AggregateRefresherProtocol
from scrapdesk.application.ports.asset_url_resolver import AssetUrlResolverProtocol
from scrapdesk.application.ports.change_feed import (
    ChangeFeedProtocol,
    FeedSubscriptionProtocol,
    RawChange,
    SubscriptionStatus,
)
from scrapdesk.application.ports.skip_confirmation import SkipConfirmationProtocol
from scrapdesk.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AggregateRefresherProtocol",
    "AssetUrlResolverProtocol",
    "ChangeFeedProtocol",
    "FeedSubscriptionProtocol",
    "RawChange",
    "SkipConfirmationProtocol",
    "SubscriptionStatus",
    "TimeAuthorityProtocol",
]
