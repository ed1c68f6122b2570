"""Photo load status board for the rendering layer.

Notification cards show the transaction's photos. Which photos are
still loading, loaded or failed is rendering state: it is kept here,
keyed by asset id, and never reaches the notification engine. A photo
whose URL cannot be resolved is marked FAILED and rendered as a
placeholder; nothing about it affects the acknowledgment workflow.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import structlog

from scrapdesk.application.ports.asset_url_resolver import AssetUrlResolverProtocol

logger = structlog.get_logger(__name__)

DEFAULT_PHOTO_BUCKET: str = "transaction-photos"


class PhotoLoadStatus(Enum):
    """Load status of one photo asset."""

    PENDING = "PENDING"
    LOADED = "LOADED"
    FAILED = "FAILED"


@dataclass(frozen=True, eq=True)
class PhotoAsset:
    """A transaction photo as stored.

    Attributes:
        asset_id: Photo row id.
        file_path: Object path inside the bucket.
        storage_bucket: Bucket name, None for the default bucket.
    """

    asset_id: str
    file_path: str
    storage_bucket: str | None = None


class PhotoStatusBoard:
    """Per-asset load status and resolved URLs."""

    def __init__(
        self,
        resolver: AssetUrlResolverProtocol,
        default_bucket: str = DEFAULT_PHOTO_BUCKET,
    ) -> None:
        self._resolver = resolver
        self._default_bucket = default_bucket
        self._status: dict[str, PhotoLoadStatus] = {}
        self._urls: dict[str, str] = {}

    def track(self, assets: Iterable[PhotoAsset]) -> dict[str, str | None]:
        """Resolve URLs for assets and start tracking them.

        Already tracked assets keep their status.

        Returns:
            Asset id to URL, None where resolution failed.
        """
        resolved: dict[str, str | None] = {}
        for asset in assets:
            if asset.asset_id in self._status:
                resolved[asset.asset_id] = self._urls.get(asset.asset_id)
                continue
            url = self._resolve(asset)
            resolved[asset.asset_id] = url
            if url is None:
                self._status[asset.asset_id] = PhotoLoadStatus.FAILED
            else:
                self._urls[asset.asset_id] = url
                self._status[asset.asset_id] = PhotoLoadStatus.PENDING
        return resolved

    def mark_loaded(self, asset_id: str) -> None:
        if asset_id in self._status:
            self._status[asset_id] = PhotoLoadStatus.LOADED

    def mark_failed(self, asset_id: str) -> None:
        if asset_id in self._status:
            self._status[asset_id] = PhotoLoadStatus.FAILED

    def status(self, asset_id: str) -> PhotoLoadStatus | None:
        return self._status.get(asset_id)

    def url(self, asset_id: str) -> str | None:
        return self._urls.get(asset_id)

    def show_placeholder(self, asset_id: str) -> bool:
        """Whether the card should render the placeholder for this asset."""
        return self._status.get(asset_id) is PhotoLoadStatus.FAILED

    def forget(self, asset_ids: Iterable[str]) -> None:
        """Stop tracking assets of a notification that left the screen."""
        for asset_id in asset_ids:
            self._status.pop(asset_id, None)
            self._urls.pop(asset_id, None)

    def counts(self) -> dict[PhotoLoadStatus, int]:
        counts = {status: 0 for status in PhotoLoadStatus}
        for status in self._status.values():
            counts[status] += 1
        return counts

    def _resolve(self, asset: PhotoAsset) -> str | None:
        bucket = asset.storage_bucket or self._default_bucket
        try:
            url = self._resolver.resolve(asset.file_path, bucket)
        except Exception as e:
            logger.warning(
                "photo_url_resolution_failed",
                asset_id=asset.asset_id,
                bucket=bucket,
                error=str(e),
            )
            return None
        if url is None:
            logger.debug("photo_url_unresolved", asset_id=asset.asset_id, bucket=bucket)
        return url
