"""Adapters: system clock and rendering-layer photo status."""

from scrapdesk.infrastructure.adapters.photo_status import (
    DEFAULT_PHOTO_BUCKET,
    PhotoAsset,
    PhotoLoadStatus,
    PhotoStatusBoard,
)
from scrapdesk.infrastructure.adapters.system_clock import SystemTimeAuthority

__all__: list[str] = [
    "DEFAULT_PHOTO_BUCKET",
    "PhotoAsset",
    "PhotoLoadStatus",
    "PhotoStatusBoard",
    "SystemTimeAuthority",
]
