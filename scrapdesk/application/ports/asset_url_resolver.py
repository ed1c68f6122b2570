"""Asset URL resolver port.

Resolves stored photo paths to URLs the rendering layer can load.
Used by the photo status board, never by the notification engine.
"""

from abc import ABC, abstractmethod


class AssetUrlResolverProtocol(ABC):
    """Abstract interface for resolving stored asset paths."""

    @abstractmethod
    def resolve(self, path: str, bucket: str) -> str | None:
        """Resolve a storage path to a public URL.

        Args:
            path: Object path inside the bucket.
            bucket: Storage bucket name.

        Returns:
            The URL, or None when the asset cannot be resolved.
        """
        ...
