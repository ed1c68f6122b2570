"""Stub implementation of AssetUrlResolverProtocol for testing."""

from __future__ import annotations

from scrapdesk.application.ports.asset_url_resolver import AssetUrlResolverProtocol


class AssetUrlResolverStub(AssetUrlResolverProtocol):
    """Resolves to ``{base_url}/{bucket}/{path}``.

    Paths registered with ``set_unresolvable`` resolve to None and
    ``set_fail_resolve(True)`` makes every call raise.
    """

    def __init__(self, base_url: str = "https://assets.test") -> None:
        self.base_url = base_url.rstrip("/")
        self.resolved: list[tuple[str, str]] = []
        self._unresolvable: set[str] = set()
        self._fail_resolve: bool = False

    def resolve(self, path: str, bucket: str) -> str | None:
        self.resolved.append((path, bucket))
        if self._fail_resolve:
            raise RuntimeError("Simulated asset resolution failure")
        if path in self._unresolvable:
            return None
        return f"{self.base_url}/{bucket}/{path.lstrip('/')}"

    # Test control methods

    def set_unresolvable(self, path: str) -> None:
        self._unresolvable.add(path)

    def set_fail_resolve(self, fail: bool) -> None:
        self._fail_resolve = fail
