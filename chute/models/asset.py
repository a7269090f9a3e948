"""Asset model: metadata about an image or a video in an album."""

from .resource import ResourceItem
from ..errors import ChuteError


class Asset(ResourceItem):
    chute_asset_id: int | None = None
    shortcut: str | None = None
    album: str | None = None
    type: str | None = None
    url: str | None = None
    thumbnail: str | None = None
    caption: str | None = None
    hearts: int | str | None = 0
    created_at: str | None = None

    def heart_count(self) -> int:
        try:
            return int(self.hearts)
        except (TypeError, ValueError):
            return 0

    def _require_resource(self):
        if self._resource is None:
            raise ChuteError("Asset is not bound to an AssetResource")
        return self._resource

    def hearted(self) -> bool:
        return self._require_resource().hearted(self)

    def heart(self, success=None, error=None):
        return self._require_resource().heart(self, success, error)

    def unheart(self, success=None, error=None):
        return self._require_resource().unheart(self, success, error)

    def toggle_heart(self, success=None, error=None):
        """Heart if not hearted yet, unheart otherwise."""
        return self._require_resource().toggle_heart(self, success, error)
