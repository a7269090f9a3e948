"""Heart model: a user's like on an asset."""

from .resource import ResourceItem
from ..errors import ChuteError


class Heart(ResourceItem):
    identifier: str | None = None
    asset_id: int | str | None = None
    album: str | None = None
    created_at: str | None = None

    def remove(self, success=None, error=None):
        """Delete this heart on the server. Alias: ``delete``."""
        if self._resource is None:
            raise ChuteError("Heart is not bound to a HeartResource")
        return self._resource.remove(self.identifier, success, error)

    delete = remove
