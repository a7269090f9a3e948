"""Hearts: a user's like on an asset.

Unlike votes, users can heart any number of assets from the same album.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from ..errors import TransportError
from ..models.heart import Heart
from ..models.outcome import Outcome
from ..params import expand_route
from .resource import Resource
from .transport import Transport

logger = logging.getLogger(__name__)

HEART_ROUTE = "/hearts/{id}"
ASSET_HEARTS_ROUTE = "/albums/{album}/assets/{asset}/hearts"


class HeartResource(Resource):
    model = Heart

    def __init__(self, transport: Transport | None = None):
        super().__init__(HEART_ROUTE, transport)

    async def create(self, album: str, asset: str) -> Heart:
        """Heart ``asset`` in ``album``; the returned heart carries the receipt identifier."""
        path, _ = expand_route(ASSET_HEARTS_ROUTE, {"album": album, "asset": asset})
        response = await self.transport.request("POST", path)
        data = response.data if isinstance(response.data, dict) else {}
        return self.build(data, {})

    async def destroy(self, identifier: str) -> Any:
        path, _ = expand_route(HEART_ROUTE, {"id": identifier})
        response = await self.transport.request("DELETE", path)
        return response.data

    def remove(
        self,
        identifier: str,
        success: Callable | None = None,
        error: Callable | None = None,
    ) -> asyncio.Task:
        """Delete the heart ``identifier`` and report through the callbacks."""
        loop = asyncio.get_running_loop()
        return loop.create_task(self._remove(identifier, success, error))

    async def _remove(self, identifier, success, error) -> Outcome:
        try:
            data = await self.destroy(identifier)
        except TransportError as exc:
            logger.warning("Removing heart %s failed: %s", identifier, exc)
            if error:
                error(exc)
            return Outcome(error=exc)
        if success:
            success(data)
        return Outcome(value=data)
