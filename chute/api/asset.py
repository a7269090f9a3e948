"""Album assets: paged queries, single lookups, and hearts."""

import asyncio
import logging
from collections.abc import Callable

from ..config import get_settings
from ..errors import PreconditionError, TransportError
from ..models.asset import Asset
from ..models.outcome import Outcome
from ..params import ALBUM_ALIASES, ASSET_ALIASES
from ..storage import JsonReceiptStore, MemoryReceiptStore, ReceiptStore, receipt_key
from .heart import HeartResource
from .resource import Resource, settled
from .transport import Transport

logger = logging.getLogger(__name__)

ASSET_ROUTE = "/albums/{album}/assets/{id}"


def default_receipt_store() -> ReceiptStore:
    path = get_settings().receipts_path
    if path is not None:
        return JsonReceiptStore(path)
    return MemoryReceiptStore()


class AssetResource(Resource):
    """Assets of an album.

    ``query`` accepts ``album``, ``album_id`` or ``album_shortcut`` for the
    album and ``per_page`` or ``perPage`` for the page size; ``get``
    additionally accepts ``id``, ``asset`` or ``shortcut`` for the asset.
    Every asset is stamped with the album it was queried from.

    Example::

        assets = Asset.query({"album": "abcqsrlx", "perPage": 3})
        await assets.loaded()
        if assets.has_more():
            await assets.fetch_next()
    """

    model = Asset
    cursor_field = "chute_asset_id"
    container_key = "album"
    aliases = (("album", ALBUM_ALIASES),)
    member_aliases = (("id", ASSET_ALIASES),)

    def __init__(
        self,
        transport: Transport | None = None,
        receipts: ReceiptStore | None = None,
        hearts: HeartResource | None = None,
        per_page: int | None = None,
    ):
        super().__init__(ASSET_ROUTE, transport, per_page=per_page)
        self.receipts = receipts if receipts is not None else default_receipt_store()
        self.hearts = hearts or HeartResource(self.transport)

    def hearted(self, asset: Asset) -> bool:
        """Whether a heart receipt for ``asset`` is stored locally."""
        return bool(self.receipts.get(receipt_key(asset.album, asset.shortcut)))

    def heart(
        self, asset: Asset, success: Callable | None = None, error: Callable | None = None
    ) -> asyncio.Future:
        key = receipt_key(asset.album, asset.shortcut)
        if self.receipts.get(key):
            logger.info("Asset %s is already hearted", key)
            if error:
                error()
            return settled(Outcome(error=PreconditionError(f"{key} is already hearted")))
        loop = asyncio.get_running_loop()
        return loop.create_task(self._heart(asset, key, success, error))

    async def _heart(self, asset, key, success, error) -> Outcome:
        try:
            heart = await self.hearts.create(asset.album, asset.shortcut)
        except TransportError as exc:
            logger.warning("Hearting %s failed: %s", key, exc)
            if error:
                error(exc)
            return Outcome(error=exc)

        self.receipts.set(key, heart.identifier)
        asset.hearts = asset.heart_count() + 1
        logger.info("Hearted %s (receipt %s)", key, heart.identifier)
        if success:
            success(heart)
        return Outcome(value=heart)

    def unheart(
        self, asset: Asset, success: Callable | None = None, error: Callable | None = None
    ) -> asyncio.Future:
        key = receipt_key(asset.album, asset.shortcut)
        identifier = self.receipts.get(key)
        if not identifier:
            logger.info("Asset %s is not hearted", key)
            if error:
                error()
            return settled(Outcome(error=PreconditionError(f"{key} is not hearted")))
        loop = asyncio.get_running_loop()
        return loop.create_task(self._unheart(asset, key, identifier, success, error))

    async def _unheart(self, asset, key, identifier, success, error) -> Outcome:
        try:
            data = await self.hearts.destroy(identifier)
        except TransportError as exc:
            logger.warning("Unhearting %s failed: %s", key, exc)
            if error:
                error(exc)
            return Outcome(error=exc)

        self.receipts.remove(key)
        asset.hearts = asset.heart_count() - 1
        logger.info("Unhearted %s", key)
        if success:
            success(data)
        return Outcome(value=data)

    def toggle_heart(
        self, asset: Asset, success: Callable | None = None, error: Callable | None = None
    ) -> asyncio.Future:
        if self.hearted(asset):
            return self.unheart(asset, success, error)
        return self.heart(asset, success, error)
