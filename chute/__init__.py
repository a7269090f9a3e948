"""Client for the Chute albums API: paged asset collections and hearts."""

import logging

logger = logging.getLogger("chute")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

from .api.asset import AssetResource  # noqa: E402
from .api.collection import PagedCollection, PaginationMode  # noqa: E402
from .api.heart import HeartResource  # noqa: E402
from .api.resource import Resource  # noqa: E402
from .api.transport import HttpTransport  # noqa: E402
from .errors import (  # noqa: E402
    ChuteError,
    PageRangeError,
    PreconditionError,
    TransportError,
)
from .storage import JsonReceiptStore, MemoryReceiptStore  # noqa: E402

__all__ = [
    "AssetResource",
    "ChuteError",
    "HeartResource",
    "HttpTransport",
    "JsonReceiptStore",
    "MemoryReceiptStore",
    "PageRangeError",
    "PagedCollection",
    "PaginationMode",
    "PreconditionError",
    "Resource",
    "TransportError",
    "logger",
]
