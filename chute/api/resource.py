"""Generic REST resource with paged ``query`` and live ``get``.

Both entry points return immediately: ``query`` hands back an empty
``PagedCollection`` and ``get`` an empty item, and each is filled in place when
the request resolves. They must be called from a running asyncio loop.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from ..errors import TransportError
from ..models.outcome import Outcome
from ..models.resource import ResourceItem
from ..params import normalize_params
from .collection import PagedCollection, Query
from .fetcher import RouteFetcher
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


class Resource:
    """Endpoint described by a route template and an item model.

    Also acts as the ``ItemFactory`` of its collections.
    """

    model: type[ResourceItem] = ResourceItem
    cursor_field = "id"
    cursor_param = "id"
    container_key: str | None = None
    # (canonical, aliases) pairs folded by both query and get
    aliases: Sequence[tuple[str, Sequence[str]]] = ()
    # extra pairs folded by get only
    member_aliases: Sequence[tuple[str, Sequence[str]]] = ()

    def __init__(
        self,
        route: str,
        transport: Transport | None = None,
        model: type[ResourceItem] | None = None,
        per_page: int | None = None,
    ):
        self.route = route
        self.transport = transport or HttpTransport()
        if model is not None:
            self.model = model
        self.per_page = per_page
        self.fetcher = RouteFetcher(self.transport, route)

    def build(self, raw: Mapping[str, Any], context: Mapping[str, Any]) -> ResourceItem:
        data = dict(raw)
        if self.container_key and context.get(self.container_key) is not None:
            data[self.container_key] = context[self.container_key]
        item = self._validate(data)
        item._resource = self
        return item

    def _validate(self, data: Mapping[str, Any]) -> ResourceItem:
        try:
            return self.model.model_validate(data)
        except ValidationError as exc:
            raise TransportError(
                f"{self.route} returned a malformed {self.model.__name__} record",
                payload=data,
            ) from exc

    def normalize(self, params: Mapping[str, Any] | None, member: bool = False) -> dict[str, Any]:
        rules = [*self.aliases, *self.member_aliases] if member else list(self.aliases)
        return normalize_params(params, *rules)

    def query(
        self,
        params: Mapping[str, Any] | None = None,
        success: Callable | None = None,
        error: Callable | None = None,
    ) -> PagedCollection:
        """Fetch a collection.

        Args:
            params: Query parameters; ``perPage`` is accepted for ``per_page``.
            success: Called with ``(collection, headers)`` once loaded.
            error: Called with the ``TransportError`` on failure.

        Returns:
            The collection, empty until the first page arrives.
        """
        params = self.normalize(params)
        collection = PagedCollection(
            Query.from_params({"page": 1, **params}),
            self.fetcher,
            self,
            cursor_field=self.cursor_field,
            cursor_param=self.cursor_param,
            default_page_size=self.per_page,
        )
        collection.load(params, success, error)
        return collection

    def get(
        self,
        params: Mapping[str, Any] | None = None,
        success: Callable | None = None,
        error: Callable | None = None,
    ) -> ResourceItem:
        """Fetch a single item into a handle that is returned right away."""
        loop = asyncio.get_running_loop()
        params = self.normalize(params, member=True)
        handle = self.model()
        handle._resource = self
        handle._pending = loop.create_task(self._fill(handle, params, success, error))
        return handle

    async def _fill(self, handle, params, success, error) -> Outcome:
        try:
            response = await self.fetcher.issue(params)
            data = dict(response.data) if isinstance(response.data, Mapping) else {}
            key = self.container_key
            if key and data.get(key) is None and params.get(key) is not None:
                data[key] = params[key]
            record = self._validate(data)
        except TransportError as exc:
            logger.warning("Fetching %s failed: %s", self.route, exc)
            if error:
                error(exc)
            return Outcome(error=exc)

        handle.update_from(record.model_dump())

        if success:
            success(handle, response.headers)
        return Outcome(value=handle, headers=response.headers)


def settled(outcome: Outcome) -> asyncio.Future:
    """Return an already-completed future holding ``outcome``."""
    future = asyncio.get_running_loop().create_future()
    future.set_result(outcome)
    return future
