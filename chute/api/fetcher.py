"""Collaborator interfaces consumed by ``PagedCollection``."""

from collections.abc import Mapping
from typing import Any, Protocol

from ..params import expand_route
from .transport import FetchResponse, Transport


class Fetcher(Protocol):
    """Performs one query against the remote API."""

    async def issue(self, params: Mapping[str, Any]) -> FetchResponse: ...

class ItemFactory(Protocol):
    """Builds a typed item from a raw record and the query that produced it."""

    def build(self, raw: Mapping[str, Any], context: Mapping[str, Any]) -> Any: ...

class RouteFetcher:
    """Fetcher bound to a route template such as ``/albums/{album}/assets/{id}``."""

    def __init__(self, transport: Transport, route: str, method: str = "GET"):
        self.transport = transport
        self.route = route
        self.method = method

    async def issue(self, params: Mapping[str, Any]) -> FetchResponse:
        path, query = expand_route(self.route, params)
        return await self.transport.request(self.method, path, query or None)
