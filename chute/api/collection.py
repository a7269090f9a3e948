"""Paged collections: live, appendable query results.

A ``PagedCollection`` holds the items of a query together with the query
parameters that produced them. ``fetch_next`` and ``fetch_previous`` fetch the
adjacent page and merge it in place. Naturally sorted collections (``sort``
unset, ``"id"`` or ``"time"``) page by cursor, sending ``max_id``/``since_id``
taken from the boundary item; any other sort pages by ``page`` number.
"""

import asyncio
import copy
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import get_settings
from ..errors import PageRangeError, TransportError
from ..models.outcome import Outcome
from .fetcher import Fetcher, ItemFactory

logger = logging.getLogger(__name__)

NATURAL_SORTS = frozenset({"id", "time"})


class PaginationMode(Enum):
    CURSOR = "cursor"
    PAGE_NUMBER = "page"

    @classmethod
    def for_sort(cls, sort: str | None) -> "PaginationMode":
        if not sort or sort in NATURAL_SORTS:
            return cls.CURSOR
        return cls.PAGE_NUMBER


@dataclass
class Query:
    """Parameters of a collection fetch."""

    page: int = 1
    sort: str | None = None
    per_page: int | None = None
    filters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "Query":
        filters = dict(params)
        page = filters.pop("page", None)
        per_page = filters.pop("per_page", None)
        return cls(
            page=int(page) if page is not None else 1,
            sort=filters.pop("sort", None),
            per_page=int(per_page) if per_page is not None else None,
            filters=filters,
        )

    @property
    def mode(self) -> PaginationMode:
        # Recomputed every time; sort may change between fetches.
        return PaginationMode.for_sort(self.sort)

    def to_params(self) -> dict[str, Any]:
        params = copy.deepcopy(self.filters)
        params["page"] = self.page
        if self.sort is not None:
            params["sort"] = self.sort
        if self.per_page is not None:
            params["per_page"] = self.per_page
        return params

    def copy(self) -> "Query":
        return copy.deepcopy(self)


class PagedCollection(Sequence):
    """Ordered items of a query plus the pagination state to extend them."""

    def __init__(
        self,
        query: Query,
        fetcher: Fetcher,
        factory: ItemFactory,
        items: Iterable[Any] = (),
        has_more: bool | None = None,
        cursor_field: str = "id",
        cursor_param: str = "id",
        default_page_size: int | None = None,
    ):
        self.query = query
        self._items = list(items)
        self._has_more = has_more
        self._fetcher = fetcher
        self._factory = factory
        self.cursor_field = cursor_field
        self.cursor_param = cursor_param
        self.default_page_size = default_page_size or get_settings().per_page
        self._pending: asyncio.Task | None = None
        self._in_flight = 0

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(items={len(self._items)}, page={self.query.page}, "
            f"mode={self.query.mode.value}, has_more={self._has_more})"
        )

    @property
    def params(self) -> dict[str, Any]:
        return self.query.to_params()

    @property
    def page(self) -> int:
        return self.query.page

    @property
    def page_size(self) -> int:
        return self.query.per_page or self.default_page_size

    def has_more(self) -> bool:
        """Whether the server is known to hold more items after the last page.

        No request is made. An unknown state counts as ``False``.
        """
        return bool(self._has_more)

    async def loaded(self) -> Outcome:
        """Wait for the initial load started by ``Resource.query``."""
        if self._pending is None:
            return Outcome(value=self)
        return await self._pending

    def load(
        self,
        params: Mapping[str, Any],
        success: Callable | None = None,
        error: Callable | None = None,
    ) -> asyncio.Task:
        """Fetch the first page and replace the contents with it."""
        loop = asyncio.get_running_loop()
        self._pending = loop.create_task(self._load(dict(params), success, error))
        return self._pending

    async def _load(self, params, success, error) -> Outcome:
        try:
            response = await self._fetcher.issue(params)
            items = [self._factory.build(raw, params) for raw in response.records]
        except TransportError as exc:
            logger.warning("Initial load failed: %s", exc)
            if error:
                error(exc)
            return Outcome(error=exc)

        if response.data is not None:
            self._items = items
            pagination = response.pagination
            page_size = int(params.get("per_page") or self.default_page_size)
            self._has_more = not (
                len(response.records) < page_size
                or pagination is None
                or not pagination.next_page
            )
            logger.debug("Loaded %s items; has_more=%s", len(self._items), self._has_more)

        if success:
            success(self, response.headers)
        return Outcome(value=self, headers=response.headers)

    def fetch_next(self, success: Callable | None = None, error: Callable | None = None) -> asyncio.Task:
        """Fetch the following page and append it.

        Resolves to an ``Outcome`` whose value is the detached batch of new
        items. ``success(batch, headers)`` or ``error(exc)`` is called once.
        """
        loop = asyncio.get_running_loop()
        return self._schedule(loop, self._outgoing(1), 1, success, error)

    def fetch_previous(self, success: Callable | None = None, error: Callable | None = None) -> asyncio.Task:
        """Fetch the preceding page and prepend it.

        Raises ``PageRangeError`` without sending a request when page-number
        paging would go below page 1.
        """
        loop = asyncio.get_running_loop()
        return self._schedule(loop, self._outgoing(-1), -1, success, error)

    def _outgoing(self, step: int) -> dict[str, Any]:
        """Move the page counter by ``step`` and build the request parameters."""
        self.query.page += step
        params = self.query.to_params()
        params.pop(f"max_{self.cursor_param}", None)
        params.pop(f"since_{self.cursor_param}", None)
        try:
            if self.query.mode is PaginationMode.CURSOR:
                if step > 0:
                    params[f"max_{self.cursor_param}"] = self._cursor(-1)
                else:
                    params[f"since_{self.cursor_param}"] = self._cursor(0)
                del params["page"]
            elif self.query.page <= 0:
                raise PageRangeError(
                    f"Cannot fetch previous page with index {self.query.page}."
                )
        except PageRangeError:
            self.query.page -= step
            raise
        return params

    def _cursor(self, index: int) -> Any:
        if not self._items:
            raise PageRangeError("Cannot page by cursor through an empty collection.")
        value = getattr(self._items[index], self.cursor_field, None)
        if value is None:
            raise PageRangeError(f"Boundary item has no {self.cursor_field!r} to page from.")
        return value

    def _schedule(self, loop, params, step, success, error) -> asyncio.Task:
        if self._in_flight:
            logger.warning(
                "Overlapping page fetches on %r; results merge in response order", self
            )
        self._in_flight += 1
        return loop.create_task(self._fetch_adjacent(params, step, success, error))

    async def _fetch_adjacent(self, params, step, success, error) -> Outcome:
        try:
            response = await self._fetcher.issue(params)
            # Nothing is merged until every record of the batch has been built.
            batch = self._detach(response.records, params)
        except TransportError as exc:
            self.query.page -= step
            logger.warning("Fetching page %s failed: %s", params.get("page", "by cursor"), exc)
            if error:
                error(exc)
            return Outcome(error=exc)
        finally:
            self._in_flight -= 1

        if step > 0:
            self._items.extend(batch)
            if len(batch) < self.page_size:
                self._has_more = False
        else:
            self._items[:0] = list(batch)
        logger.debug(
            "Merged %s items (%s); collection now holds %s",
            len(batch), "appended" if step > 0 else "prepended", len(self._items),
        )

        if success:
            success(batch, response.headers)
        return Outcome(value=batch, headers=response.headers)

    def _detach(self, records: list[dict[str, Any]], params: Mapping[str, Any]) -> "PagedCollection":
        return PagedCollection(
            self.query.copy(),
            self._fetcher,
            self._factory,
            [self._factory.build(raw, params) for raw in records],
            cursor_field=self.cursor_field,
            cursor_param=self.cursor_param,
            default_page_size=self.default_page_size,
        )
