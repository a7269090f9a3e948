from typing import Any

import httpx
import pytest

from chute import AssetResource, HttpTransport, MemoryReceiptStore
from chute.api.transport import FetchResponse
from chute.models import PaginationMeta, ResourceItem
from mock_api.api.app import app
from mock_api.store import get_store, seed_store


class ScriptedFetcher:
    """Fetcher that replays canned responses and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def issue(self, params):
        self.calls.append(dict(params))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class RecordFactory:
    def build(self, raw, context):
        return ResourceItem.model_validate(raw)


def page_of(ids, next_page=None, headers=None):
    return FetchResponse(
        data=[{"id": i} for i in ids],
        headers=headers or {},
        pagination=PaginationMeta(next_page=next_page),
    )


@pytest.fixture
def store():
    store = seed_store({"abc": 5, "aus6kwrg": 12})
    app.dependency_overrides[get_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def transport(store, requests_seen):
    async def record(request: httpx.Request) -> None:
        requests_seen.append(request)

    client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://mock",
        event_hooks={"request": [record]},
    )
    return HttpTransport(client=client)


@pytest.fixture
def receipts():
    return MemoryReceiptStore()


@pytest.fixture
def assets(transport, receipts):
    return AssetResource(transport, receipts=receipts)
