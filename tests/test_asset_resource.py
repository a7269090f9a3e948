import pytest

from chute import PageRangeError, PreconditionError, TransportError
from chute.api.transport import FetchResponse
from chute.models import Asset

from conftest import ScriptedFetcher


@pytest.mark.asyncio
async def test_query_fills_live_collection_then_pages_forward(assets, requests_seen):
    collection = assets.query({"album": "abc", "perPage": 3})

    assert len(collection) == 0
    assert collection.has_more() is False
    assert collection.params == {"album": "abc", "page": 1, "per_page": 3}

    outcome = await collection.loaded()
    assert outcome.ok and outcome.value is collection
    assert len(collection) == 3
    assert collection.has_more() is True
    assert {asset.album for asset in collection} == {"abc"}

    first_request = requests_seen[0]
    assert first_request.url.path == "/albums/abc/assets"
    assert dict(first_request.url.params) == {"per_page": "3"}

    batch = (await collection.fetch_next()).value
    assert len(batch) == 2
    assert len(collection) == 5
    assert collection.has_more() is False
    assert list(collection)[3:] == list(batch)
    assert all(asset.album == "abc" for asset in batch)

    params = requests_seen[1].url.params
    assert "page" not in params
    assert params["max_id"] == str(collection[2].chute_asset_id)

    ids = [asset.chute_asset_id for asset in collection]
    assert ids == sorted(ids, reverse=True)


@pytest.mark.asyncio
async def test_album_aliases_are_accepted(assets, requests_seen):
    collection = assets.query({"album_shortcut": "abc", "album_id": "aus6kwrg"})
    await collection.loaded()

    assert requests_seen[0].url.path == "/albums/aus6kwrg/assets"
    assert collection.params["album"] == "aus6kwrg"
    assert "album_id" not in collection.params


@pytest.mark.asyncio
async def test_success_callback_receives_collection_and_headers(assets):
    seen = []
    collection = assets.query(
        {"album": "abc"},
        lambda result, headers: seen.append((result, headers["x-total-count"])),
    )
    await collection.loaded()

    assert seen == [(collection, "5")]
    assert collection.has_more() is False


@pytest.mark.asyncio
async def test_fetch_previous_by_cursor_prepends_newer_assets(assets, store):
    collection = assets.query({"album": "aus6kwrg", "per_page": 4})
    await collection.loaded()
    await collection.fetch_next()
    tail = assets.query({"album": "aus6kwrg", "per_page": 4, "max_id": collection[3].chute_asset_id})
    await tail.loaded()

    batch = (await tail.fetch_previous()).value

    assert [a.shortcut for a in batch] == [a.shortcut for a in collection[:4]]
    assert [a.shortcut for a in tail] == [a.shortcut for a in collection[:8]]


@pytest.mark.asyncio
async def test_custom_sort_pages_by_number(assets, requests_seen):
    collection = assets.query({"album": "aus6kwrg", "per_page": 4, "sort": "hearts"})
    await collection.loaded()
    first_page = [a.shortcut for a in collection]

    await collection.fetch_next()
    params = requests_seen[-1].url.params
    assert params["page"] == "2"
    assert "max_id" not in params and "since_id" not in params
    assert not set(first_page) & {a.shortcut for a in collection[4:]}

    await collection.fetch_previous()
    assert requests_seen[-1].url.params["page"] == "1"
    assert [a.shortcut for a in collection[:4]] == first_page

    sent = len(requests_seen)
    with pytest.raises(PageRangeError):
        collection.fetch_previous()
    assert len(requests_seen) == sent


@pytest.mark.asyncio
async def test_query_error_reaches_error_callback(assets):
    errors = []
    collection = assets.query({"album": "missing"}, error=errors.append)

    outcome = await collection.loaded()

    assert not outcome.ok
    assert isinstance(outcome.error, TransportError)
    assert outcome.error.status_code == 404
    assert errors == [outcome.error]
    assert len(collection) == 0


@pytest.mark.asyncio
async def test_get_returns_handle_filled_in_place(assets, requests_seen):
    handle = assets.get({"album_id": "abc", "shortcut": "abc001"})

    assert isinstance(handle, Asset)
    assert handle.shortcut is None
    assert handle.caption is None

    outcome = await handle.loaded()

    assert outcome.value is handle
    assert handle.shortcut == "abc001"
    assert handle.caption == "Asset 2 of abc"
    assert handle.album == "abc"
    assert requests_seen[0].url.path == "/albums/abc/assets/abc001"


@pytest.mark.asyncio
async def test_get_missing_asset_reports_error(assets):
    errors = []
    handle = assets.get({"album": "abc", "id": "nope"}, error=errors.append)

    outcome = await handle.loaded()

    assert not outcome.ok
    assert errors and errors[0].status_code == 404
    assert handle.shortcut is None


@pytest.mark.asyncio
async def test_heart_twice_fails_without_request(assets, receipts, store, requests_seen):
    asset = assets.get({"album": "abc", "asset": "abc002"})
    await asset.loaded()
    starting = asset.heart_count()

    hearts = []
    outcome = await asset.heart(success=hearts.append)
    assert outcome.ok
    assert asset.hearted()
    assert asset.heart_count() == starting + 1
    assert receipts.get("abc-abc002-heart") == hearts[0].identifier
    assert store.find_asset("abc", "abc002")["hearts"] == starting + 1

    sent = len(requests_seen)
    errors = []
    outcome = await asset.heart(error=lambda *args: errors.append(args))
    assert errors == [()]
    assert isinstance(outcome.error, PreconditionError)
    assert len(requests_seen) == sent


@pytest.mark.asyncio
async def test_unheart_removes_receipt(assets, receipts, store, requests_seen):
    asset = assets.get({"album": "abc", "id": "abc003"})
    await asset.loaded()
    await asset.heart()
    count = asset.heart_count()

    outcome = await asset.unheart()

    assert outcome.ok
    assert requests_seen[-1].method == "DELETE"
    assert not asset.hearted()
    assert asset.heart_count() == count - 1
    assert receipts.get("abc-abc003-heart") is None
    assert store.hearts == {}

    errors = []
    outcome = await asset.unheart(error=lambda *args: errors.append(args))
    assert errors == [()]
    assert not outcome.ok


@pytest.mark.asyncio
async def test_toggle_heart_flips_state(assets):
    collection = assets.query({"album": "abc"})
    await collection.loaded()
    asset = collection[0]

    await asset.toggle_heart()
    assert asset.hearted()
    await asset.toggle_heart()
    assert not asset.hearted()


@pytest.mark.asyncio
async def test_unheart_failure_keeps_receipt(assets, receipts):
    asset = assets.get({"album": "abc", "id": "abc000"})
    await asset.loaded()
    receipts.set("abc-abc000-heart", "stale")
    errors = []

    outcome = await asset.unheart(error=errors.append)

    assert isinstance(outcome.error, TransportError)
    assert errors == [outcome.error]
    assert asset.hearted()


@pytest.mark.asyncio
async def test_heart_can_be_removed_by_identifier(assets, store):
    asset = assets.get({"album": "abc", "id": "abc004"})
    await asset.loaded()
    hearts = []
    await asset.heart(success=hearts.append)

    removed = []
    outcome = await hearts[0].remove(success=removed.append)

    assert outcome.ok
    assert removed[0]["identifier"] == hearts[0].identifier
    assert store.hearts == {}


@pytest.mark.asyncio
async def test_get_with_malformed_record_reports_error(assets):
    assets.fetcher = ScriptedFetcher(FetchResponse(data={"chute_asset_id": "not-a-number"}))
    errors = []

    handle = assets.get({"album": "abc", "id": "abc001"}, lambda *args: errors.append("success"), errors.append)
    outcome = await handle.loaded()

    assert isinstance(outcome.error, TransportError)
    assert errors == [outcome.error]
    assert handle.chute_asset_id is None
