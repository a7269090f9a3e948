from fastapi.testclient import TestClient

from mock_api.api.app import app
from mock_api.store import _parse_seed, seed_store


def test_healthcheck_reports_seeded_albums(store):
    assert TestClient(app).get("/health").json() == {"status": "ok", "albums": 2}


def test_seed_parsing():
    assert _parse_seed("abc:3, xyz:0") == {"abc": 3, "xyz": 0}


def test_seeded_ids_are_unique_across_albums():
    store = seed_store({"abc": 3, "xyz": 2})
    ids = [r["chute_asset_id"] for records in store.albums.values() for r in records]
    assert len(ids) == len(set(ids)) == 5


def test_cursor_listing_walks_newest_first(store):
    client = TestClient(app)
    first = client.get("/albums/aus6kwrg/assets", params={"per_page": 5}).json()
    ids = [a["chute_asset_id"] for a in first["data"]]

    assert ids == sorted(ids, reverse=True)
    assert "max_id=" in first["pagination"]["next_page"]

    older = client.get("/albums/aus6kwrg/assets", params={"per_page": 5, "max_id": ids[-1]}).json()
    assert all(a["chute_asset_id"] < ids[-1] for a in older["data"])

    newer = client.get("/albums/aus6kwrg/assets", params={"per_page": 2, "since_id": ids[2]}).json()
    assert [a["chute_asset_id"] for a in newer["data"]] == ids[:2]


def test_page_listing_with_custom_sort(store):
    client = TestClient(app)
    response = client.get("/albums/aus6kwrg/assets", params={"sort": "hearts", "page": 3, "per_page": 5})
    body = response.json()

    assert response.headers["x-total-count"] == "12"
    assert len(body["data"]) == 2
    assert body["pagination"]["next_page"] is None
    assert "page=2" in body["pagination"]["previous_page"]


def test_unknown_sort_and_album_are_rejected(store):
    client = TestClient(app)
    assert client.get("/albums/abc/assets", params={"sort": "size"}).status_code == 422
    assert client.get("/albums/nope/assets").status_code == 404


def test_heart_lifecycle(store):
    client = TestClient(app)
    created = client.post("/albums/abc/assets/abc000/hearts")
    assert created.status_code == 201
    identifier = created.json()["data"]["identifier"]
    assert store.find_asset("abc", "abc000")["hearts"] == 1

    assert client.get(f"/hearts/{identifier}").json()["data"]["album"] == "abc"
    assert client.delete(f"/hearts/{identifier}").status_code == 200
    assert client.delete(f"/hearts/{identifier}").status_code == 404
    assert store.find_asset("abc", "abc000")["hearts"] == 0
