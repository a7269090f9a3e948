"""API routes for album assets and hearting them."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from chute.api.collection import PaginationMode
from chute.models import Asset, Envelope, Heart, PaginationMeta
from mock_api.store import AlbumStore, get_store

router = APIRouter()


SORT_KEYS = {
    "id": "chute_asset_id",
    "time": "created_at",
    "hearts": "hearts",
    "caption": "caption",
}


@router.get("/{album}/assets", response_model=Envelope[list[Asset]])
def list_assets(
    request: Request,
    response: Response,
    album: str,
    page: int = Query(1, ge=1, description="1-based page number"),
    per_page: int = Query(5, ge=1, le=100, description="Assets per page"),
    sort: str | None = Query(None, description="id, time, hearts or caption"),
    since_id: int | None = Query(None, description="Only assets newer than this id"),
    max_id: int | None = Query(None, description="Only assets older than this id"),
    store: AlbumStore = Depends(get_store),
) -> Envelope[list[Asset]]:
    """Return one page of an album's assets, newest first.

    Natural sorts page by ``since_id``/``max_id``; other sorts by ``page``.
    """

    if sort is not None and sort not in SORT_KEYS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unsupported sort value: {sort}",
        )
    if album not in store.albums:
        raise HTTPException(status_code=404, detail="Album not found")

    sort_field = SORT_KEYS[sort or "id"]
    ordered = sorted(
        store.list_assets(album),
        key=lambda record: (record[sort_field], record["chute_asset_id"]),
        reverse=True,
    )
    response.headers["X-Total-Count"] = str(len(ordered))

    next_page = previous_page = None
    mode = PaginationMode.for_sort(sort)
    if mode is PaginationMode.CURSOR and since_id is not None:
        candidates = [r for r in ordered if r["chute_asset_id"] > since_id]
        window = candidates[-per_page:]
        if len(candidates) > per_page:
            previous_page = _page_url(request, since_id=window[0]["chute_asset_id"])
    elif mode is PaginationMode.CURSOR:
        candidates = [r for r in ordered if max_id is None or r["chute_asset_id"] < max_id]
        window = candidates[:per_page]
        if len(candidates) > per_page:
            next_page = _page_url(request, max_id=window[-1]["chute_asset_id"])
    else:
        start = (page - 1) * per_page
        window = ordered[start:start + per_page]
        if start + per_page < len(ordered):
            next_page = _page_url(request, page=page + 1)
        if page > 1:
            previous_page = _page_url(request, page=page - 1)

    meta = PaginationMeta(
        current_page=page,
        per_page=per_page,
        next_page=next_page,
        previous_page=previous_page,
    )
    return Envelope[list[Asset]](data=[Asset.model_validate(r) for r in window], pagination=meta)


@router.get("/{album}/assets/{asset}", response_model=Envelope[Asset])
def get_asset(
    album: str,
    asset: str,
    store: AlbumStore = Depends(get_store),
) -> Envelope[Asset]:
    record = store.find_asset(album, asset)
    if record is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return Envelope[Asset](data=Asset.model_validate(record))


@router.post(
    "/{album}/assets/{asset}/hearts",
    response_model=Envelope[Heart],
    status_code=status.HTTP_201_CREATED,
)
def heart_asset(
    album: str,
    asset: str,
    store: AlbumStore = Depends(get_store),
) -> Envelope[Heart]:
    """Heart an asset; the returned ``identifier`` is needed to undo it."""
    record = store.find_asset(album, asset)
    if record is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return Envelope[Heart](data=Heart.model_validate(store.add_heart(album, record)))


def _page_url(request: Request, **overrides) -> str:
    params = {
        key: value
        for key, value in request.query_params.items()
        if key not in ("page", "since_id", "max_id")
    }
    params.update(overrides)
    return str(request.url.replace_query_params(**params))
