"""In-memory stand-in for the Chute albums API.

Run with ``uvicorn mock_api.api.app:app`` and point ``CHUTE_API_URL`` at it.
"""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mock_api.api.routes import assets, hearts
from mock_api.store import AlbumStore, get_store

# (router, prefix, tag)
ROUTES = (
    (assets.router, "/albums", "assets"),
    (hearts.router, "/hearts", "hearts"),
)


def create_app() -> FastAPI:
    api = FastAPI(
        title="Chute Albums Mock API",
        version="0.1.0",
        description="Album assets with cursor or page-number paging, and hearts.",
    )
    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count"],
    )
    for router, prefix, tag in ROUTES:
        api.include_router(router, prefix=prefix, tags=[tag])

    @api.get("/health", tags=["health"])
    def healthcheck(store: AlbumStore = Depends(get_store)) -> dict[str, str | int]:
        return {"status": "ok", "albums": len(store.albums)}

    return api


app = create_app()
