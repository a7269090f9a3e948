"""API routes for hearts addressed by their identifier."""

from fastapi import APIRouter, Depends, HTTPException

from chute.models import Envelope, Heart
from mock_api.store import AlbumStore, get_store

router = APIRouter()


@router.get("/{identifier}", response_model=Envelope[Heart])
def get_heart(identifier: str, store: AlbumStore = Depends(get_store)) -> Envelope[Heart]:
    heart = store.hearts.get(identifier)
    if heart is None:
        raise HTTPException(status_code=404, detail="Heart not found")
    return Envelope[Heart](data=Heart.model_validate(heart))


@router.delete("/{identifier}", response_model=Envelope[Heart])
def delete_heart(identifier: str, store: AlbumStore = Depends(get_store)) -> Envelope[Heart]:
    heart = store.remove_heart(identifier)
    if heart is None:
        raise HTTPException(status_code=404, detail="Heart not found")
    return Envelope[Heart](data=Heart.model_validate(heart))
