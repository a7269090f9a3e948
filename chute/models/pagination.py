"""Response envelope and pagination metadata used by the albums API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class PaginationMeta(BaseModel):
    model_config = ConfigDict(extra="allow")

    current_page: int | None = None
    per_page: int | None = None
    next_page: str | None = None
    previous_page: str | None = None


class Envelope(BaseModel, Generic[T]):
    data: T | None = None
    pagination: PaginationMeta | None = None
