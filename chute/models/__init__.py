"""Pydantic models shared by the client and the mock API."""

from .asset import Asset
from .heart import Heart
from .outcome import Outcome
from .pagination import Envelope, PaginationMeta
from .resource import ResourceItem

__all__ = ["Asset", "Envelope", "Heart", "Outcome", "PaginationMeta", "ResourceItem"]
