"""Base model for items returned by a resource endpoint."""

import asyncio
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .outcome import Outcome


class ResourceItem(BaseModel):
    """A server record. Unknown fields are kept as extra attributes.

    Instances returned by ``Resource.get`` start empty and are filled in place
    once the request resolves; ``await item.loaded()`` waits for that.
    """

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None

    _resource: Any = PrivateAttr(default=None)
    _pending: asyncio.Task | None = PrivateAttr(default=None)

    def update_from(self, data: Mapping[str, Any]) -> None:
        """Copy every field of ``data`` onto this instance."""
        for key, value in data.items():
            setattr(self, key, value)

    async def loaded(self) -> Outcome:
        if self._pending is None:
            return Outcome(value=self)
        return await self._pending
