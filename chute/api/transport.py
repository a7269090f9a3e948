"""HTTP transport for the albums API built on httpx."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from ..config import get_settings
from ..errors import TransportError
from ..models.pagination import Envelope, PaginationMeta

logger = logging.getLogger(__name__)


@dataclass
class FetchResponse:
    """Decoded API response: envelope ``data``, pagination and headers."""

    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    pagination: PaginationMeta | None = None

    @property
    def records(self) -> list[dict[str, Any]]:
        return self.data if isinstance(self.data, list) else []


class Transport(Protocol):
    async def request(
        self, method: str, path: str, params: Mapping[str, Any] | None = None
    ) -> FetchResponse: ...


class HttpTransport:
    """Send requests with an ``httpx.AsyncClient`` and unwrap the envelope."""

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.timeout,
            follow_redirects=True,
        )

    async def request(
        self, method: str, path: str, params: Mapping[str, Any] | None = None
    ) -> FetchResponse:
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self.client.request(method, path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("%s %s failed with HTTP %s", method, path, status_code)
            raise TransportError(
                f"{method} {path} returned HTTP {status_code}",
                status_code=status_code,
                payload=_safe_json(exc.response),
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        payload = _safe_json(response)
        if not isinstance(payload, dict):
            payload = {}
        try:
            envelope = Envelope[Any].model_validate(payload)
        except ValidationError as exc:
            raise TransportError(
                f"{method} {path} returned an unexpected payload",
                status_code=response.status_code,
                payload=payload,
            ) from exc
        return FetchResponse(
            data=envelope.data,
            headers=dict(response.headers),
            pagination=envelope.pagination,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _safe_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
