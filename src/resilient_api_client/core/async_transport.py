"""Async HTTP transport backed by httpx."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ..auth import ApiToken
from ..config import ApiConfiguration
from .models import ApiRequest, RawResponse
from .transport_shared import (
    build_default_headers,
    build_default_timeout,
    build_request_headers,
    normalize_base_url,
)

logger = logging.getLogger("resilient_api_client")


class AsyncTransport(Protocol):
    async def send(self, request: ApiRequest, token: ApiToken) -> RawResponse: ...
    async def close(self) -> None: ...


class HttpxTransport:
    """Sends ApiRequests through an ``httpx.AsyncClient``."""

    def __init__(
        self,
        config: ApiConfiguration,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=normalize_base_url(config.base_url),
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def send(self, request: ApiRequest, token: ApiToken) -> RawResponse:
        if self._closed:
            raise RuntimeError("transport is already closed")

        path = self._normalize_path(request.path)
        logger.debug(
            "transport send operation=%s method=%s path=%s",
            request.operation,
            request.method,
            path,
        )
        response = await self._client.request(
            request.method,
            path,
            params=dict(request.params),
            content=request.content,
            headers=build_request_headers(request, token),
        )
        content = await response.aread()
        return RawResponse(
            status_code=response.status_code,
            content=content,
            headers=dict(response.headers),
        )

    @staticmethod
    def _normalize_path(path: str) -> str:
        return path.lstrip("/")


__all__ = [
    "AsyncTransport",
    "HttpxTransport",
]
