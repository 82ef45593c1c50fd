"""Shared helpers for transport implementations."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..auth import ApiToken
from ..config import ApiConfiguration
from .models import ApiRequest


def build_default_headers(config: ApiConfiguration) -> Mapping[str, str]:
    return {
        "Accept": config.serializer.content_type,
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: ApiConfiguration) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def normalize_base_url(base_url: str) -> str:
    return base_url.rstrip("/") + "/"


def build_request_headers(request: ApiRequest, token: ApiToken) -> dict[str, str]:
    headers = dict(request.headers)
    headers.update(token.to_headers())
    return headers


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "normalize_base_url",
    "build_request_headers",
]
