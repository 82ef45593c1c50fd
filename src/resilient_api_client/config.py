"""Client configuration."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from .core.dispatcher import ApiExceptionHandlerConfig
from .serialization import SerializerSettings, default_serializer_settings

if TYPE_CHECKING:
    from .core.async_transport import AsyncTransport

ConnectivityProvider = Callable[[], bool | Awaitable[bool]]


def assume_connected() -> bool:
    return True


def _default_transport_factory(config: "ApiConfiguration") -> "AsyncTransport":
    from .core.async_transport import HttpxTransport

    return HttpxTransport(config)


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class ApiConfiguration:
    """Runtime configuration shared by every call of one ApiManager."""

    base_url: str
    user_agent: str = "resilient-api-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    serializer: SerializerSettings = field(default_factory=default_serializer_settings)
    exception_handler: ApiExceptionHandlerConfig = field(default_factory=ApiExceptionHandlerConfig)
    connectivity: ConnectivityProvider = assume_connected
    connectivity_timeout_seconds: float = 5.0
    transport_factory: Callable[["ApiConfiguration"], "AsyncTransport"] = _default_transport_factory

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        try:
            url = httpx.URL(self.base_url)
        except (httpx.InvalidURL, TypeError) as exc:
            raise ValueError(f"base_url is malformed: {self.base_url!r}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("base_url must be an absolute http(s) URL")
        if not callable(self.connectivity):
            raise ValueError("connectivity must be callable")
        if self.connectivity_timeout_seconds <= 0:
            raise ValueError("connectivity_timeout_seconds must be > 0")
        if not callable(self.transport_factory):
            raise ValueError("transport_factory must be callable")
        if not isinstance(self.exception_handler, ApiExceptionHandlerConfig):
            raise ValueError("exception_handler must be ApiExceptionHandlerConfig")
        self.transport.validate()
        self.serializer.validate()


__all__ = [
    "ConnectivityProvider",
    "assume_connected",
    "TransportConfig",
    "ApiConfiguration",
]
