"""Request, response and result models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Generic, TypeVar

from .errors import ApiHandledException, Outcome

T = TypeVar("T")

REQUEST_TIMEOUT_STATUS = int(HTTPStatus.REQUEST_TIMEOUT)
TRANSPORT_FAILURE_STATUS = int(HTTPStatus.SERVICE_UNAVAILABLE)


@dataclass(slots=True, frozen=True)
class ApiRequest:
    operation: str
    method: str
    path: str
    params: Mapping[str, str] = field(default_factory=dict)
    content: bytes | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class RawResponse:
    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding, errors="replace")


@dataclass(slots=True, frozen=True)
class ServiceResult(Generic[T]):
    """Uniform outcome of an executed call."""

    is_successful: bool
    status_code: int
    outcome: Outcome
    result: T | None = None
    exception: ApiHandledException | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.is_successful and self.exception is not None:
            raise ValueError("successful result must not carry an exception")
        if not self.is_successful and not self.status_code:
            raise ValueError("failed result must carry a status code")

    @classmethod
    def success(
        cls,
        status_code: int,
        result: T | None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> "ServiceResult[T]":
        return cls(
            is_successful=True,
            status_code=status_code,
            outcome=Outcome.SUCCESS,
            result=result,
            headers=dict(headers or {}),
        )

    @classmethod
    def failure(
        cls,
        exception: ApiHandledException,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> "ServiceResult[T]":
        return cls(
            is_successful=False,
            status_code=exception.status_code or TRANSPORT_FAILURE_STATUS,
            outcome=exception.outcome,
            exception=exception,
            headers=dict(headers or {}),
        )


__all__ = [
    "REQUEST_TIMEOUT_STATUS",
    "TRANSPORT_FAILURE_STATUS",
    "ApiRequest",
    "RawResponse",
    "ServiceResult",
]
