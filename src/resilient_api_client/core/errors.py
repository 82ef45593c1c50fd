"""Error types, outcome classification and error payload decoding."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..serialization import SerializerSettings


class Outcome(str, enum.Enum):
    """Classification assigned to a completed or short-circuited call."""

    SUCCESS = "success"
    UNAUTHORIZED = "unauthorized"
    NO_NETWORK = "no_network"
    OTHER_HTTP_ERROR = "other_http_error"
    TRANSPORT_EXCEPTION = "transport_exception"


class ErrorMessages:
    """Fixed error texts used for synthesized error bodies."""

    NO_NETWORK = "No network connection is available. Please check your connection and try again."
    TRANSPORT_FAILURE = "The request could not be completed. Please try again later."


@dataclass(slots=True, frozen=True)
class ErrorResult:
    """Structured error payload decoded from a failed response body."""

    error_message: str = ""
    error_code: str | None = None
    errors: tuple[str, ...] = field(default=())
    raw: object = None


class ApiError(Exception):
    """Base exception for this package."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiConfigurationError(ApiError, ValueError):
    """Invalid configuration or operation table; raised, never returned."""


class ApiClientClosedError(ApiError):
    """Raised when a manager is used after close."""


class ApiHandledException(ApiError):
    """A recovered failure carried on a ServiceResult.

    The raw error body is kept as received; it is only decoded when
    ``get_error_result`` is called.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str,
        outcome: Outcome,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.body = body
        self.outcome = outcome

    def get_error_result(self, settings: SerializerSettings | None = None) -> ErrorResult:
        """Decode the stored body; malformed or empty bodies yield a default payload."""

        if settings is None:
            from ..serialization import default_serializer_settings

            settings = default_serializer_settings()
        return decode_error_body(self.body, settings)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code!r}, "
            f"outcome={self.outcome.value!r})"
        )


def _first_text(payload: Mapping[object, object], keys: Sequence[str]) -> str | None:
    for key in keys:
        value = payload.get(key)
        if value is None:
            continue
        return str(value)
    return None


def _error_details(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        return tuple(str(item) for item in value)
    if isinstance(value, Mapping):
        details: list[str] = []
        for key, item in value.items():
            if isinstance(item, Sequence) and not isinstance(item, str):
                details.extend(f"{key}: {entry}" for entry in item)
            else:
                details.append(f"{key}: {item}")
        return tuple(details)
    return ()


def decode_error_body(body: str, settings: SerializerSettings) -> ErrorResult:
    if not body or not body.strip():
        return ErrorResult()
    try:
        payload = settings.loads(body)
    except Exception:
        return ErrorResult(raw=body)

    if isinstance(payload, str):
        return ErrorResult(error_message=payload, raw=payload)
    if not isinstance(payload, Mapping):
        return ErrorResult(raw=payload)

    return ErrorResult(
        error_message=_first_text(payload, settings.error_message_keys) or "",
        error_code=_first_text(payload, settings.error_code_keys),
        errors=_error_details(payload.get("errors", payload.get("Errors"))),
        raw=payload,
    )


__all__ = [
    "Outcome",
    "ErrorMessages",
    "ErrorResult",
    "ApiError",
    "ApiConfigurationError",
    "ApiClientClosedError",
    "ApiHandledException",
    "decode_error_body",
]
