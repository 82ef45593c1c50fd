"""Serializer settings used for request bodies, payloads and error bodies."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass

DEFAULT_ERROR_MESSAGE_KEYS: tuple[str, ...] = (
    "errorMessage",
    "ErrorMessage",
    "error_message",
    "message",
    "Message",
)
DEFAULT_ERROR_CODE_KEYS: tuple[str, ...] = ("errorCode", "ErrorCode", "error_code", "code")


@dataclass(slots=True, frozen=True)
class SerializerSettings:
    """Body encoding/decoding settings."""

    loads: Callable[[str], object] = json.loads
    dumps: Callable[[object], str] = json.dumps
    encoding: str = "utf-8"
    content_type: str = "application/json"
    error_message_keys: tuple[str, ...] = DEFAULT_ERROR_MESSAGE_KEYS
    error_code_keys: tuple[str, ...] = DEFAULT_ERROR_CODE_KEYS

    def validate(self) -> None:
        if not callable(self.loads) or not callable(self.dumps):
            raise ValueError("serializer.loads and serializer.dumps must be callable")
        if not self.encoding:
            raise ValueError("serializer.encoding must not be empty")
        try:
            "".encode(self.encoding)
        except LookupError as exc:
            raise ValueError(f"serializer.encoding is unknown: {self.encoding}") from exc
        if not self.error_message_keys:
            raise ValueError("serializer.error_message_keys must not be empty")

    def encode(self, value: object) -> bytes:
        if isinstance(value, bytes):
            return value
        if isinstance(value, str):
            return value.encode(self.encoding)
        return self.dumps(value).encode(self.encoding)

    def decode_text(self, content: bytes) -> str:
        return content.decode(self.encoding, errors="replace")


def default_serializer_settings() -> SerializerSettings:
    return SerializerSettings()


def decode_payload(content: bytes, returns: object, settings: SerializerSettings) -> object:
    """Decode a successful response body into the operation's declared shape.

    ``None`` discards the body, ``str`` and ``bytes`` keep it raw, and any
    other callable is applied to the JSON-decoded body. ``object``, ``dict``
    and ``list`` are passed through after a type check.
    """

    if returns is None:
        return None
    if returns is bytes:
        return content
    if returns is str:
        return settings.decode_text(content)

    text = settings.decode_text(content)
    if not text.strip():
        return None
    decoded = settings.loads(text)
    if returns is object:
        return decoded
    if returns in (dict, list):
        if not isinstance(decoded, returns):
            raise TypeError(f"expected JSON {returns.__name__}, got {type(decoded).__name__}")
        return decoded
    if not callable(returns):
        raise TypeError("returns must be None, str, bytes or a callable")
    return returns(decoded)


__all__ = [
    "DEFAULT_ERROR_MESSAGE_KEYS",
    "DEFAULT_ERROR_CODE_KEYS",
    "SerializerSettings",
    "default_serializer_settings",
    "decode_payload",
]
