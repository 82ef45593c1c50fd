"""Shared helpers for manager bootstrap."""

from __future__ import annotations

from .auth import ApiToken, TokenHolder
from .config import ApiConfiguration
from .core.errors import ApiConfigurationError


def validate_configuration(config: ApiConfiguration) -> None:
    if not isinstance(config, ApiConfiguration):
        raise ApiConfigurationError("config must be ApiConfiguration")
    try:
        config.validate()
    except ValueError as exc:
        raise ApiConfigurationError(str(exc)) from exc


def resolve_token_holder(token: ApiToken | TokenHolder | None) -> TokenHolder:
    if token is None:
        return TokenHolder()
    if isinstance(token, TokenHolder):
        return token
    if isinstance(token, ApiToken):
        return TokenHolder(token)
    raise ApiConfigurationError("token must be ApiToken or TokenHolder")


__all__ = [
    "validate_configuration",
    "resolve_token_holder",
]
