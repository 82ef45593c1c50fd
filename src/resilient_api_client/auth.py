"""Authentication token and its externally owned holder."""

from __future__ import annotations

from dataclasses import dataclass

AUTHORIZATION_HEADER = "Authorization"
API_KEY_HEADER = "X-Api-Key"


@dataclass(slots=True, frozen=True)
class ApiToken:
    """Opaque credential attached to outgoing requests."""

    access_token: str | None = None
    api_key: str | None = None

    @classmethod
    def empty(cls) -> "ApiToken":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.access_token and not self.api_key

    def to_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers[AUTHORIZATION_HEADER] = f"Bearer {self.access_token}"
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        return headers

    def __repr__(self) -> str:
        return f"ApiToken(is_empty={self.is_empty})"


class TokenHolder:
    """Holds the current token; a refresh is one attribute replace."""

    def __init__(self, token: ApiToken | None = None) -> None:
        self._token = token or ApiToken.empty()

    @property
    def current(self) -> ApiToken:
        return self._token

    def replace(self, token: ApiToken) -> None:
        if not isinstance(token, ApiToken):
            raise TypeError("token must be ApiToken")
        self._token = token

    def clear(self) -> None:
        self._token = ApiToken.empty()


__all__ = [
    "AUTHORIZATION_HEADER",
    "API_KEY_HEADER",
    "ApiToken",
    "TokenHolder",
]
