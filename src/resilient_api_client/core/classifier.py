"""Response classification."""

from __future__ import annotations

from http import HTTPStatus

from .errors import Outcome
from .models import RawResponse

UNAUTHORIZED_STATUS = int(HTTPStatus.UNAUTHORIZED)


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def classify_status(status_code: int) -> Outcome:
    if is_success_status(status_code):
        return Outcome.SUCCESS
    if status_code == UNAUTHORIZED_STATUS:
        return Outcome.UNAUTHORIZED
    return Outcome.OTHER_HTTP_ERROR


def classify_outcome(
    response: RawResponse | None,
    *,
    connected: bool = True,
    transport_error: BaseException | None = None,
) -> Outcome:
    """Map a dispatch attempt to exactly one outcome.

    Missing connectivity wins over everything else since it is decided
    before dispatch.
    """

    if not connected:
        return Outcome.NO_NETWORK
    if transport_error is not None or response is None:
        return Outcome.TRANSPORT_EXCEPTION
    return classify_status(response.status_code)


__all__ = [
    "UNAUTHORIZED_STATUS",
    "is_success_status",
    "classify_status",
    "classify_outcome",
]
