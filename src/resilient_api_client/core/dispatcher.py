"""Callback slots for handled failures and their dispatch."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import Outcome

if TYPE_CHECKING:
    from .models import ServiceResult

logger = logging.getLogger("resilient_api_client")

ResultCallback = Callable[["ServiceResult[Any]"], None | Awaitable[None]]


@dataclass(slots=True, frozen=True)
class ApiExceptionHandlerConfig:
    """Optional callbacks for session expiry and missing connectivity.

    Any other failure has no slot; it is only carried on the result.
    """

    on_session_expired: ResultCallback | None = None
    on_no_network_connectivity: ResultCallback | None = None

    def __post_init__(self) -> None:
        for name in ("on_session_expired", "on_no_network_connectivity"):
            callback = getattr(self, name)
            if callback is not None and not callable(callback):
                raise TypeError(f"{name} must be callable or None")

    def callback_for(self, outcome: Outcome) -> ResultCallback | None:
        if outcome is Outcome.UNAUTHORIZED:
            return self.on_session_expired
        if outcome is Outcome.NO_NETWORK:
            return self.on_no_network_connectivity
        return None


async def dispatch_callback(
    outcome: Outcome,
    result: "ServiceResult[Any]",
    handler_config: ApiExceptionHandlerConfig,
) -> bool:
    """Invoke at most one callback matching ``outcome``; return whether one fired."""

    callback = handler_config.callback_for(outcome)
    if callback is None:
        return False
    logger.debug("dispatching callback outcome=%s", outcome.value)
    returned = callback(result)
    if inspect.isawaitable(returned):
        await returned
    return True


__all__ = [
    "ResultCallback",
    "ApiExceptionHandlerConfig",
    "dispatch_callback",
]
