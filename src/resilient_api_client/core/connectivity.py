"""Connectivity gate consulted before every dispatch."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger("resilient_api_client")


class ConnectivityGate:
    """Re-queries the provider on every check; fails closed."""

    def __init__(
        self,
        provider: Callable[[], bool | Awaitable[bool]] | None,
        *,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._provider = provider
        self._timeout_seconds = timeout_seconds

    async def is_connected(self) -> bool:
        if self._provider is None:
            logger.warning("connectivity provider unavailable; treating as disconnected")
            return False
        try:
            state = await asyncio.wait_for(self._query(), timeout=self._timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "connectivity check timed out; treating as disconnected timeout=%s",
                self._timeout_seconds,
            )
            return False
        except Exception as exc:
            logger.warning(
                "connectivity check failed; treating as disconnected error=%s",
                exc.__class__.__name__,
            )
            return False
        return state is True

    async def _query(self) -> object:
        # Plain callables run in a worker thread, inside the timeout.
        if inspect.iscoroutinefunction(self._provider):
            return await self._provider()
        state = await asyncio.to_thread(self._provider)
        if inspect.isawaitable(state):
            state = await state
        return state


__all__ = [
    "ConnectivityGate",
]
