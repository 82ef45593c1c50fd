"""Request execution: connectivity gate, dispatch, classification, callbacks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..auth import TokenHolder
from ..config import ApiConfiguration
from ..serialization import decode_payload
from .async_transport import AsyncTransport
from .classifier import classify_outcome
from .connectivity import ConnectivityGate
from .dispatcher import ApiExceptionHandlerConfig, dispatch_callback
from .errors import ApiHandledException, ErrorMessages, Outcome
from .models import (
    REQUEST_TIMEOUT_STATUS,
    TRANSPORT_FAILURE_STATUS,
    ApiRequest,
    RawResponse,
    ServiceResult,
)

logger = logging.getLogger("resilient_api_client")


class RequestExecutor:
    """Runs one call end to end and always returns a ServiceResult."""

    def __init__(
        self,
        config: ApiConfiguration,
        *,
        transport: Callable[[], Awaitable[AsyncTransport]],
        tokens: TokenHolder,
        gate: ConnectivityGate | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._tokens = tokens
        self._gate = gate or ConnectivityGate(
            config.connectivity,
            timeout_seconds=config.connectivity_timeout_seconds,
        )

    async def execute(
        self,
        request: ApiRequest,
        *,
        returns: object,
        handler_config: ApiExceptionHandlerConfig | None = None,
        force_execution: bool = False,
    ) -> ServiceResult[Any]:
        handlers = self._config.exception_handler if handler_config is None else handler_config

        if not await self._gate.is_connected():
            result = self._no_network_result(request, force_execution=force_execution)
            await dispatch_callback(Outcome.NO_NETWORK, result, handlers)
            return result

        transport = await self._transport()
        token = self._tokens.current
        logger.debug("request start operation=%s method=%s", request.operation, request.method)
        try:
            response = await transport.send(request, token)
        except asyncio.CancelledError as exc:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            result = self._transport_failure_result(request, exc)
        except Exception as exc:
            result = self._transport_failure_result(request, exc)
        else:
            result = self._response_result(request, response, returns=returns)

        await dispatch_callback(result.outcome, result, handlers)
        return result

    def _error_body(self, message: str) -> str:
        serializer = self._config.serializer
        return serializer.dumps({serializer.error_message_keys[0]: message})

    def _no_network_result(self, request: ApiRequest, *, force_execution: bool) -> ServiceResult[Any]:
        if force_execution:
            logger.debug(
                "forced execution requested while offline; transport skipped operation=%s",
                request.operation,
            )
        logger.warning("no network connectivity; request skipped operation=%s", request.operation)
        body = self._error_body(ErrorMessages.NO_NETWORK)
        return ServiceResult.failure(
            ApiHandledException(
                ErrorMessages.NO_NETWORK,
                status_code=REQUEST_TIMEOUT_STATUS,
                body=body,
                outcome=Outcome.NO_NETWORK,
            )
        )

    def _transport_failure_result(
        self,
        request: ApiRequest,
        error: BaseException,
        *,
        status_code: int = TRANSPORT_FAILURE_STATUS,
        headers: dict[str, str] | None = None,
    ) -> ServiceResult[Any]:
        logger.warning(
            "request transport failure operation=%s status=%s error=%s",
            request.operation,
            status_code,
            error.__class__.__name__,
        )
        body = self._error_body(ErrorMessages.TRANSPORT_FAILURE)
        handled = ApiHandledException(
            ErrorMessages.TRANSPORT_FAILURE,
            status_code=status_code,
            body=body,
            outcome=Outcome.TRANSPORT_EXCEPTION,
        )
        handled.__cause__ = error
        return ServiceResult.failure(handled, headers=headers)

    def _response_result(
        self,
        request: ApiRequest,
        response: RawResponse,
        *,
        returns: object,
    ) -> ServiceResult[Any]:
        status_code = response.status_code
        headers = dict(response.headers)
        logger.debug(
            "response received operation=%s http_status=%s",
            request.operation,
            status_code,
        )
        outcome = classify_outcome(response)
        if outcome is Outcome.SUCCESS:
            try:
                payload = decode_payload(response.content, returns, self._config.serializer)
            except Exception as exc:
                return self._transport_failure_result(
                    request,
                    exc,
                    status_code=status_code,
                    headers=headers,
                )
            logger.info("request success operation=%s http_status=%s", request.operation, status_code)
            return ServiceResult.success(status_code, payload, headers=headers)

        logger.warning(
            "request failed operation=%s http_status=%s outcome=%s",
            request.operation,
            status_code,
            outcome.value,
        )
        return ServiceResult.failure(
            ApiHandledException(
                f"request {request.operation} failed with HTTP {status_code}",
                status_code=status_code,
                body=response.text(self._config.serializer.encoding),
                outcome=outcome,
            ),
            headers=headers,
        )


__all__ = [
    "RequestExecutor",
]
