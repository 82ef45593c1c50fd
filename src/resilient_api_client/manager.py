"""Public manager entrypoint binding an operation table to the pipeline."""

from __future__ import annotations

from types import TracebackType
from typing import Any

from .auth import ApiToken, TokenHolder
from .client_shared import resolve_token_holder, validate_configuration
from .config import ApiConfiguration
from .core.async_transport import AsyncTransport
from .core.dispatcher import ApiExceptionHandlerConfig
from .core.errors import ApiClientClosedError
from .core.executor import RequestExecutor
from .core.models import ApiRequest, ServiceResult
from .operations import ApiDefinition, ApiOperation


class PendingRequest:
    """A bound call; nothing is sent until ``wait_for_response`` is awaited."""

    __slots__ = ("_owner", "_operation", "_request", "arguments")

    def __init__(
        self,
        owner: "ApiManager",
        operation: ApiOperation,
        request: ApiRequest,
        arguments: dict[str, object],
    ) -> None:
        self._owner = owner
        self._operation = operation
        self._request = request
        self.arguments = arguments

    @property
    def operation(self) -> ApiOperation:
        return self._operation

    @property
    def request(self) -> ApiRequest:
        return self._request

    async def wait_for_response(
        self,
        handler_config: ApiExceptionHandlerConfig | None = None,
        force_execution: bool = False,
    ) -> ServiceResult[Any]:
        self._owner._ensure_open()
        return await self._owner._executor.execute(
            self._request,
            returns=self._operation.returns,
            handler_config=handler_config,
            force_execution=force_execution,
        )

    def __repr__(self) -> str:
        return f"PendingRequest(operation={self._operation.name!r})"


class _BoundOperation:
    def __init__(self, owner: "ApiManager", operation: ApiOperation) -> None:
        self._owner = owner
        self._operation = operation
        self.__name__ = operation.name

    def __call__(self, *args: object, **kwargs: object) -> PendingRequest:
        self._owner._ensure_open()
        bound = self._operation.bind(args, kwargs)
        request = self._operation.build_request(bound, self._owner.configuration.serializer)
        return PendingRequest(self._owner, self._operation, request, bound)

    def __repr__(self) -> str:
        return f"<operation {self._operation.name} {self._operation.method} {self._operation.path}>"


class ApiClient:
    """Exposes one callable per operation of the bound definition."""

    def __init__(self, owner: "ApiManager", definition: ApiDefinition) -> None:
        self._definition = definition
        self._bound = {op.name: _BoundOperation(owner, op) for op in definition}

    def __getattr__(self, name: str) -> _BoundOperation:
        # Read through __dict__; attributes may be absent during copy or unpickling.
        bound = self.__dict__.get("_bound", {})
        if name in bound:
            return bound[name]
        definition = self.__dict__.get("_definition")
        label = definition.name if definition is not None else None
        raise AttributeError(f"{type(self).__name__} for {label!r} has no operation {name!r}")

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self.__dict__.get("_bound", {})})


class ApiManager:
    """Binds an ApiDefinition and ApiConfiguration into a reusable client."""

    def __init__(
        self,
        definition: ApiDefinition,
        config: ApiConfiguration,
        *,
        token: ApiToken | TokenHolder | None = None,
    ) -> None:
        validate_configuration(config)
        self._config = config
        self._tokens = resolve_token_holder(token)
        self._transport: AsyncTransport | None = None
        self._closed = False
        self._executor = RequestExecutor(
            config,
            transport=self._get_transport,
            tokens=self._tokens,
        )
        self.client = ApiClient(self, definition)

    @property
    def configuration(self) -> ApiConfiguration:
        return self._config

    @property
    def tokens(self) -> TokenHolder:
        return self._tokens

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ApiClientClosedError("ApiManager is already closed")

    async def _get_transport(self) -> AsyncTransport:
        self._ensure_open()
        if self._transport is None:
            self._transport = self._config.transport_factory(self._config)
        return self._transport

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._transport is not None:
            await self._transport.close()

    async def __aenter__(self) -> "ApiManager":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "PendingRequest",
    "ApiClient",
    "ApiManager",
]
