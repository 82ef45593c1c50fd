from __future__ import annotations

import json

import httpx
import pytest

from resilient_api_client import (
    ApiExceptionHandlerConfig,
    ApiHandledException,
    ApiManager,
    ApiToken,
    ErrorMessages,
    Outcome,
)
from resilient_api_client.serialization import default_serializer_settings
from tests.shared.api import TEST_API
from tests.shared.transport import MockRoutes, build_config, mock_transport_factory


@pytest.fixture
def routes() -> MockRoutes:
    routes = MockRoutes()
    routes.when(
        "http://www.test.com/api/sessionexpired",
        lambda request: httpx.Response(401),
    )
    return routes


def _manager(routes: MockRoutes, *, connected: bool, token: ApiToken | None = None) -> ApiManager:
    config = build_config(
        connected=connected,
        transport_factory=mock_transport_factory(routes),
    )
    return ApiManager(TEST_API, config, token=token or ApiToken.empty())


@pytest.mark.asyncio
async def test_offline_without_handler_returns_request_timeout(routes):
    async with _manager(routes, connected=False) as manager:
        result = await manager.client.test_no_network().wait_for_response()

    assert result.is_successful is False
    assert result.status_code == 408
    assert routes.requests == []


@pytest.mark.asyncio
async def test_unauthorized_fires_session_expired_and_returns_failed_result(routes):
    session_expired = False

    def on_session_expired(result):
        nonlocal session_expired
        session_expired = True

    async with _manager(routes, connected=True) as manager:
        result = await manager.client.test_session_expired().wait_for_response(
            ApiExceptionHandlerConfig(on_session_expired=on_session_expired)
        )

    assert session_expired is True
    assert result.is_successful is False
    assert result.status_code == 401


@pytest.mark.asyncio
async def test_unauthorized_without_handler_returns_failed_result(routes):
    async with _manager(routes, connected=True) as manager:
        result = await manager.client.test_session_expired().wait_for_response()

    assert result.is_successful is False
    assert result.status_code == 401
    assert result.outcome is Outcome.UNAUTHORIZED


@pytest.mark.asyncio
async def test_online_request_executes_and_skips_no_network_handler(routes):
    routes.when("http://www.test.com/api/networktest1", lambda request: httpx.Response(200))
    has_network = True

    def on_no_network(result):
        nonlocal has_network
        has_network = False

    async with _manager(routes, connected=True) as manager:
        result = await manager.client.test_no_network().wait_for_response(
            ApiExceptionHandlerConfig(on_no_network_connectivity=on_no_network)
        )

    assert has_network is True
    assert result.is_successful is True
    assert result.status_code == 200
    assert len(routes.requests) == 1


@pytest.mark.asyncio
async def test_offline_fires_no_network_handler_and_returns_failed_result(routes):
    has_network = True

    def on_no_network(result):
        nonlocal has_network
        has_network = False

    async with _manager(routes, connected=False) as manager:
        result = await manager.client.test_no_network().wait_for_response(
            ApiExceptionHandlerConfig(on_no_network_connectivity=on_no_network)
        )

    assert has_network is False
    assert result.is_successful is False
    assert result.status_code == 408


@pytest.mark.asyncio
async def test_forced_execution_while_offline_still_skips_transport(routes):
    routes.when("http://www.test.com/api/networktest2", lambda request: httpx.Response(200))
    has_network = True

    def on_no_network(result):
        nonlocal has_network
        has_network = False

    async with _manager(routes, connected=False) as manager:
        result = await manager.client.test_no_network2().wait_for_response(
            ApiExceptionHandlerConfig(on_no_network_connectivity=on_no_network),
            True,
        )

    assert has_network is False
    assert result.is_successful is False
    assert isinstance(result.exception, ApiHandledException)
    assert result.status_code == 408
    assert routes.requests == []

    content = result.exception.get_error_result(default_serializer_settings())
    assert content.error_message == ErrorMessages.NO_NETWORK


@pytest.mark.asyncio
async def test_success_returns_decoded_payload(routes):
    routes.when(
        "http://www.test.com/api/testmessage",
        lambda request: httpx.Response(200, content=b"Testing"),
    )

    async with _manager(routes, connected=True) as manager:
        result = await manager.client.get_test_message().wait_for_response()

    assert result.status_code == 200
    assert result.is_successful is True
    assert result.result == "Testing"


@pytest.mark.asyncio
async def test_json_operation_round_trip_with_token(routes):
    def create_user(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Content-Type"] == "application/json"
        payload = json.loads(request.content)
        return httpx.Response(201, json={"id": 7, **payload})

    routes.when("http://www.test.com/api/users", create_user)

    async with _manager(routes, connected=True, token=ApiToken("tok")) as manager:
        result = await manager.client.create_user({"name": "Ana"}).wait_for_response()

    assert result.is_successful is True
    assert result.status_code == 201
    assert result.result == {"id": 7, "name": "Ana"}


@pytest.mark.asyncio
async def test_connect_error_is_returned_as_transport_exception(routes):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    routes.when("http://www.test.com/api/testmessage", refuse)

    async with _manager(routes, connected=True) as manager:
        result = await manager.client.get_test_message().wait_for_response()

    assert result.is_successful is False
    assert result.outcome is Outcome.TRANSPORT_EXCEPTION
    assert isinstance(result.exception.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_http_error_body_is_decoded_on_demand(routes):
    routes.when(
        "http://www.test.com/api/users/9",
        lambda request: httpx.Response(404, json={"errorMessage": "User not found"}),
    )

    async with _manager(routes, connected=True) as manager:
        result = await manager.client.get_user(9, expand=None).wait_for_response()

    assert result.status_code == 404
    assert result.outcome is Outcome.OTHER_HTTP_ERROR
    assert result.exception.get_error_result().error_message == "User not found"
