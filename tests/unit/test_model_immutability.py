from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from resilient_api_client.auth import ApiToken
from resilient_api_client.core.dispatcher import ApiExceptionHandlerConfig
from resilient_api_client.core.errors import ApiHandledException, ErrorResult, Outcome
from resilient_api_client.core.models import ApiRequest, RawResponse, ServiceResult


@pytest.mark.parametrize(
    ("instance", "field", "value"),
    [
        (ServiceResult.success(200, "ok"), "result", "changed"),
        (RawResponse(200), "status_code", 500),
        (ApiRequest("op", "GET", "/x"), "path", "/y"),
        (ApiToken("abc"), "access_token", "def"),
        (ApiExceptionHandlerConfig(), "on_session_expired", print),
        (ErrorResult(), "error_message", "x"),
    ],
)
def test_models_are_frozen(instance, field, value):
    with pytest.raises(FrozenInstanceError):
        setattr(instance, field, value)


def test_successful_result_never_carries_exception():
    exc = ApiHandledException("x", status_code=500, body="", outcome=Outcome.OTHER_HTTP_ERROR)
    with pytest.raises(ValueError):
        ServiceResult(is_successful=True, status_code=200, outcome=Outcome.SUCCESS, exception=exc)


def test_failed_result_requires_status_code():
    with pytest.raises(ValueError):
        ServiceResult(is_successful=False, status_code=0, outcome=Outcome.TRANSPORT_EXCEPTION)


def test_failure_factory_copies_exception_fields():
    exc = ApiHandledException("x", status_code=401, body="", outcome=Outcome.UNAUTHORIZED)
    result = ServiceResult.failure(exc, headers={"x-request-id": "1"})
    assert result.is_successful is False
    assert result.status_code == 401
    assert result.outcome is Outcome.UNAUTHORIZED
    assert result.exception is exc
    assert result.result is None
    assert result.headers == {"x-request-id": "1"}


def test_success_factory():
    result = ServiceResult.success(200, "Testing")
    assert result.is_successful is True
    assert result.outcome is Outcome.SUCCESS
    assert result.exception is None
    assert result.result == "Testing"


def test_raw_response_text_decoding():
    assert RawResponse(200, "héllo".encode("utf-8")).text() == "héllo"
