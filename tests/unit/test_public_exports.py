from __future__ import annotations

import resilient_api_client


def test_package_exports_public_surface_only():
    expected = {
        "ApiManager",
        "ApiConfiguration",
        "TransportConfig",
        "SerializerSettings",
        "ApiToken",
        "TokenHolder",
        "ApiDefinition",
        "ApiOperation",
        "ApiExceptionHandlerConfig",
        "ServiceResult",
        "ApiHandledException",
        "ErrorResult",
        "ErrorMessages",
        "Outcome",
        "ApiConfigurationError",
        "ApiClientClosedError",
    }
    assert set(resilient_api_client.__all__) == expected
    for name in expected:
        assert hasattr(resilient_api_client, name)
    assert "RequestExecutor" not in resilient_api_client.__all__
