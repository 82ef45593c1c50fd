"""Public package exports for the resilient API client."""

from .auth import ApiToken, TokenHolder
from .config import ApiConfiguration, TransportConfig
from .core.dispatcher import ApiExceptionHandlerConfig
from .core.errors import (
    ApiClientClosedError,
    ApiConfigurationError,
    ApiHandledException,
    ErrorMessages,
    ErrorResult,
    Outcome,
)
from .core.models import ServiceResult
from .manager import ApiManager
from .operations import ApiDefinition, ApiOperation
from .serialization import SerializerSettings

__all__ = [
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
]
