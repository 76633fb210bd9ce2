"""Backend API client."""

from nginxgate.controllers.api.client import (
    ApiError,
    ApiResponseError,
    ApiTransportError,
    ConsoleApiClient,
)

__all__ = [
    "ApiError",
    "ApiResponseError",
    "ApiTransportError",
    "ConsoleApiClient",
]
