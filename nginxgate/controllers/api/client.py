"""HTTP client for the gitops-nginx backend API.

Thin async wrapper over ``httpx.AsyncClient`` that maps each backend
operation to a typed payload model and normalizes failures into the
``ApiError`` hierarchy.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from nginxgate.constants.enums import DeployMode
from nginxgate.constants.timeouts import API_REQUEST_TIMEOUT
from nginxgate.constants.values import API_BASE_DEFAULT, API_PREFIX_DEFAULT
from nginxgate.models.api.payloads import (
    ApplyResult,
    CheckResult,
    DiffRecord,
    DriftStatusReport,
    GroupsResponse,
    PrepareResult,
    TreeResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


# ============================================================================
# Errors
# ============================================================================


class ApiError(Exception):
    """Base exception for backend API failures."""


class ApiTransportError(ApiError):
    """The request could not complete or the body was unreadable."""


class ApiResponseError(ApiError):
    """The backend answered with a non-2xx status.

    Attributes:
        status_code: HTTP status of the response.
        payload: Raw decoded JSON body, or None if it was unreadable.
        result: ``payload`` validated as the operation's response model when
            possible, so diagnostics can still be rendered.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        payload: Any = None,
        result: BaseModel | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        self.result = result


# ============================================================================
# Client
# ============================================================================


class ConsoleApiClient:
    """Async client for the backend HTTP surface.

    Args:
        api_base: Scheme and host of the backend, e.g. ``http://host:8080``.
        api_prefix: Router prefix, ``/api/v1`` on the stock backend.
        timeout: Per-request timeout in seconds.
        transport: Optional transport override (tests use
            ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_base: str = API_BASE_DEFAULT,
        api_prefix: str = API_PREFIX_DEFAULT,
        *,
        timeout: float = API_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = f"{api_base.rstrip('/')}/{api_prefix.strip('/')}".rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> ConsoleApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # =========================================================================
    # Operations
    # =========================================================================

    async def fetch_groups(self) -> GroupsResponse:
        return await self._request("GET", "/groups", GroupsResponse)

    async def fetch_tree(self, group: str, host: str, mode: DeployMode | str) -> TreeResponse:
        params = {"group": group, "host": host, "mode": DeployMode(mode).value}
        return await self._request("GET", "/tree", TreeResponse, params=params)

    async def fetch_triple_diff(
        self, group: str, host: str, path: str, mode: DeployMode | str
    ) -> DiffRecord:
        params = {
            "group": group,
            "host": host,
            "path": path,
            "mode": DeployMode(mode).value,
        }
        return await self._request("GET", "/triple-diff", DiffRecord, params=params)

    async def run_check(self, group: str, host: str, mode: DeployMode | str) -> CheckResult:
        return await self._request(
            "POST",
            "/check",
            CheckResult,
            params={"mode": DeployMode(mode).value},
            body={"server": host, "group": group},
        )

    async def prepare_update(self, group: str, host: str) -> PrepareResult:
        """Prepare an update. Always production mode."""
        return await self._request(
            "POST",
            "/update/prepare",
            PrepareResult,
            params={"mode": DeployMode.PROD.value},
            body={"server": host, "group": group},
        )

    async def apply_update(self, group: str, host: str) -> ApplyResult:
        """Apply a prepared update. Always production mode."""
        return await self._request(
            "POST",
            "/update/apply",
            ApplyResult,
            params={"mode": DeployMode.PROD.value},
            body={"server": host, "group": group},
        )

    async def fetch_drift_status(self) -> DriftStatusReport:
        return await self._request("GET", "/git/status", DriftStatusReport)

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        model: type[ModelT],
        *,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
    ) -> ModelT:
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self._client.request(method, path, params=params, json=body)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiTransportError(f"{method} {path} failed: {exc}") from exc

        payload: Any = None
        readable = True
        try:
            payload = response.json()
        except ValueError:
            readable = False

        if response.is_error:
            result: BaseModel | None = None
            if readable and isinstance(payload, dict):
                with suppress(ValidationError):
                    result = model.model_validate(payload)
            logger.warning("%s %s returned HTTP %s", method, path, response.status_code)
            raise ApiResponseError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
                payload=payload,
                result=result,
            )

        if not readable:
            raise ApiTransportError(f"{method} {path} returned an unreadable body")
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.error("%s %s returned an unexpected body: %s", method, path, exc)
            raise ApiTransportError(f"{method} {path} returned an unexpected body") from exc


__all__ = [
    "ApiError",
    "ApiResponseError",
    "ApiTransportError",
    "ConsoleApiClient",
]
