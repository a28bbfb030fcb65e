"""HTTP request wrapper with status, schema and response-time checks."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

import httpx

from storefront_qa.assertions.schema import validate_schema
from storefront_qa.assertions.timing import assert_response_time, async_assert_response_time
from storefront_qa.errors import (
    ConnectionFailedError,
    ErrorCode,
    ErrorContext,
    RateLimitedError,
    RequestFailedError,
    ResponseParseError,
    TokenExpiredError,
)
from storefront_qa.fixtures.base import thaw

if TYPE_CHECKING:
    from storefront_qa.config.settings import EnvironmentProfile

logger = logging.getLogger(__name__)

# 401 bodies carrying this are session expiry, not bad credentials.
TOKEN_EXPIRED_MARKER = "Token expired"

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass
class ApiResponse:
    """Decoded result of one API call."""

    data: Any
    status: int
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class RequestOptions:
    """Per-request checks.

    Attributes:
        validate_status: Fail on a status outside 200-299.
        schema: JSON Schema the decoded body must satisfy.
        max_response_time_ms: Budget for the whole call, checks included.
        headers: Extra headers; these win over the defaults.
    """

    validate_status: bool = True
    schema: dict[str, Any] | None = None
    max_response_time_ms: float | None = None
    headers: dict[str, str] | None = None


@dataclass
class RequestRecord:
    """Record of an HTTP request/response."""

    method: str
    url: str
    request_body: Any | None
    response_status: int
    response_body: Any | None
    headers: dict[str, str]
    duration_ms: float
    timestamp: datetime = field(default_factory=datetime.now)
    error: str | None = None


def _is_absolute(endpoint: str) -> bool:
    return endpoint.startswith(("http://", "https://"))


def _parse_retry_after(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class _RequestHandling:
    """Request building and response checks shared by the sync and async clients."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_headers = default_headers or {}
        self.history: list[RequestRecord] = []
        self._auth_token: str | None = None

    def set_auth_token(self, token: str, scheme: str = "Bearer") -> None:
        """Set authentication token for subsequent requests."""
        self._auth_token = f"{scheme} {token}"

    def build_url(self, endpoint: str) -> str:
        """Absolute URLs pass through unchanged; paths join the base URL."""
        if _is_absolute(endpoint):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def build_headers(self, overrides: Mapping[str, str] | None = None) -> httpx.Headers:
        headers = httpx.Headers(DEFAULT_HEADERS)
        headers.update(self.default_headers)
        if self._auth_token:
            headers["Authorization"] = self._auth_token
        if overrides:
            headers.update(overrides)
        return headers

    def get_history(self) -> list[RequestRecord]:
        """Get all request history."""
        return self.history.copy()

    def clear_history(self) -> None:
        self.history.clear()

    def last_request(self) -> RequestRecord | None:
        """Get the most recent request record."""
        return self.history[-1] if self.history else None

    def _safe_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def _record(
        self,
        method: str,
        url: str,
        request_body: Any,
        headers: httpx.Headers,
        duration_ms: float,
        response: httpx.Response | None = None,
        error: str | None = None,
    ) -> None:
        self.history.append(
            RequestRecord(
                method=method,
                url=url,
                request_body=request_body,
                response_status=response.status_code if response is not None else 0,
                response_body=self._safe_json(response) if response is not None else None,
                headers=dict(headers),
                duration_ms=duration_ms,
                error=error,
            )
        )

    def _transport_error(self, method: str, url: str, exc: httpx.RequestError) -> ConnectionFailedError:
        context = ErrorContext(request={"method": method, "url": url})
        if isinstance(exc, httpx.TimeoutException):
            return ConnectionFailedError(
                f"{method} {url} timed out after {self.timeout}s",
                error_code=ErrorCode.CONNECTION_TIMEOUT,
                context=context,
                cause=exc,
            )
        return ConnectionFailedError(f"{method} {url} failed: {exc}", context=context, cause=exc)

    def _status_error(self, method: str, url: str, response: httpx.Response) -> RequestFailedError:
        status = response.status_code
        body = self._safe_json(response)
        detail = body if isinstance(body, str) else json.dumps(body)
        message = f"API request failed with status {status}: {detail}"
        context = ErrorContext(
            request={"method": method, "url": url},
            response={"status": status, "body": body},
        )
        if status == 429:
            return RateLimitedError(
                message,
                retry_after=_parse_retry_after(response.headers.get("retry-after")),
                body=body,
                context=context,
            )
        if status == 401 and TOKEN_EXPIRED_MARKER in detail:
            return TokenExpiredError(message, body=body, context=context)
        return RequestFailedError(message, status_code=status, body=body, context=context)

    def _parse_body(self, method: str, url: str, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            if method == "DELETE":
                return None
            if not response.is_success:
                return response.text
            raise ResponseParseError(
                f"{method} {url} returned a body that is not JSON",
                context=ErrorContext(
                    request={"method": method, "url": url},
                    response={"status": response.status_code, "body": response.text[:500]},
                ),
                cause=e,
            ) from e

    def _check_response(
        self,
        method: str,
        url: str,
        response: httpx.Response,
        options: RequestOptions,
    ) -> ApiResponse:
        if options.validate_status and not response.is_success:
            raise self._status_error(method, url, response)

        data = self._parse_body(method, url, response)
        if options.schema is not None:
            validate_schema(data, options.schema)

        return ApiResponse(data=data, status=response.status_code, headers=dict(response.headers))


class ApiClient(_RequestHandling):
    """Synchronous API client.

    Args:
        base_url: Prefix for relative endpoints.
        timeout: Per-request timeout in seconds.
        default_headers: Headers sent on every request.
        transport: Optional httpx transport, e.g. ``HTTPMock().transport()``.

    Example:
        >>> with ApiClient.from_profile(get_active_profile()) as client:
        ...     users = client.get("/users", options=RequestOptions(schema=USERS_LIST_SCHEMA))
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        default_headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, default_headers)
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def from_profile(
        cls,
        profile: EnvironmentProfile,
        transport: httpx.BaseTransport | None = None,
        **kwargs: Any,
    ) -> ApiClient:
        return cls(profile.base_url, timeout=profile.timeout_seconds, transport=transport, **kwargs)

    def connect(self) -> None:
        """Initialize the HTTP client."""
        self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
        logger.info(f"API client ready for {self.base_url}")

    def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> ApiClient:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    def request(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        data: Any = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse:
        """Perform one HTTP call and apply the checks in ``options``.

        Raises:
            RequestFailedError: Status outside 200-299 (RateLimitedError for 429).
            SchemaMismatchError: Body does not satisfy ``options.schema``.
            ResponseTimeExceededError: Call exceeded ``options.max_response_time_ms``.
            ConnectionFailedError: The transport failed.
        """
        options = options or RequestOptions()
        method = method.upper()

        def perform() -> ApiResponse:
            return self._send(method, endpoint, params, data, options)

        if options.max_response_time_ms is None:
            return perform()
        return assert_response_time(perform, options.max_response_time_ms)

    def _send(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None,
        data: Any,
        options: RequestOptions,
    ) -> ApiResponse:
        if not self._client:
            self.connect()

        url = self.build_url(endpoint)
        headers = self.build_headers(options.headers)
        body = thaw(data) if data is not None else None

        start_time = time.perf_counter()
        try:
            response = self._client.request(
                method, url, params=thaw(params), json=body, headers=headers
            )
        except httpx.RequestError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._record(method, url, body, headers, duration_ms, error=str(e))
            logger.error(f"Request error: {method} {url}: {e}")
            raise self._transport_error(method, url, e) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._record(method, url, body, headers, duration_ms, response=response)
        logger.debug(f"{method} {url} -> {response.status_code} in {duration_ms:.0f}ms")

        return self._check_response(method, url, response, options)

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> ApiResponse:
        return self.request("GET", endpoint, params=params, **kwargs)

    def post(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse:
        return self.request("POST", endpoint, data=data, **kwargs)

    def put(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse:
        return self.request("PUT", endpoint, data=data, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> ApiResponse:
        return self.request("DELETE", endpoint, **kwargs)


class AsyncApiClient(_RequestHandling):
    """Async API client with the same checks as :class:`ApiClient`."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        default_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, default_headers)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_profile(
        cls,
        profile: EnvironmentProfile,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> AsyncApiClient:
        return cls(profile.base_url, timeout=profile.timeout_seconds, transport=transport, **kwargs)

    async def connect(self) -> None:
        """Initialize the async HTTP client."""
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        logger.info(f"Async API client ready for {self.base_url}")

    async def disconnect(self) -> None:
        """Close the async HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AsyncApiClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        data: Any = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse:
        options = options or RequestOptions()
        method = method.upper()

        async def perform() -> ApiResponse:
            return await self._send(method, endpoint, params, data, options)

        if options.max_response_time_ms is None:
            return await perform()
        return await async_assert_response_time(perform, options.max_response_time_ms)

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None,
        data: Any,
        options: RequestOptions,
    ) -> ApiResponse:
        if not self._client:
            await self.connect()

        url = self.build_url(endpoint)
        headers = self.build_headers(options.headers)
        body = thaw(data) if data is not None else None

        start_time = time.perf_counter()
        try:
            response = await self._client.request(
                method, url, params=thaw(params), json=body, headers=headers
            )
        except httpx.RequestError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._record(method, url, body, headers, duration_ms, error=str(e))
            logger.error(f"Request error: {method} {url}: {e}")
            raise self._transport_error(method, url, e) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._record(method, url, body, headers, duration_ms, response=response)
        logger.debug(f"{method} {url} -> {response.status_code} in {duration_ms:.0f}ms")

        return self._check_response(method, url, response, options)

    async def get(
        self, endpoint: str, params: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> ApiResponse:
        return await self.request("GET", endpoint, params=params, **kwargs)

    async def post(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", endpoint, data=data, **kwargs)

    async def put(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", endpoint, data=data, **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", endpoint, **kwargs)


__all__ = [
    "ApiClient",
    "ApiResponse",
    "AsyncApiClient",
    "DEFAULT_HEADERS",
    "RequestOptions",
    "RequestRecord",
]
