"""Offline stand-in for the storefront API, served through an httpx transport.

API tests load fixtures into an :class:`HTTPMock` and hand its transport to
:class:`~storefront_qa.client.ApiClient`, so the real request wrapper runs
end to end without a network.

Example:
    >>> from storefront_qa.fixtures import api, errors
    >>> mock = HTTPMock()
    >>> mock.get("/products").returns(json=api.PRODUCTS["products_list"])
    >>> mock.get("/users/999").returns_fixture(errors.NON_EXISTENT_USER)
    >>> client = ApiClient("https://api.test", transport=mock.transport())
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Any
from urllib.parse import parse_qs, urlparse

import httpx

from storefront_qa.fixtures.base import thaw
from storefront_qa.fixtures.errors import ErrorFixture

logger = logging.getLogger(__name__)


class MockError(Exception):
    """Base exception for mock errors."""


class MockNotFoundError(MockError):
    """Raised when no mock matches a request."""


@dataclass
class RequestMatcher:
    """Matches incoming requests against criteria.

    ``path`` matches the request path exactly or as its trailing segment, so
    ``/users`` matches both ``/users`` and ``/api/users`` but not
    ``/users/2``.
    """

    method: str = "GET"
    path: str = "/"
    query_params: dict[str, str] = field(default_factory=dict)
    body_json: dict[str, Any] | Callable[[Any], bool] | None = None

    def matches(self, request: httpx.Request) -> bool:
        if self.method != "*" and self.method.upper() != request.method.upper():
            return False

        parsed_url = urlparse(str(request.url))
        path = parsed_url.path.rstrip("/") or "/"
        expected = self.path.rstrip("/") or "/"
        if path != expected and not path.endswith(expected if expected.startswith("/") else f"/{expected}"):
            return False

        actual_params = parse_qs(parsed_url.query)
        for key, value in self.query_params.items():
            if str(value) not in actual_params.get(key, []):
                return False

        if self.body_json is not None:
            try:
                body_text = request.content.decode("utf-8")
                body_data = json.loads(body_text) if body_text else {}
            except (json.JSONDecodeError, UnicodeDecodeError):
                return False
            if callable(self.body_json):
                return bool(self.body_json(body_data))
            for key, value in self.body_json.items():
                if body_data.get(key) != value:
                    return False

        return True


@dataclass
class MockedResponse:
    """A mocked HTTP response.

    Attributes:
        status: HTTP status code
        headers: Response headers
        json_body: JSON response body; frozen fixtures are accepted
        text_body: Text response body, used when ``json_body`` is None
        delay_ms: Delay before returning the response
        raise_error: Exception to raise instead of responding
    """

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    json_body: Any = None
    text_body: str | None = None
    delay_ms: float = 0
    raise_error: Exception | None = None

    def __post_init__(self) -> None:
        self.headers = dict(self.headers)
        if "content-type" not in {k.lower() for k in self.headers}:
            if self.json_body is not None:
                self.headers["Content-Type"] = "application/json"
            elif self.text_body is not None:
                self.headers["Content-Type"] = "text/plain"

    @classmethod
    def from_fixture(cls, fixture: ErrorFixture, delay_ms: float = 0) -> MockedResponse:
        return cls(
            status=fixture.status,
            json_body=fixture.data,
            headers=dict(fixture.headers),
            delay_ms=delay_ms,
        )

    def get_body(self) -> bytes:
        if self.json_body is not None:
            return json.dumps(thaw(self.json_body)).encode("utf-8")
        if self.text_body is not None:
            return self.text_body.encode("utf-8")
        return b""

    def to_httpx_response(self, request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=self.status,
            headers=self.headers,
            content=self.get_body(),
            request=request,
        )


class ResponseSequence:
    """Responses returned in order, repeating the last one when exhausted.

    Example:
        >>> ResponseSequence([
        ...     MockedResponse.from_fixture(RATE_LIMIT_ERROR),
        ...     MockedResponse(json_body={"token": "abc"}),
        ... ])
    """

    def __init__(self, responses: list[MockedResponse], repeat_last: bool = True) -> None:
        if not responses:
            raise ValueError("Response sequence cannot be empty")
        self._responses = responses
        self._repeat_last = repeat_last
        self._index = 0
        self._lock = Lock()

    def next(self) -> MockedResponse:
        with self._lock:
            if self._index >= len(self._responses):
                if self._repeat_last:
                    return self._responses[-1]
                raise MockError("Response sequence exhausted")
            response = self._responses[self._index]
            self._index += 1
            return response


@dataclass
class MockedEndpoint:
    """A request matcher bound to a response or response sequence."""

    id: str
    matcher: RequestMatcher
    response: MockedResponse | ResponseSequence
    call_count: int = 0
    calls: list[dict[str, Any]] = field(default_factory=list)

    def get_response(self) -> MockedResponse:
        if isinstance(self.response, ResponseSequence):
            return self.response.next()
        return self.response

    def record_call(self, request: httpx.Request) -> None:
        self.call_count += 1
        self.calls.append(
            {
                "timestamp": datetime.now().isoformat(),
                "method": request.method,
                "url": str(request.url),
                "headers": dict(request.headers),
                "body": request.content.decode("utf-8", errors="ignore"),
            }
        )


class EndpointBuilder:
    """Fluent builder for mocked endpoints."""

    def __init__(self, mock: HTTPMock, method: str, path: str) -> None:
        self._mock = mock
        self._method = method
        self._path = path
        self._query_params: dict[str, str] = {}
        self._body_json: dict[str, Any] | Callable[[Any], bool] | None = None

    def with_query_param(self, key: str, value: Any) -> EndpointBuilder:
        """Require a query parameter value."""
        self._query_params[key] = str(value)
        return self

    def with_body_json(self, matcher: dict[str, Any] | Callable[[Any], bool]) -> EndpointBuilder:
        """Require body JSON to contain these keys, or satisfy a predicate."""
        self._body_json = matcher
        return self

    def returns(
        self,
        status: int = 200,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
        delay_ms: float = 0,
    ) -> MockedEndpoint:
        response = MockedResponse(
            status=status,
            json_body=json,
            text_body=text,
            headers=headers or {},
            delay_ms=delay_ms,
        )
        return self._create_endpoint(response)

    def returns_fixture(self, fixture: ErrorFixture, delay_ms: float = 0) -> MockedEndpoint:
        """Respond with a canned error fixture's status, body and headers."""
        return self._create_endpoint(MockedResponse.from_fixture(fixture, delay_ms))

    def returns_sequence(self, responses: list[MockedResponse], repeat_last: bool = True) -> MockedEndpoint:
        return self._create_endpoint(ResponseSequence(responses, repeat_last=repeat_last))

    def raises(self, error: Exception) -> MockedEndpoint:
        """Raise an exception when called, e.g. ``httpx.ConnectError``."""
        return self._create_endpoint(MockedResponse(raise_error=error))

    def _create_endpoint(self, response: MockedResponse | ResponseSequence) -> MockedEndpoint:
        matcher = RequestMatcher(
            method=self._method,
            path=self._path,
            query_params=self._query_params,
            body_json=self._body_json,
        )
        endpoint = MockedEndpoint(id=str(uuid.uuid4()), matcher=matcher, response=response)
        self._mock.add_endpoint(endpoint)
        return endpoint


class HTTPMock:
    """HTTP endpoint mocking for API tests.

    Endpoints with more required query parameters are tried before looser
    ones, so ``/products?q=hammer`` can be mocked
    alongside a plain ``/products``.
    """

    def __init__(self) -> None:
        self._endpoints: list[MockedEndpoint] = []
        self._unmatched_requests: list[dict[str, Any]] = []
        self._lock = Lock()

    def get(self, path: str) -> EndpointBuilder:
        return EndpointBuilder(self, "GET", path)

    def post(self, path: str) -> EndpointBuilder:
        return EndpointBuilder(self, "POST", path)

    def put(self, path: str) -> EndpointBuilder:
        return EndpointBuilder(self, "PUT", path)

    def delete(self, path: str) -> EndpointBuilder:
        return EndpointBuilder(self, "DELETE", path)

    def add_endpoint(self, endpoint: MockedEndpoint) -> None:
        with self._lock:
            self._endpoints.append(endpoint)
            self._endpoints.sort(
                key=lambda e: len(e.matcher.query_params),
                reverse=True,
            )

    def clear(self) -> None:
        """Clear all mocked endpoints and recorded calls."""
        with self._lock:
            self._endpoints.clear()
            self._unmatched_requests.clear()

    def find_endpoint(self, request: httpx.Request) -> MockedEndpoint | None:
        with self._lock:
            for endpoint in self._endpoints:
                if endpoint.matcher.matches(request):
                    return endpoint
            return None

    def _resolve(self, request: httpx.Request) -> MockedResponse:
        endpoint = self.find_endpoint(request)
        if endpoint is None:
            self._unmatched_requests.append(
                {
                    "timestamp": datetime.now().isoformat(),
                    "method": request.method,
                    "url": str(request.url),
                }
            )
            raise MockNotFoundError(f"No mock found for {request.method} {request.url}")

        endpoint.record_call(request)
        response = endpoint.get_response()
        if response.raise_error is not None:
            raise response.raise_error
        logger.debug(f"Mocked {request.method} {request.url} -> {response.status}")
        return response

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Handle an incoming request.

        Raises:
            MockNotFoundError: If no endpoint matches.
        """
        response = self._resolve(request)
        if response.delay_ms > 0:
            time.sleep(response.delay_ms / 1000)
        return response.to_httpx_response(request)

    async def handle_request_async(self, request: httpx.Request) -> httpx.Response:
        response = self._resolve(request)
        if response.delay_ms > 0:
            await asyncio.sleep(response.delay_ms / 1000)
        return response.to_httpx_response(request)

    def transport(self) -> httpx.MockTransport:
        """Create an httpx transport for this mock."""
        return httpx.MockTransport(self.handle_request)

    def async_transport(self) -> httpx.MockTransport:
        """Create an async httpx transport for this mock."""
        return httpx.MockTransport(self.handle_request_async)

    def _matching(self, method: str, path: str) -> list[MockedEndpoint]:
        return [e for e in self._endpoints if e.matcher.method == method.upper() and e.matcher.path == path]

    def call_count(self, method: str, path: str) -> int:
        """Calls recorded by every endpoint registered for ``method`` and ``path``."""
        return sum(e.call_count for e in self._matching(method, path))

    def get_calls(self, method: str, path: str) -> list[dict[str, Any]]:
        calls: list[dict[str, Any]] = []
        for endpoint in self._matching(method, path):
            calls.extend(endpoint.calls)
        return sorted(calls, key=lambda c: c["timestamp"])

    def get_last_call(self, method: str, path: str) -> dict[str, Any] | None:
        calls = self.get_calls(method, path)
        return calls[-1] if calls else None

    def get_unmatched_requests(self) -> list[dict[str, Any]]:
        return self._unmatched_requests.copy()

    def assert_called(self, method: str, path: str, times: int | None = None) -> None:
        """Assert endpoint was called.

        Raises:
            AssertionError: If verification fails
        """
        count = self.call_count(method, path)
        if times is not None:
            assert count == times, f"Expected {times} calls to {method} {path}, got {count}"
        else:
            assert count > 0, f"Expected at least one call to {method} {path}, got none"

    def assert_not_called(self, method: str, path: str) -> None:
        count = self.call_count(method, path)
        assert count == 0, f"Expected no calls to {method} {path}, got {count}"

    def __enter__(self) -> HTTPMock:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.clear()
