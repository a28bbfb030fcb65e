"""Tests for the API request wrapper, served by an HTTPMock transport."""

from __future__ import annotations

import json
from collections.abc import Iterator

import httpx
import pytest

from storefront_qa.client import ApiClient, AsyncApiClient, RequestOptions
from storefront_qa.config import PROFILES
from storefront_qa.errors import (
    ConnectionFailedError,
    ErrorCode,
    RateLimitedError,
    RequestFailedError,
    ResponseParseError,
    ResponseTimeExceededError,
    SchemaMismatchError,
    TokenExpiredError,
    TransientError,
)
from storefront_qa.fixtures.api import PRODUCTS, USERS
from storefront_qa.fixtures.errors import (
    INVALID_AUTHENTICATION,
    NON_EXISTENT_USER,
    RATE_LIMIT_ERROR,
    TOKEN_EXPIRED_ERROR,
)
from storefront_qa.mocking import HTTPMock
from storefront_qa.schemas import PRODUCT_SCHEMA, USERS_LIST_SCHEMA

BASE_URL = "https://api.test"


@pytest.fixture
def mock() -> HTTPMock:
    return HTTPMock()


@pytest.fixture
def client(mock: HTTPMock) -> Iterator[ApiClient]:
    with ApiClient(BASE_URL, transport=mock.transport()) as api:
        yield api


class TestUrlsAndHeaders:
    """Tests for URL building and header merging."""

    def test_relative_endpoint_joins_base_url(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users").returns(json=USERS["mock_users"])
        client.get("/users")
        assert mock.get_last_call("GET", "/users")["url"] == "https://api.test/users"

    def test_absolute_endpoint_is_used_unchanged(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/elsewhere").returns(json={"ok": True})
        client.get("https://other.test/elsewhere")
        assert mock.get_last_call("GET", "/elsewhere")["url"] == "https://other.test/elsewhere"

    def test_default_json_headers(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users").returns(json=[])
        client.get("/users")
        headers = mock.get_last_call("GET", "/users")["headers"]
        assert headers["content-type"] == "application/json"
        assert headers["accept"] == "application/json"

    def test_caller_headers_win(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users").returns(json=[])
        client.get("/users", options=RequestOptions(headers={"Accept": "text/csv", "X-Trace": "t-1"}))
        headers = mock.get_last_call("GET", "/users")["headers"]
        assert headers["accept"] == "text/csv"
        assert headers["x-trace"] == "t-1"

    def test_auth_token_is_sent(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users/me").returns(json={})
        client.set_auth_token("QpwL5tke4Pnpja7X4")
        client.get("/users/me")
        assert mock.get_last_call("GET", "/users/me")["headers"]["authorization"] == "Bearer QpwL5tke4Pnpja7X4"

    def test_frozen_fixture_is_sent_as_json(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.post("/users").returns(status=201, json=USERS["new_user_response"])
        client.post("/users", data=USERS["new_user_data"])
        body = mock.get_last_call("POST", "/users")["body"]
        assert json.loads(body) == {"name": "Test User", "job": "Software Tester"}


class TestResponses:
    """Tests for decoding and status checks."""

    def test_json_body_is_decoded(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/products/1").returns(json=PRODUCTS["product_detail"])
        response = client.get("/products/1")
        assert response.status == 200
        assert response.ok
        assert response.data["name"] == "Premium Hammer"

    def test_error_status_raises_with_body(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users/999").returns_fixture(NON_EXISTENT_USER)

        with pytest.raises(RequestFailedError) as exc_info:
            client.get("/users/999")

        error = exc_info.value
        assert error.status_code == 404
        assert "404" in str(error)
        assert "User not found" in str(error)
        assert error.body["error"] == "User not found"

    def test_status_check_can_be_disabled(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users/999").returns_fixture(NON_EXISTENT_USER)
        response = client.get("/users/999", options=RequestOptions(validate_status=False))
        assert response.status == 404
        assert not response.ok
        assert response.data["error"] == "User not found"

    def test_429_raises_rate_limited(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/products").returns_fixture(RATE_LIMIT_ERROR)

        with pytest.raises(RateLimitedError) as exc_info:
            client.get("/products")

        assert exc_info.value.status_code == 429
        assert exc_info.value.retry_after == 30.0
        assert "Rate limit exceeded" in str(exc_info.value)

    def test_expired_token_raises_tagged_error(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/orders/1001").returns_fixture(TOKEN_EXPIRED_ERROR)

        with pytest.raises(TokenExpiredError) as exc_info:
            client.get("/orders/1001")

        error = exc_info.value
        assert isinstance(error, TransientError)
        assert error.status_code == 401
        assert error.error_code == ErrorCode.TOKEN_EXPIRED
        assert "Token expired" in str(error)

    def test_other_401_is_not_token_expiry(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.post("/login").returns_fixture(INVALID_AUTHENTICATION)

        with pytest.raises(RequestFailedError) as exc_info:
            client.post("/login", {"email": "x@y.z", "password": "nope"})

        assert not isinstance(exc_info.value, TransientError)
        assert exc_info.value.status_code == 401

    def test_delete_without_body(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.delete("/users/2").returns(status=204)
        response = client.delete("/users/2")
        assert response.status == 204
        assert response.data is None

    def test_delete_with_non_json_body(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.delete("/users/2").returns(status=200, text="deleted")
        assert client.delete("/users/2").data is None

    def test_non_json_success_body_raises(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/health").returns(text="<html>ok</html>")
        with pytest.raises(ResponseParseError):
            client.get("/health")

    def test_non_json_error_body_is_kept_as_text(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/broken").returns(status=502, text="Bad Gateway")
        with pytest.raises(RequestFailedError, match="status 502: Bad Gateway"):
            client.get("/broken")

    def test_transport_failure_raises_connection_failed(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users").raises(httpx.ConnectError("connection refused"))

        with pytest.raises(ConnectionFailedError) as exc_info:
            client.get("/users")

        assert "connection refused" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_uses_timeout_code(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users").raises(httpx.ReadTimeout("read timed out"))
        with pytest.raises(ConnectionFailedError) as exc_info:
            client.get("/users")
        assert exc_info.value.error_code == ErrorCode.CONNECTION_TIMEOUT


class TestRequestOptions:
    def test_schema_is_validated(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users").returns(json=USERS["mock_users"])
        response = client.get("/users", options=RequestOptions(schema=USERS_LIST_SCHEMA))
        assert len(response.data) == 2

    def test_schema_mismatch_raises(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/products/1").returns(json={"id": 1, "name": "Hammer"})
        with pytest.raises(SchemaMismatchError, match="'price' is a required property"):
            client.get("/products/1", options=RequestOptions(schema=PRODUCT_SCHEMA))

    def test_slow_response_fails_budget(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/products").returns(json=PRODUCTS["products_list"], delay_ms=80)
        with pytest.raises(ResponseTimeExceededError):
            client.get("/products", options=RequestOptions(max_response_time_ms=20))

    def test_fast_response_within_budget(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/products").returns(json=PRODUCTS["products_list"])
        response = client.get("/products", options=RequestOptions(max_response_time_ms=5000))
        assert response.data["meta"]["pagination"]["total"] == 24


class TestHistory:
    def test_requests_are_recorded(self, mock: HTTPMock, client: ApiClient) -> None:
        mock.get("/users").returns(json=[])
        mock.get("/users/999").returns_fixture(NON_EXISTENT_USER)

        client.get("/users")
        with pytest.raises(RequestFailedError):
            client.get("/users/999")

        history = client.get_history()
        assert [r.response_status for r in history] == [200, 404]
        assert client.last_request().url == "https://api.test/users/999"


class TestFromProfile:
    def test_uses_profile_base_url_and_timeout(self) -> None:
        client = ApiClient.from_profile(PROFILES["staging"])
        assert client.base_url == "https://staging-api.example.com"
        assert client.timeout == 10.0


class TestAsyncApiClient:
    async def test_get_and_status_error(self, mock: HTTPMock) -> None:
        mock.get("/users").returns(json=USERS["mock_users"])
        mock.get("/users/999").returns_fixture(NON_EXISTENT_USER)

        async with AsyncApiClient(BASE_URL, transport=mock.async_transport()) as client:
            response = await client.get("/users", options=RequestOptions(schema=USERS_LIST_SCHEMA))
            assert response.data[0]["first_name"] == "George"

            with pytest.raises(RequestFailedError, match="User not found"):
                await client.get("/users/999")
