"""Tests for HTTPMock and RouteMocker."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from storefront_qa.fixtures.api import PRODUCTS
from storefront_qa.fixtures.errors import NON_EXISTENT_PRODUCT, RATE_LIMIT_ERROR
from storefront_qa.mocking import (
    HTTPMock,
    MockedResponse,
    MockError,
    MockNotFoundError,
    RequestMatcher,
    ResponseSequence,
    RouteMocker,
)


def _request(method: str, url: str, body: dict | None = None) -> httpx.Request:
    content = json.dumps(body).encode() if body is not None else b""
    return httpx.Request(method, url, content=content)


class TestRequestMatcher:
    """Path, query and body matching."""

    def test_path_matches_exactly_or_as_suffix(self) -> None:
        matcher = RequestMatcher(method="GET", path="/users")
        assert matcher.matches(_request("GET", "https://api.test/users"))
        assert matcher.matches(_request("GET", "https://api.test/api/users/"))
        assert not matcher.matches(_request("GET", "https://api.test/users/2"))
        assert not matcher.matches(_request("POST", "https://api.test/users"))

    def test_query_params(self) -> None:
        matcher = RequestMatcher(path="/products/search", query_params={"q": "hammer"})
        assert matcher.matches(_request("GET", "https://api.test/products/search?q=hammer"))
        assert not matcher.matches(_request("GET", "https://api.test/products/search?q=saw"))

    def test_body_json_subset(self) -> None:
        matcher = RequestMatcher(method="PUT", path="/orders/1001", body_json={"order_status_id": 2})
        assert matcher.matches(_request("PUT", "https://api.test/orders/1001", {"order_status_id": 2}))
        assert not matcher.matches(_request("PUT", "https://api.test/orders/1001", {"order_status_id": 3}))

    def test_body_predicate(self) -> None:
        matcher = RequestMatcher(method="POST", path="/login", body_json=lambda b: "@" in b.get("email", ""))
        assert matcher.matches(_request("POST", "https://api.test/login", {"email": "a@b.c"}))
        assert not matcher.matches(_request("POST", "https://api.test/login", {"email": "nobody"}))

    def test_wildcard_method(self) -> None:
        matcher = RequestMatcher(method="*", path="/orders")
        assert matcher.matches(_request("DELETE", "https://api.test/orders"))


class TestResponseSequence:
    def test_repeats_last_by_default(self) -> None:
        first, last = MockedResponse(status=429), MockedResponse(status=200)
        sequence = ResponseSequence([first, last])
        assert [sequence.next().status for _ in range(4)] == [429, 200, 200, 200]

    def test_exhausted_without_repeat(self) -> None:
        sequence = ResponseSequence([MockedResponse()], repeat_last=False)
        sequence.next()
        with pytest.raises(MockError, match="exhausted"):
            sequence.next()

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            ResponseSequence([])


class TestHTTPMock:
    """Tests for endpoint registration, dispatch and verification."""

    def test_fixture_response(self) -> None:
        mock = HTTPMock()
        mock.get("/products/999").returns_fixture(NON_EXISTENT_PRODUCT)

        response = mock.handle_request(_request("GET", "https://api.test/products/999"))

        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"

    def test_fixture_headers_are_served(self) -> None:
        mock = HTTPMock()
        mock.get("/products").returns_fixture(RATE_LIMIT_ERROR)
        response = mock.handle_request(_request("GET", "https://api.test/products"))
        assert response.headers["retry-after"] == "30"

    def test_frozen_payload_is_serialized(self) -> None:
        mock = HTTPMock()
        mock.get("/products").returns(json=PRODUCTS["products_list"])
        response = mock.handle_request(_request("GET", "https://api.test/products"))
        assert response.json()["meta"]["pagination"]["total"] == 24

    def test_more_specific_query_wins(self) -> None:
        mock = HTTPMock()
        mock.get("/products/search").returns(json={"which": "any"})
        mock.get("/products/search").with_query_param("q", "pliers").returns(json={"which": "pliers"})

        pliers = mock.handle_request(_request("GET", "https://api.test/products/search?q=pliers"))
        other = mock.handle_request(_request("GET", "https://api.test/products/search?q=saw"))

        assert pliers.json() == {"which": "pliers"}
        assert other.json() == {"which": "any"}

    def test_unmatched_request_raises(self) -> None:
        mock = HTTPMock()
        with pytest.raises(MockNotFoundError, match="No mock found for GET"):
            mock.handle_request(_request("GET", "https://api.test/nowhere"))
        assert mock.get_unmatched_requests()[0]["url"] == "https://api.test/nowhere"

    def test_raises_configured_error(self) -> None:
        mock = HTTPMock()
        mock.get("/users").raises(httpx.ConnectError("refused"))
        with pytest.raises(httpx.ConnectError):
            mock.handle_request(_request("GET", "https://api.test/users"))

    def test_call_verification(self) -> None:
        mock = HTTPMock()
        mock.post("/login").returns(json={"token": "t"})

        mock.handle_request(_request("POST", "https://api.test/login", {"email": "x@y.z"}))
        mock.handle_request(_request("POST", "https://api.test/login", {"email": "a@b.c"}))

        mock.assert_called("POST", "/login", times=2)
        mock.assert_not_called("GET", "/login")
        assert json.loads(mock.get_last_call("POST", "/login")["body"]) == {"email": "a@b.c"}

    def test_assert_called_reports_count(self) -> None:
        mock = HTTPMock()
        mock.get("/users").returns(json=[])
        with pytest.raises(AssertionError, match="Expected 1 calls to GET /users, got 0"):
            mock.assert_called("GET", "/users", times=1)

    def test_context_manager_clears(self) -> None:
        with HTTPMock() as mock:
            mock.get("/users").returns(json=[])
        with pytest.raises(MockNotFoundError):
            mock.handle_request(_request("GET", "https://api.test/users"))


class TestRouteMocker:
    """Tests for browser route interception, with a mocked page and route."""

    @staticmethod
    def _route(method: str, url: str) -> MagicMock:
        route = MagicMock(name="Route")
        route.request.method = method
        route.request.url = url
        return route

    def test_mock_json_fulfils_matching_requests(self) -> None:
        page = MagicMock(name="Page")
        mocker = RouteMocker(page)

        mocker.mock_json("**/api/products**", PRODUCTS["pliers_search_results"])

        pattern, handler = page.route.call_args.args
        assert pattern == "**/api/products**"

        route = self._route("GET", "https://api.shop.test/api/products/search?q=pliers")
        handler(route)

        kwargs = route.fulfill.call_args.kwargs
        assert kwargs["status"] == 200
        assert kwargs["content_type"] == "application/json"
        assert [p["name"] for p in json.loads(kwargs["body"])["data"]] == ["Combination Pliers", "Long Nose Pliers"]
        assert mocker.was_intercepted("q=pliers")

    def test_other_methods_fall_through(self) -> None:
        page = MagicMock(name="Page")
        mocker = RouteMocker(page)
        mocker.mock_json("**/api/products**", {"data": []}, method="GET")
        handler = page.route.call_args.args[1]

        route = self._route("POST", "https://api.shop.test/api/products")
        handler(route)

        route.fallback.assert_called_once_with()
        route.fulfill.assert_not_called()
        assert mocker.intercepted == []

    def test_mock_error_uses_fixture(self) -> None:
        page = MagicMock(name="Page")
        mocker = RouteMocker(page)
        mocker.mock_error("**/api/products/999", NON_EXISTENT_PRODUCT)
        handler = page.route.call_args.args[1]

        route = self._route("GET", "https://api.shop.test/api/products/999")
        handler(route)

        assert route.fulfill.call_args.kwargs["status"] == 404

    def test_clear_unroutes(self) -> None:
        page = MagicMock(name="Page")
        mocker = RouteMocker(page)
        mocker.mock_json("**/api/brands**", [])
        mocker.clear()
        page.unroute.assert_called_once_with("**/api/brands**")
