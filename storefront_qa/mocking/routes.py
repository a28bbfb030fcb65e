"""Browser route interception backed by fixtures.

A :class:`MockRoute` pairs a glob pattern such as ``**/api/products**`` with
the status, content type and JSON body to fulfil matching requests with.
:class:`RouteMocker` installs routes on a Playwright page and records every
URL it intercepted so a test can prove the UI went through the mock.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from playwright.sync_api import Page, Route

from storefront_qa.fixtures.base import thaw
from storefront_qa.fixtures.errors import ErrorFixture

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteFulfillment:
    """What an intercepted request is answered with."""

    status: int = 200
    content_type: str = "application/json"
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    def serialized_body(self) -> str:
        if self.body is None:
            return ""
        if isinstance(self.body, str):
            return self.body
        return json.dumps(thaw(self.body))

    @classmethod
    def from_fixture(cls, fixture: ErrorFixture) -> RouteFulfillment:
        return cls(status=fixture.status, body=fixture.data, headers=dict(fixture.headers))


@dataclass(frozen=True)
class MockRoute:
    """A route pattern and its fulfillment.

    ``method`` limits interception to one HTTP method; other requests on the
    same pattern fall through to the network.
    """

    pattern: str
    fulfillment: RouteFulfillment
    method: str | None = None


class RouteMocker:
    """Installs :class:`MockRoute` objects on a page and records hits."""

    def __init__(self, page: Page) -> None:
        self.page = page
        self.intercepted: list[str] = []
        self._installed: list[MockRoute] = []

    def mock_json(
        self,
        pattern: str,
        payload: Any,
        status: int = 200,
        method: str | None = "GET",
    ) -> MockRoute:
        """Fulfil ``pattern`` with a JSON payload."""
        route = MockRoute(pattern, RouteFulfillment(status=status, body=payload), method)
        self.install([route])
        return route

    def mock_error(self, pattern: str, fixture: ErrorFixture, method: str | None = None) -> MockRoute:
        route = MockRoute(pattern, RouteFulfillment.from_fixture(fixture), method)
        self.install([route])
        return route

    def install(self, routes: list[MockRoute]) -> None:
        for mock_route in routes:
            self.page.route(mock_route.pattern, self._handler(mock_route))
            self._installed.append(mock_route)
            logger.debug(f"Route mocked: {mock_route.method or '*'} {mock_route.pattern}")

    def _handler(self, mock_route: MockRoute) -> Callable[[Route], None]:
        def handle(route: Route) -> None:
            request = route.request
            if mock_route.method and request.method.upper() != mock_route.method.upper():
                route.fallback()
                return
            self.intercepted.append(request.url)
            fulfillment = mock_route.fulfillment
            logger.debug(f"Fulfilling {request.method} {request.url} with {fulfillment.status}")
            route.fulfill(
                status=fulfillment.status,
                content_type=fulfillment.content_type,
                headers=fulfillment.headers or None,
                body=fulfillment.serialized_body(),
            )

        return handle

    def was_intercepted(self, fragment: str) -> bool:
        return any(fragment in url for url in self.intercepted)

    def clear(self) -> None:
        """Remove every installed route."""
        for mock_route in self._installed:
            self.page.unroute(mock_route.pattern)
        self._installed.clear()
        self.intercepted.clear()
