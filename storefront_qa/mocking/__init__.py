"""Mocking for API (httpx transport) and UI (browser routes) tests."""

from storefront_qa.mocking.http import (
    EndpointBuilder,
    HTTPMock,
    MockedEndpoint,
    MockedResponse,
    MockError,
    MockNotFoundError,
    RequestMatcher,
    ResponseSequence,
)
from storefront_qa.mocking.routes import MockRoute, RouteFulfillment, RouteMocker

__all__ = [
    "EndpointBuilder",
    "HTTPMock",
    "MockError",
    "MockNotFoundError",
    "MockRoute",
    "MockedEndpoint",
    "MockedResponse",
    "RequestMatcher",
    "ResponseSequence",
    "RouteFulfillment",
    "RouteMocker",
]
