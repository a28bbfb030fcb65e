"""storefront-qa - end-to-end test suite for the Practice Software Testing storefront.

The suite drives the demo shop through its browser UI (Playwright page
objects with fallback selectors) and its JSON API (an httpx client with
status, schema and response-time checks), using static fixtures both as
mocked responses and as expected values.

Packages:
    config: environment profiles and suite settings
    errors: error hierarchy and the retry helper
    fixtures: static and generated test data
    schemas: JSON schemas for API payloads
    assertions: schema and response-time assertions
    client: sync and async API clients
    api: resource objects over the API
    mocking: httpx transport mocks and browser route mocks
    pages: page objects and the locator strategy

Example:
    >>> from storefront_qa import ApiClient, RequestOptions, get_active_profile
    >>> from storefront_qa.schemas import PRODUCT_SCHEMA
    >>> with ApiClient.from_profile(get_active_profile()) as client:
    ...     client.get("/products/1", options=RequestOptions(schema=PRODUCT_SCHEMA))
"""

from storefront_qa.assertions import assert_response_time, validate_schema
from storefront_qa.client import ApiClient, ApiResponse, AsyncApiClient, RequestOptions
from storefront_qa.config import EnvironmentProfile, SuiteSettings, get_active_profile, get_settings
from storefront_qa.errors import (
    PermanentError,
    RetryPolicy,
    StorefrontQAError,
    TransientError,
    retry_on_error,
)

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AsyncApiClient",
    "EnvironmentProfile",
    "PermanentError",
    "RequestOptions",
    "RetryPolicy",
    "StorefrontQAError",
    "SuiteSettings",
    "TransientError",
    "__version__",
    "assert_response_time",
    "get_active_profile",
    "get_settings",
    "retry_on_error",
    "validate_schema",
]
