"""Tests for the error hierarchy."""

from __future__ import annotations

from storefront_qa.errors import (
    ConfigValidationError,
    ConnectionFailedError,
    ElementNotFoundError,
    ErrorCode,
    ErrorContext,
    PermanentError,
    RateLimitedError,
    RequestFailedError,
    ResponseTimeExceededError,
    SchemaMismatchError,
    StorefrontQAError,
    TransientError,
)


class TestErrorCode:
    def test_categories(self) -> None:
        assert ErrorCode.CONNECTION_FAILED.category == "connection"
        assert ErrorCode.REQUEST_FAILED.category == "request"
        assert ErrorCode.SCHEMA_MISMATCH.category == "validation"
        assert ErrorCode.RESPONSE_TIME_EXCEEDED.category == "timing"
        assert ErrorCode.ELEMENT_NOT_FOUND.category == "page"
        assert ErrorCode.RATE_LIMITED.category == "resilience"
        assert ErrorCode.UNKNOWN.category == "unknown"


class TestStorefrontQAError:
    """Tests for the base error."""

    def test_str_includes_code(self) -> None:
        error = RequestFailedError("API request failed with status 404", status_code=404)
        assert str(error) == "[E102] API request failed with status 404"

    def test_default_message(self) -> None:
        assert ResponseTimeExceededError().message == "API response took too long"

    def test_extra_context_lands_in_context(self) -> None:
        error = StorefrontQAError("boom", step="checkout")
        assert error.context.extra == {"step": "checkout"}

    def test_format_verbose(self) -> None:
        error = RequestFailedError(
            "API request failed with status 404",
            status_code=404,
            context=ErrorContext(
                request={"method": "GET", "url": "https://api.test/users/999"},
                response={"status": 404},
            ),
        )
        text = error.format_verbose()
        assert "Request: GET https://api.test/users/999" in text
        assert "Response: HTTP 404" in text
        assert "Suggestions:" in text

    def test_to_dict(self) -> None:
        data = RequestFailedError("nope", status_code=500).to_dict()
        assert data["error_code"] == "E102"
        assert data["status_code"] == 500


class TestTags:
    """Retry eligibility is carried by the class."""

    def test_transient(self) -> None:
        assert isinstance(ConnectionFailedError(), TransientError)
        assert isinstance(RateLimitedError(), TransientError)
        assert RateLimitedError().recoverable is True

    def test_permanent(self) -> None:
        for error in (
            SchemaMismatchError(),
            ResponseTimeExceededError(),
            ElementNotFoundError(),
            ConfigValidationError(),
        ):
            assert isinstance(error, PermanentError)
            assert error.recoverable is False

    def test_plain_status_error_is_untagged(self) -> None:
        error = RequestFailedError(status_code=404)
        assert not isinstance(error, (TransientError, PermanentError))

    def test_rate_limited_is_a_request_failure(self) -> None:
        error = RateLimitedError(retry_after=30)
        assert isinstance(error, RequestFailedError)
        assert error.status_code == 429
        assert error.retry_after == 30

    def test_element_not_found_keeps_selectors(self) -> None:
        error = ElementNotFoundError(selectors=["#email", '[data-test="email"]'])
        assert error.selectors == ["#email", '[data-test="email"]']
