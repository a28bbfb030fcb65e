"""Exception hierarchy for storefront-qa.

Every error raised by the suite inherits from StorefrontQAError and carries:
- error_code: an ErrorCode enum value for categorization in reports
- context: ErrorContext with request/response details
- suggestions: actionable steps to resolve the issue

Two tagged bases split the hierarchy for the retry helper:
- TransientError: always eligible for retry (rate limits, transport failures)
- PermanentError: never retried (schema mismatches, missing elements, config)

Errors deriving from neither, such as RequestFailedError, fall back to
message-substring matching when the retry helper decides eligibility.

Example:
    try:
        client.get("/users/999")
    except RequestFailedError as e:
        print(f"Error [{e.error_code.value}]: {e.message}")
        for suggestion in e.suggestions:
            print(f"  - {suggestion}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes.

    Error codes are organized by category:
    - E0xx: Connection errors
    - E1xx: Request errors
    - E2xx: Validation errors
    - E3xx: Timing errors
    - E4xx: Page interaction errors
    - E5xx: Resilience errors (rate limit, token expiry)
    - E9xx: Unknown/internal errors
    """

    # Connection errors (E0xx)
    CONNECTION_FAILED = "E001"
    CONNECTION_TIMEOUT = "E002"

    # Request errors (E1xx)
    REQUEST_FAILED = "E102"
    RESPONSE_PARSE_FAILED = "E104"

    # Validation errors (E2xx)
    VALIDATION_FAILED = "E201"
    INVALID_CONFIG = "E202"
    SCHEMA_MISMATCH = "E205"

    # Timing errors (E3xx)
    RESPONSE_TIME_EXCEEDED = "E301"

    # Page interaction errors (E4xx)
    ELEMENT_NOT_FOUND = "E401"

    # Resilience errors (E5xx)
    RATE_LIMITED = "E503"
    TOKEN_EXPIRED = "E504"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 100:
            return "connection"
        elif code_num < 200:
            return "request"
        elif code_num < 300:
            return "validation"
        elif code_num < 400:
            return "timing"
        elif code_num < 500:
            return "page"
        elif code_num < 600:
            return "resilience"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context captured when an error occurs.

    Attributes:
        request: HTTP request details (method, url, body)
        response: HTTP response details (status, headers, body)
        page_url: URL of the browser page, for UI errors
        extra: Additional context-specific information
        timestamp: When the error occurred

    Example:
        context = ErrorContext(
            request={"method": "GET", "url": "/users/999"},
            response={"status": 404, "body": {"error": "User not found"}},
        )
    """

    request: dict[str, Any] | None = None
    response: dict[str, Any] | None = None
    page_url: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "request": self.request,
            "response": self.response,
            "page_url": self.page_url,
            "extra": self.extra,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}


class StorefrontQAError(Exception):
    """Base exception for all storefront-qa errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with execution details
        suggestions: List of actionable steps to resolve the issue
        recoverable: Whether the error can be retried
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        recoverable: bool | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        if recoverable is not None:
            self.recoverable = recoverable
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"

    def format_verbose(self) -> str:
        """Format error with request/response details and suggestions."""
        lines = [f"Error [{self.error_code.value}]: {self.message}"]

        if self.context.request:
            method = self.context.request.get("method", "?")
            url = self.context.request.get("url", "?")
            lines.append(f"Request: {method} {url}")

        if self.context.response:
            status = self.context.response.get("status", "?")
            lines.append(f"Response: HTTP {status}")

        if self.context.page_url:
            lines.append(f"Page: {self.context.page_url}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class TransientError(StorefrontQAError):
    """An error that is always worth retrying."""

    recoverable = True


class PermanentError(StorefrontQAError):
    """An error that retrying cannot fix."""

    recoverable = False


class ConnectionFailedError(TransientError):
    """The transport failed before an HTTP response arrived.

    Wraps httpx timeouts and connection errors so callers never see a raw
    transport exception.
    """

    error_code = ErrorCode.CONNECTION_FAILED
    default_message = "Failed to reach the storefront API"
    default_suggestions = [
        "Verify the site is reachable from this machine",
        "Check API_ENV selects the environment you expect",
        "Increase timeout_ms for the selected environment profile",
    ]


class RequestFailedError(StorefrontQAError):
    """HTTP request returned a status outside the 2xx range.

    The server responded but indicated an error condition. The status code
    and the response body are kept on the instance.
    """

    error_code = ErrorCode.REQUEST_FAILED
    default_message = "HTTP request failed"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        body: Any = None,
        **kwargs: Any,
    ) -> None:
        self.status_code = status_code
        self.body = body
        if status_code:
            kwargs.setdefault("suggestions", self._suggestions_for_status(status_code))
        super().__init__(message=message, **kwargs)

    def _suggestions_for_status(self, status_code: int) -> list[str]:
        """Generate suggestions based on HTTP status code."""
        if status_code == 400:
            return [
                "Check the request body matches the fields the API expects",
                "Review the field errors in the response body",
            ]
        elif status_code == 401:
            return [
                "Verify the credentials or the bearer token",
                "Log in before calling authenticated endpoints",
            ]
        elif status_code == 404:
            return [
                "Verify the endpoint path is correct",
                "Check the resource id exists in this environment",
            ]
        elif status_code == 429:
            return [
                "Wait for the retry-after interval before calling again",
                "Wrap the call in retry_on_error",
            ]
        elif 500 <= status_code < 600:
            return ["The storefront returned a server error; check the site status"]
        else:
            return [f"Received HTTP {status_code}; check the response body for details"]

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        return result


class RateLimitedError(RequestFailedError, TransientError):
    """Rate limit exceeded (HTTP 429)."""

    error_code = ErrorCode.RATE_LIMITED
    default_message = "Rate limit exceeded"

    def __init__(
        self,
        message: str | None = None,
        retry_after: float | None = None,
        **kwargs: Any,
    ) -> None:
        self.retry_after = retry_after
        kwargs.setdefault("status_code", 429)
        super().__init__(message=message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["retry_after"] = self.retry_after
        return result


class TokenExpiredError(RequestFailedError, TransientError):
    """The session token expired (HTTP 401); the call may succeed after re-login."""

    error_code = ErrorCode.TOKEN_EXPIRED
    default_message = "Token expired"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 401)
        super().__init__(message=message, **kwargs)


class ResponseParseError(PermanentError):
    """The response body could not be decoded as JSON."""

    error_code = ErrorCode.RESPONSE_PARSE_FAILED
    default_message = "Response body is not valid JSON"


class ValidationError(PermanentError):
    """A validation check failed.

    Check the 'field' and 'value' attributes for details about what failed.
    """

    error_code = ErrorCode.VALIDATION_FAILED
    default_message = "Validation failed"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(message=message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        result["value"] = repr(self.value)
        if self.expected:
            result["expected"] = self.expected
        return result


class ConfigValidationError(ValidationError):
    """Configuration validation failed."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"
    default_suggestions = [
        "Set API_ENV to one of: local, dev, staging, production",
        "Run 'storefront-qa envs' to list the known profiles",
    ]


class SchemaMismatchError(ValidationError):
    """A payload does not match its JSON schema.

    The ``errors`` attribute holds every violation found, not only the first.
    """

    error_code = ErrorCode.SCHEMA_MISMATCH
    default_message = "Response does not match expected schema"
    default_suggestions = [
        "Compare the payload with the schema descriptor",
        "Check whether the storefront API changed its response shape",
    ]

    def __init__(
        self,
        message: str | None = None,
        errors: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        self.errors = errors or []
        super().__init__(message=message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = self.errors
        return result


class ResponseTimeExceededError(PermanentError):
    """An operation took longer than its response-time budget."""

    error_code = ErrorCode.RESPONSE_TIME_EXCEEDED
    default_message = "API response took too long"

    def __init__(
        self,
        message: str | None = None,
        elapsed_ms: float | None = None,
        limit_ms: float | None = None,
        **kwargs: Any,
    ) -> None:
        self.elapsed_ms = elapsed_ms
        self.limit_ms = limit_ms
        super().__init__(message=message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["elapsed_ms"] = self.elapsed_ms
        result["limit_ms"] = self.limit_ms
        return result


class ElementNotFoundError(PermanentError):
    """No candidate selector matched a visible element."""

    error_code = ErrorCode.ELEMENT_NOT_FOUND
    default_message = "Element not found"
    default_suggestions = [
        "Check the page finished loading before the interaction",
        "Add a fallback selector for the changed markup",
    ]

    def __init__(
        self,
        message: str | None = None,
        selectors: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        self.selectors = selectors or []
        super().__init__(message=message, **kwargs)
