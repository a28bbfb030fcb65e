"""Error hierarchy and retry helper."""

from storefront_qa.errors.base import (
    ConfigValidationError,
    ConnectionFailedError,
    ElementNotFoundError,
    ErrorCode,
    ErrorContext,
    PermanentError,
    RateLimitedError,
    RequestFailedError,
    ResponseParseError,
    ResponseTimeExceededError,
    SchemaMismatchError,
    StorefrontQAError,
    TokenExpiredError,
    TransientError,
    ValidationError,
)
from storefront_qa.errors.retry import (
    DEFAULT_RETRYABLE_MESSAGES,
    RetryPolicy,
    async_retry_on_error,
    backoff_delay,
    is_retryable,
    retry_on_error,
)

__all__ = [
    "ConfigValidationError",
    "ConnectionFailedError",
    "DEFAULT_RETRYABLE_MESSAGES",
    "ElementNotFoundError",
    "ErrorCode",
    "ErrorContext",
    "PermanentError",
    "RateLimitedError",
    "RequestFailedError",
    "ResponseParseError",
    "ResponseTimeExceededError",
    "RetryPolicy",
    "SchemaMismatchError",
    "StorefrontQAError",
    "TokenExpiredError",
    "TransientError",
    "ValidationError",
    "async_retry_on_error",
    "backoff_delay",
    "is_retryable",
    "retry_on_error",
]
