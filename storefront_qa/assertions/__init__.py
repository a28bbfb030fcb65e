"""Schema and response-time assertions."""

from storefront_qa.assertions.schema import schema_errors, validate_schema
from storefront_qa.assertions.timing import (
    assert_response_time,
    async_assert_response_time,
    measure_duration,
)

__all__ = [
    "assert_response_time",
    "async_assert_response_time",
    "measure_duration",
    "schema_errors",
    "validate_schema",
]
