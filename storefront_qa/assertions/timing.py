"""Response-time assertions.

Wall-clock time is measured from just before the operation starts to just
after it resolves, so wrapping a retrying call counts every attempt and
every backoff wait toward the budget.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from storefront_qa.errors import ResponseTimeExceededError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resolve_limit(max_time_ms: float | None) -> float:
    if max_time_ms is not None:
        return max_time_ms
    from storefront_qa.config.settings import get_active_profile

    return get_active_profile().max_response_time_ms


def _check(elapsed_ms: float, limit_ms: float) -> None:
    logger.debug(f"Operation took {elapsed_ms:.0f}ms (limit {limit_ms:g}ms)")
    if elapsed_ms > limit_ms:
        raise ResponseTimeExceededError(
            f"API response took too long: {elapsed_ms:.0f}ms (limit {limit_ms:g}ms)",
            elapsed_ms=elapsed_ms,
            limit_ms=limit_ms,
        )


def assert_response_time(operation: Callable[[], T], max_time_ms: float | None = None) -> T:
    """Run ``operation`` and fail if it takes longer than ``max_time_ms``.

    Args:
        operation: Zero-argument callable to time.
        max_time_ms: Budget in milliseconds. Defaults to the active
            environment profile's ``max_response_time_ms``.

    Returns:
        The operation's result, unchanged.

    Raises:
        ResponseTimeExceededError: If the elapsed time exceeds the budget.
            Errors raised by the operation itself propagate unchanged.

    Example:
        >>> users = assert_response_time(lambda: client.get("/users"), 1000)
    """
    limit_ms = _resolve_limit(max_time_ms)
    start = time.perf_counter()
    result = operation()
    elapsed_ms = (time.perf_counter() - start) * 1000
    _check(elapsed_ms, limit_ms)
    return result


async def async_assert_response_time(
    operation: Callable[[], Awaitable[T]],
    max_time_ms: float | None = None,
) -> T:
    """Async counterpart of :func:`assert_response_time`."""
    limit_ms = _resolve_limit(max_time_ms)
    start = time.perf_counter()
    result = await operation()
    elapsed_ms = (time.perf_counter() - start) * 1000
    _check(elapsed_ms, limit_ms)
    return result


def measure_duration(action: Callable[[], object]) -> float:
    """Run ``action`` and return how long it took in milliseconds."""
    start = time.perf_counter()
    action()
    return (time.perf_counter() - start) * 1000
