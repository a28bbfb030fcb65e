"""Retry-on-error helper with exponential backoff.

An operation is invoked up to ``retries + 1`` times. Between attempts the
helper waits ``2**attempt * base_delay`` seconds (100 ms, 200 ms, 400 ms...
with the default base delay). Whether an error is worth another attempt is
decided by its type first and its message second:

- TransientError subclasses are always retried
- PermanentError subclasses are never retried
- anything else is retried when its message contains one of the configured
  substrings ("Token expired" and "Rate limit exceeded" by default)

When attempts run out the last error is re-raised unchanged.

Example:
    >>> from storefront_qa.errors.retry import retry_on_error
    >>> response = retry_on_error(lambda: client.get("/users/2"), retries=2)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from storefront_qa.errors.base import PermanentError, TransientError

if TYPE_CHECKING:
    from storefront_qa.config.settings import EnvironmentProfile

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRYABLE_MESSAGES: tuple[str, ...] = ("Token expired", "Rate limit exceeded")
DEFAULT_BASE_DELAY = 0.1


def backoff_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Seconds to wait after the failed attempt number ``attempt`` (0-indexed)."""
    return (2**attempt) * base_delay


def is_retryable(error: BaseException, retryable_messages: Sequence[str]) -> bool:
    """Decide whether ``error`` is eligible for another attempt."""
    if isinstance(error, TransientError):
        return True
    if isinstance(error, PermanentError):
        return False
    message = str(error)
    return any(fragment in message for fragment in retryable_messages)


@dataclass
class RetryPolicy:
    """Retry settings for one operation.

    Attributes:
        retries: Extra attempts after the first one. Zero means a single call.
        retryable_messages: Message fragments that make an untagged error
            retryable.
        base_delay: Delay in seconds after the first failed attempt; doubles
            on each subsequent failure.
    """

    retries: int = 2
    retryable_messages: tuple[str, ...] = DEFAULT_RETRYABLE_MESSAGES
    base_delay: float = DEFAULT_BASE_DELAY

    def __post_init__(self) -> None:
        if self.retries < 0:
            raise ValueError(f"retries must be >= 0, got {self.retries}")

    @classmethod
    def from_profile(
        cls,
        profile: EnvironmentProfile,
        retryable_messages: Sequence[str] | None = None,
    ) -> RetryPolicy:
        """Build a policy whose retry count follows the environment profile."""
        return cls(
            retries=profile.auth_retry_attempts,
            retryable_messages=tuple(retryable_messages or DEFAULT_RETRYABLE_MESSAGES),
        )

    @property
    def max_attempts(self) -> int:
        return self.retries + 1

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """Whether to try again after ``error`` on the 0-indexed ``attempt``."""
        if attempt >= self.retries:
            return False
        return is_retryable(error, self.retryable_messages)

    def execute(self, operation: Callable[[], T]) -> T:
        """Execute an operation with retry logic."""
        attempt = 0
        while True:
            try:
                return operation()
            except Exception as e:
                if not self.should_retry(e, attempt):
                    raise

                delay = backoff_delay(attempt, self.base_delay)
                logger.warning(
                    f"Retry {attempt + 1}/{self.retries} after {delay * 1000:.0f}ms due to: {e}"
                )
                time.sleep(delay)
                attempt += 1

    async def execute_async(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Execute an async operation with retry logic."""
        attempt = 0
        while True:
            try:
                return await operation()
            except Exception as e:
                if not self.should_retry(e, attempt):
                    raise

                delay = backoff_delay(attempt, self.base_delay)
                logger.warning(
                    f"Retry {attempt + 1}/{self.retries} after {delay * 1000:.0f}ms due to: {e}"
                )
                await asyncio.sleep(delay)
                attempt += 1


def _resolve_policy(
    retries: int | None,
    retryable_messages: Sequence[str] | None,
) -> RetryPolicy:
    if retries is None:
        from storefront_qa.config.settings import get_active_profile

        retries = get_active_profile().auth_retry_attempts
    messages = DEFAULT_RETRYABLE_MESSAGES if retryable_messages is None else retryable_messages
    return RetryPolicy(retries=retries, retryable_messages=tuple(messages))


def retry_on_error(
    operation: Callable[[], T],
    retries: int | None = None,
    retryable_messages: Sequence[str] | None = None,
) -> T:
    """Invoke ``operation``, retrying eligible failures with exponential backoff.

    Args:
        operation: Zero-argument callable to invoke.
        retries: Extra attempts after the first. Defaults to the active
            environment profile's ``auth_retry_attempts``.
        retryable_messages: Message fragments that make an untagged error
            retryable. Defaults to ``DEFAULT_RETRYABLE_MESSAGES``.

    Returns:
        Whatever ``operation`` returns on its first successful attempt.

    Raises:
        Exception: The last error raised by ``operation``, unchanged.
    """
    return _resolve_policy(retries, retryable_messages).execute(operation)


async def async_retry_on_error(
    operation: Callable[[], Awaitable[T]],
    retries: int | None = None,
    retryable_messages: Sequence[str] | None = None,
) -> T:
    """Async counterpart of :func:`retry_on_error`."""
    return await _resolve_policy(retries, retryable_messages).execute_async(operation)
