"""Error responses the storefront API returns for negative paths."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from storefront_qa.fixtures.base import freeze


@dataclass(frozen=True)
class ErrorFixture:
    """A canned error response: status, JSON body and optional headers."""

    status: int
    data: Mapping[str, Any]
    headers: Mapping[str, str] = field(default_factory=lambda: freeze({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", freeze(self.data))
        object.__setattr__(self, "headers", freeze(self.headers))


NON_EXISTENT_USER = ErrorFixture(
    status=404,
    data={"error": "User not found", "message": "The requested user does not exist"},
)

INVALID_AUTHENTICATION = ErrorFixture(
    status=401,
    data={"error": "Invalid credentials", "message": "Email or password is incorrect"},
)

NON_EXISTENT_PRODUCT = ErrorFixture(
    status=404,
    data={"error": "Product not found", "message": "The requested product does not exist"},
)

INVALID_ORDER_DATA = ErrorFixture(
    status=400,
    data={
        "errors": [
            {"field": "shipping_address", "message": "Shipping address is required"},
            {"field": "shipping_city", "message": "Shipping city is required"},
            {"field": "items", "message": "At least one item is required"},
        ]
    },
)

RATE_LIMIT_ERROR = ErrorFixture(
    status=429,
    data={"error": "Too many requests", "message": "Rate limit exceeded"},
    headers={"retry-after": "30"},
)

TOKEN_EXPIRED_ERROR = ErrorFixture(
    status=401,
    data={"error": "Token expired", "message": "The session token has expired"},
)
