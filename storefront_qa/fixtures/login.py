"""Storefront accounts used by the login and checkout flows."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


ADMIN = Credentials("admin@practicesoftwaretesting.com", "welcome01")
CUSTOMER = Credentials("customer@practicesoftwaretesting.com", "welcome01")
CUSTOMER_2 = Credentials("customer2@practicesoftwaretesting.com", "welcome01")
INVALID = Credentials("invalid@example.com", "wrongpassword")
LOCKED = Credentials("locked@practicesoftwaretesting.com", "welcome01")

ACCOUNTS: dict[str, Credentials] = {
    "admin": ADMIN,
    "user": CUSTOMER,
    "user2": CUSTOMER_2,
    "invalid": INVALID,
    "locked": LOCKED,
}
