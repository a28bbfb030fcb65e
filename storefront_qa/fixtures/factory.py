"""Faker-backed generators for data that must be unique per run."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any

from faker import Faker

_faker: Faker | None = None


def get_faker() -> Faker:
    global _faker
    if _faker is None:
        _faker = Faker("en_US")
    return _faker


def generate_random_email(domain: str = "example.com") -> str:
    """Unique address of the form ``test-<millis>-<rand>@<domain>``."""
    timestamp = int(time.time() * 1000)
    suffix = random.randint(0, 9999)
    return f"test-{timestamp}-{suffix}@{domain}"


@dataclass(frozen=True)
class NewCustomer:
    first_name: str
    last_name: str
    email: str
    password: str
    address: str
    city: str
    state: str
    zip: str
    country: str

    def registration_payload(self) -> dict[str, Any]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "password": self.password,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "postcode": self.zip,
            "country": self.country,
        }


@dataclass(frozen=True)
class ExistingCustomer:
    id: int
    first_name: str
    last_name: str
    email: str


EXISTING_USER = ExistingCustomer(id=1, first_name="Existing", last_name="User", email="existing@example.com")


def build_new_user(randomize_name: bool = False) -> NewCustomer:
    """A registrable customer with a fresh email address.

    The address fields are fixed test values unless ``randomize_name`` asks
    Faker for a realistic name.
    """
    first_name, last_name = "Test", "User"
    if randomize_name:
        fake = get_faker()
        first_name, last_name = fake.first_name(), fake.last_name()
    return NewCustomer(
        first_name=first_name,
        last_name=last_name,
        email=generate_random_email(),
        password="Password123!",
        address="123 Test St",
        city="Test City",
        state="TS",
        zip="12345",
        country="US",
    )


def build_user_payload(job: str | None = None) -> dict[str, str]:
    """Body for ``POST /users`` with a Faker name and job title."""
    fake = get_faker()
    return {"name": fake.name(), "job": job or fake.job()}
