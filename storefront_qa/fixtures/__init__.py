"""Static test data for the storefront suite.

Modules:
    api: mock users/products/orders payloads
    errors: canned error responses
    login: storefront accounts
    catalog: catalogue data as shown in the UI
    checkout: billing, payment and timing fixtures
    factory: per-run unique data (emails, new customers)
"""

from storefront_qa.fixtures.base import freeze, thaw
from storefront_qa.fixtures.errors import ErrorFixture
from storefront_qa.fixtures.factory import build_new_user, build_user_payload, generate_random_email
from storefront_qa.fixtures.login import Credentials

__all__ = [
    "Credentials",
    "ErrorFixture",
    "build_new_user",
    "build_user_payload",
    "freeze",
    "generate_random_email",
    "thaw",
]
