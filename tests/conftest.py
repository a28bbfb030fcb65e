"""Shared fixtures for storefront-qa tests.

Suite fixtures (``http_mock``, ``mock_api_client``, page objects, ...) come
from the ``storefront_qa.pytest_plugin`` entry point.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from storefront_qa.config import get_settings
from tests.doubles import FakePage, make_locator

_ENV_VARS = (
    "API_ENV",
    "STOREFRONT_QA_API_ENV",
    "STOREFRONT_QA_CONFIG",
    "STOREFRONT_QA_E2E",
    "STOREFRONT_QA_SITE_URL",
    "STOREFRONT_QA_SITE_API_URL",
    "STOREFRONT_QA_ARTIFACTS_DIR",
    "STOREFRONT_QA_UI_TIMEOUT_MS",
    "STOREFRONT_QA_STRICT_LOCATORS",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Unset suite environment variables and reset cached settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def locator_factory():
    return make_locator
