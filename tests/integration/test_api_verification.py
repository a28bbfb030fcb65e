"""The storefront keeps rendering while its API calls are mocked."""

from __future__ import annotations

import pytest

from storefront_qa.api import StorefrontApiHelpers
from storefront_qa.config import Endpoints
from storefront_qa.fixtures.api import ORDERS, PRODUCTS
from storefront_qa.mocking import RouteMocker
from storefront_qa.pages import ProductBrowsingPage
from storefront_qa.pages.locators import LocatorChain, by_css, by_data_test

pytestmark = pytest.mark.e2e

PAGE_CHROME = LocatorChain.of("page chrome", by_data_test("product-name"), by_css("nav"), by_css("footer"))


class TestApiVerification:
    def test_page_renders_with_mocked_api(
        self, route_mocker: RouteMocker, product_page: ProductBrowsingPage
    ) -> None:
        route_mocker.mock_json("**/api/products**", PRODUCTS["products_list"])
        route_mocker.mock_json("**/api/orders**", ORDERS["orders_list"])

        product_page.goto()
        product_page.settle()

        assert product_page.wait_for_any(PAGE_CHROME)
        assert product_page.screenshot("api-verification-homepage") is not None

    def test_live_api_answers_directly(self, api_helpers: StorefrontApiHelpers) -> None:
        assert api_helpers.status_of(Endpoints.PRODUCTS) == 200
        assert isinstance(api_helpers.get_products(), list)
