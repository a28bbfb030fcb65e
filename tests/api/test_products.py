"""Products API: listing, detail, search and filters."""

from __future__ import annotations

import pytest

from storefront_qa.api import ProductsApi
from storefront_qa.errors import SchemaMismatchError
from storefront_qa.fixtures import thaw
from storefront_qa.fixtures.api import PRODUCTS
from storefront_qa.mocking import HTTPMock


class TestProductsApi:
    """Tests for ProductsApi against mocked responses."""

    def test_list_with_pagination(self, http_mock: HTTPMock, products_api: ProductsApi) -> None:
        http_mock.get("/products").returns(json=PRODUCTS["products_list"])

        products = products_api.get_products()

        pagination = products["meta"]["pagination"]
        assert pagination["per_page"] == 10
        assert pagination["current_page"] == 1
        first = products["data"][0]
        assert first["id"] == 1
        assert first["name"] == "Premium Hammer"
        assert float(first["price"]) == 29.99

    def test_detail_includes_category_and_brand(self, http_mock: HTTPMock, products_api: ProductsApi) -> None:
        http_mock.get("/products/1").returns(json=PRODUCTS["product_detail"])

        product = products_api.get_product(1)

        assert product["category_id"] == PRODUCTS["category"]["id"]
        assert product["category"]["name"] == PRODUCTS["category"]["name"]
        assert product["brand_id"] == PRODUCTS["brand"]["id"]
        assert product["brand"]["name"] == "ToolMaster"

    def test_detail_without_price_fails_schema(self, http_mock: HTTPMock, products_api: ProductsApi) -> None:
        broken = thaw(PRODUCTS["product_detail"])
        del broken["price"]
        http_mock.get("/products/1").returns(json=broken)

        with pytest.raises(SchemaMismatchError, match="'price' is a required property"):
            products_api.get_product(1)

    def test_search_by_name(self, http_mock: HTTPMock, products_api: ProductsApi) -> None:
        http_mock.get("/products/search").with_query_param("q", "hammer").returns(
            json=PRODUCTS["name_search_results"]
        )

        results = products_api.search_products("hammer")

        assert len(results["data"]) == 2
        assert all("hammer" in p["name"].lower() for p in results["data"])

    def test_filter_by_price(self, http_mock: HTTPMock, products_api: ProductsApi) -> None:
        http_mock.get("/products").with_query_param("min_price", 10).with_query_param("max_price", 20).returns(
            json=PRODUCTS["price_range_results"]
        )

        results = products_api.filter_by_price(10, 20)

        assert results["data"]
        assert all(10 <= float(p["price"]) <= 20 for p in results["data"])

    def test_filter_by_category(self, http_mock: HTTPMock, products_api: ProductsApi) -> None:
        http_mock.get("/products").with_query_param("category_id", 2).returns(json=PRODUCTS["category_results"])

        results = products_api.filter_by_category(2)

        assert {p["category_id"] for p in results["data"]} == {2}

    def test_schema_checks_can_be_disabled(self, http_mock: HTTPMock, mock_api_client) -> None:
        http_mock.get("/products/1").returns(json={"id": 1})
        assert ProductsApi(mock_api_client, validate_schemas=False).get_product(1) == {"id": 1}
