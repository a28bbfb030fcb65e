"""Tests for schema validation."""

from __future__ import annotations

from typing import Any

import pytest

from storefront_qa.assertions import schema_errors, validate_schema
from storefront_qa.errors import SchemaMismatchError
from storefront_qa.fixtures import thaw
from storefront_qa.fixtures.api import ORDERS, PRODUCTS, USERS
from storefront_qa.schemas import AUTH_RESPONSE_SCHEMA, ORDERS_LIST_SCHEMA, PRODUCT_SCHEMA, USER_SCHEMA


class TestValidateSchema:
    """Tests for validate_schema."""

    def test_conforming_payload_passes(self) -> None:
        assert validate_schema(PRODUCTS["product_detail"], PRODUCT_SCHEMA) is True

    def test_missing_price_is_reported(self) -> None:
        product = thaw(PRODUCTS["product_detail"])
        del product["price"]

        with pytest.raises(SchemaMismatchError) as exc_info:
            validate_schema(product, PRODUCT_SCHEMA)

        assert "'price' is a required property" in str(exc_info.value)
        assert exc_info.value.errors == ["$: 'price' is a required property"]

    def test_all_violations_are_listed(self) -> None:
        product: dict[str, Any] = {"id": "one", "name": 7, "description": "d", "category_id": 1}

        with pytest.raises(SchemaMismatchError) as exc_info:
            validate_schema(product, PRODUCT_SCHEMA)

        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any("'price' is a required property" in e for e in errors)
        assert any(e.startswith("$.id:") for e in errors)
        assert any(e.startswith("$.name:") for e in errors)

    def test_message_echoes_payload(self) -> None:
        with pytest.raises(SchemaMismatchError) as exc_info:
            validate_schema({"token": 12345}, AUTH_RESPONSE_SCHEMA)
        assert '"token": 12345' in str(exc_info.value)

    def test_price_accepts_string_or_number(self) -> None:
        product = thaw(PRODUCTS["product_detail"])
        product["price"] = 29.99
        assert validate_schema(product, PRODUCT_SCHEMA)

    def test_nested_paths_in_messages(self) -> None:
        orders = thaw(ORDERS["orders_list"])
        del orders["data"][1]["user_id"]
        assert schema_errors(orders, ORDERS_LIST_SCHEMA) == ["$.data[1]: 'user_id' is a required property"]

    def test_user_schema_rejects_unknown_fields(self) -> None:
        user = {**thaw(USERS["mock_users"][0]), "role": "admin"}
        assert schema_errors(user, USER_SCHEMA)

    def test_email_format_is_checked(self) -> None:
        user = {**thaw(USERS["mock_users"][0]), "email": "not-an-email"}
        assert any("email" in e for e in schema_errors(user, USER_SCHEMA))
