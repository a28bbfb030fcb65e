"""Resource objects for the users, products and orders endpoints.

Each call goes through :class:`~storefront_qa.client.ApiClient`, so a status
outside 2xx raises, and the decoded body is checked against the schema that
describes the endpoint (disable with ``validate_schemas=False``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from storefront_qa.client import ApiClient, RequestOptions
from storefront_qa.config.endpoints import Endpoints
from storefront_qa.schemas import (
    AUTH_RESPONSE_SCHEMA,
    ORDER_SCHEMA,
    ORDERS_LIST_SCHEMA,
    PRODUCT_SCHEMA,
    PRODUCTS_LIST_SCHEMA,
    USER_CREATION_SCHEMA,
    USERS_LIST_SCHEMA,
    Schema,
)

logger = logging.getLogger(__name__)


class ResourceApi:
    """Shared plumbing for the resource objects."""

    def __init__(
        self,
        client: ApiClient,
        validate_schemas: bool = True,
        max_response_time_ms: float | None = None,
    ) -> None:
        self.client = client
        self.validate_schemas = validate_schemas
        self.max_response_time_ms = max_response_time_ms

    def _options(self, schema: Schema | None) -> RequestOptions:
        return RequestOptions(
            schema=schema if self.validate_schemas else None,
            max_response_time_ms=self.max_response_time_ms,
        )

    def _get(self, endpoint: str, params: Mapping[str, Any] | None = None, schema: Schema | None = None) -> Any:
        return self.client.get(endpoint, params=params, options=self._options(schema)).data

    def _post(self, endpoint: str, data: Any, schema: Schema | None = None) -> Any:
        return self.client.post(endpoint, data=data, options=self._options(schema)).data

    def _put(self, endpoint: str, data: Any, schema: Schema | None = None) -> Any:
        return self.client.put(endpoint, data=data, options=self._options(schema)).data

    def _delete(self, endpoint: str) -> int:
        return self.client.delete(endpoint, options=self._options(None)).status


class UsersApi(ResourceApi):
    def get_users(self, page: int | None = None) -> Any:
        params = {"page": page} if page else None
        return self._get(Endpoints.USERS, params, USERS_LIST_SCHEMA)

    def get_user(self, user_id: int | str) -> Any:
        return self._get(Endpoints.user(user_id))

    def create_user(self, user_data: Mapping[str, Any]) -> Any:
        return self._post(Endpoints.USERS, user_data, USER_CREATION_SCHEMA)

    def delete_user(self, user_id: int | str) -> int:
        return self._delete(Endpoints.user(user_id))

    def login(self, email: str, password: str) -> Any:
        """Authenticate and return the token payload.

        The token is also installed on the client for later calls.
        """
        payload = self._post(Endpoints.LOGIN, {"email": email, "password": password}, AUTH_RESPONSE_SCHEMA)
        token = payload.get("token") if isinstance(payload, dict) else None
        if token:
            self.client.set_auth_token(token)
            logger.debug(f"Authenticated as {email}")
        return payload


class ProductsApi(ResourceApi):
    def get_products(self, params: Mapping[str, Any] | None = None) -> Any:
        return self._get(Endpoints.PRODUCTS, params, PRODUCTS_LIST_SCHEMA)

    def get_product(self, product_id: int | str) -> Any:
        return self._get(Endpoints.product(product_id), schema=PRODUCT_SCHEMA)

    def search_products(self, search_term: str) -> Any:
        return self._get(Endpoints.PRODUCT_SEARCH, {"q": search_term}, PRODUCTS_LIST_SCHEMA)

    def filter_by_price(self, min_price: float, max_price: float) -> Any:
        params = {"min_price": min_price, "max_price": max_price}
        return self._get(Endpoints.PRODUCTS, params, PRODUCTS_LIST_SCHEMA)

    def filter_by_category(self, category_id: int | str) -> Any:
        return self._get(Endpoints.PRODUCTS, {"category_id": category_id}, PRODUCTS_LIST_SCHEMA)


class OrdersApi(ResourceApi):
    def get_orders(self, params: Mapping[str, Any] | None = None) -> Any:
        return self._get(Endpoints.ORDERS, params, ORDERS_LIST_SCHEMA)

    def get_order(self, order_id: int | str) -> Any:
        return self._get(Endpoints.order(order_id), schema=ORDER_SCHEMA)

    def create_order(self, order_data: Mapping[str, Any]) -> Any:
        return self._post(Endpoints.ORDERS, order_data, ORDER_SCHEMA)

    def update_order_status(self, order_id: int | str, status_id: int) -> Any:
        return self._put(Endpoints.order(order_id), {"order_status_id": status_id}, ORDER_SCHEMA)
