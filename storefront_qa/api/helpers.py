"""Lenient API helpers for test setup and cross-checks.

These never raise on an HTTP error status; they return ``None``, ``[]`` or
``False`` instead so a UI test can probe the API without failing on it.
Transport failures still propagate.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront_qa.client import ApiClient, ApiResponse, RequestOptions
from storefront_qa.config.endpoints import Endpoints

logger = logging.getLogger(__name__)

_LENIENT = RequestOptions(validate_status=False)


class StorefrontApiHelpers:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def _data_or(self, response: ApiResponse, default: Any) -> Any:
        if response.ok:
            return response.data
        logger.info(f"API helper got HTTP {response.status}; returning {default!r}")
        return default

    def create_user(self, user_data: dict[str, Any]) -> Any | None:
        return self._data_or(self.client.post(Endpoints.USERS, data=user_data, options=_LENIENT), None)

    def get_user(self, user_id: int | str) -> Any | None:
        return self._data_or(self.client.get(Endpoints.user(user_id), options=_LENIENT), None)

    def delete_user(self, user_id: int | str) -> bool:
        return self.client.delete(Endpoints.user(user_id), options=_LENIENT).ok

    def get_products(self) -> Any:
        return self._data_or(self.client.get(Endpoints.PRODUCTS, options=_LENIENT), [])

    def get_product(self, product_id: int | str) -> Any | None:
        return self._data_or(self.client.get(Endpoints.product(product_id), options=_LENIENT), None)

    def get_order(self, order_id: int | str) -> Any | None:
        return self._data_or(self.client.get(Endpoints.order(order_id), options=_LENIENT), None)

    def status_of(self, endpoint: str) -> int:
        """HTTP status of a GET, for "the API is up" cross-checks."""
        return self.client.get(endpoint, options=_LENIENT).status
