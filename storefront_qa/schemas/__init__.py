"""JSON Schema descriptors for storefront API payloads."""

from storefront_qa.schemas.api import (
    AUTH_RESPONSE_SCHEMA,
    ERROR_RESPONSE_SCHEMA,
    ORDER_ITEM_SCHEMA,
    ORDER_SCHEMA,
    ORDERS_LIST_SCHEMA,
    PAGINATION_SCHEMA,
    PRODUCT_SCHEMA,
    PRODUCTS_LIST_SCHEMA,
    USER_CREATION_SCHEMA,
    USER_SCHEMA,
    USERS_LIST_SCHEMA,
    Schema,
)

__all__ = [
    "AUTH_RESPONSE_SCHEMA",
    "ERROR_RESPONSE_SCHEMA",
    "ORDER_ITEM_SCHEMA",
    "ORDER_SCHEMA",
    "ORDERS_LIST_SCHEMA",
    "PAGINATION_SCHEMA",
    "PRODUCT_SCHEMA",
    "PRODUCTS_LIST_SCHEMA",
    "Schema",
    "USER_CREATION_SCHEMA",
    "USER_SCHEMA",
    "USERS_LIST_SCHEMA",
]
