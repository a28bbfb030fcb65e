"""JSON Schema (draft 7) descriptors for storefront API payloads.

Nullable fields list ``"null"`` in their type union. Price-like fields accept
both strings and numbers because the API serializes decimals as strings on
some endpoints.
"""

from __future__ import annotations

from typing import Any

Schema = dict[str, Any]


def _pagination_wrapper(item_schema: Schema) -> Schema:
    return {
        "type": "object",
        "required": ["data", "meta"],
        "properties": {
            "data": {"type": "array", "items": item_schema},
            "meta": {
                "type": "object",
                "required": ["pagination"],
                "properties": {"pagination": PAGINATION_SCHEMA},
            },
        },
    }


PAGINATION_SCHEMA: Schema = {
    "type": "object",
    "required": ["total", "count", "per_page", "current_page", "total_pages"],
    "properties": {
        "total": {"type": "number"},
        "count": {"type": "number"},
        "per_page": {"type": "number"},
        "current_page": {"type": "number"},
        "total_pages": {"type": "number"},
    },
}

USER_SCHEMA: Schema = {
    "type": "object",
    "required": ["id", "first_name", "last_name", "email"],
    "properties": {
        "id": {"type": "number"},
        "first_name": {"type": "string"},
        "last_name": {"type": "string"},
        "email": {"type": "string", "format": "email"},
        "avatar": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}

USERS_LIST_SCHEMA: Schema = {"type": "array", "items": USER_SCHEMA}

USER_CREATION_SCHEMA: Schema = {
    "type": "object",
    "required": ["name", "job", "id", "createdAt"],
    "properties": {
        "name": {"type": "string"},
        "job": {"type": "string"},
        "id": {"type": ["string", "number"]},
        "createdAt": {"type": "string", "format": "date-time"},
    },
}

AUTH_RESPONSE_SCHEMA: Schema = {
    "type": "object",
    "required": ["token"],
    "properties": {"token": {"type": "string"}},
}

_TAXONOMY_SCHEMA: Schema = {
    "type": ["object", "null"],
    "properties": {
        "id": {"type": "number"},
        "name": {"type": "string"},
        "slug": {"type": "string"},
    },
}

PRODUCT_SCHEMA: Schema = {
    "type": "object",
    "required": ["id", "name", "description", "price", "category_id"],
    "properties": {
        "id": {"type": "number"},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "price": {"type": ["string", "number"]},
        "category_id": {"type": ["number", "string"]},
        "brand_id": {"type": ["number", "string", "null"]},
        "image": {"type": ["string", "null"]},
        "category": _TAXONOMY_SCHEMA,
        "brand": _TAXONOMY_SCHEMA,
    },
}

PRODUCTS_LIST_SCHEMA: Schema = _pagination_wrapper(PRODUCT_SCHEMA)

ORDER_ITEM_SCHEMA: Schema = {
    "type": "object",
    "required": ["product_id", "quantity", "price"],
    "properties": {
        "id": {"type": "number"},
        "order_id": {"type": "number"},
        "product_id": {"type": "number"},
        "quantity": {"type": "number"},
        "price": {"type": ["string", "number"]},
        "product": {"type": ["object", "null"]},
    },
}

ORDER_SCHEMA: Schema = {
    "type": "object",
    "required": ["id", "user_id", "order_status_id", "created_at"],
    "properties": {
        "id": {"type": "number"},
        "user_id": {"type": "number"},
        "order_status_id": {"type": "number"},
        "shipping_address": {"type": "string"},
        "shipping_city": {"type": "string"},
        "shipping_state": {"type": "string"},
        "shipping_zip": {"type": "string"},
        "shipping_country": {"type": "string"},
        "payment_type": {"type": "string"},
        "created_at": {"type": "string"},
        "updated_at": {"type": "string"},
        "items": {"type": ["array", "null"], "items": ORDER_ITEM_SCHEMA},
    },
}

ORDERS_LIST_SCHEMA: Schema = _pagination_wrapper(ORDER_SCHEMA)

ERROR_RESPONSE_SCHEMA: Schema = {
    "type": "object",
    "anyOf": [{"required": ["error"]}, {"required": ["errors"]}],
    "properties": {
        "error": {"type": "string"},
        "message": {"type": "string"},
        "errors": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["field", "message"],
                "properties": {
                    "field": {"type": "string"},
                    "message": {"type": "string"},
                },
            },
        },
    },
}
