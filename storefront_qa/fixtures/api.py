"""Mock payloads for the users, products and orders API."""

from __future__ import annotations

from storefront_qa.fixtures.base import freeze

_HAMMER = {
    "id": 1,
    "name": "Premium Hammer",
    "description": "High quality steel hammer with ergonomic grip",
    "price": "29.99",
    "category_id": 1,
    "brand_id": 2,
    "image": "hammer.jpg",
}

_CATEGORY = {"id": 1, "name": "Hand Tools", "slug": "hand-tools"}
_BRAND = {"id": 2, "name": "ToolMaster", "slug": "toolmaster"}

_SHIPPING = {
    "shipping_address": "123 Test Street",
    "shipping_city": "Test City",
    "shipping_state": "TS",
    "shipping_zip": "12345",
    "shipping_country": "US",
    "payment_type": "credit_card",
}


def _page(items: list[dict], total: int, per_page: int, current_page: int, total_pages: int) -> dict:
    return {
        "data": items,
        "meta": {
            "pagination": {
                "total": total,
                "count": len(items),
                "per_page": per_page,
                "current_page": current_page,
                "total_pages": total_pages,
            }
        },
    }


def _order(order_id: int, status_id: int, created_at: str, **shipping: str) -> dict:
    return {
        "id": order_id,
        "user_id": 42,
        "order_status_id": status_id,
        **_SHIPPING,
        **shipping,
        "created_at": created_at,
        "updated_at": created_at,
    }


USERS = freeze(
    {
        "mock_users": [
            {
                "id": 1,
                "first_name": "George",
                "last_name": "Bluth",
                "email": "george.bluth@reqres.in",
            },
            {
                "id": 2,
                "first_name": "Janet",
                "last_name": "Weaver",
                "email": "janet.weaver@reqres.in",
            },
        ],
        "new_user_data": {"name": "Test User", "job": "Software Tester"},
        "new_user_response": {
            "name": "Test User",
            "job": "Software Tester",
            "id": "123",
            "createdAt": "2023-05-16T12:34:56.789Z",
        },
        "login_data": {"email": "eve.holt@reqres.in", "password": "cityslicka"},
        "login_response": {"token": "QpwL5tke4Pnpja7X4"},
        "user_response": {
            "data": {
                "id": 2,
                "email": "janet.weaver@reqres.in",
                "first_name": "Janet",
                "last_name": "Weaver",
                "avatar": "https://reqres.in/img/faces/2-image.jpg",
            }
        },
    }
)

PRODUCTS = freeze(
    {
        "products_list": _page(
            [
                _HAMMER,
                {
                    "id": 2,
                    "name": "Professional Screwdriver Set",
                    "description": "Set of 10 professional screwdrivers",
                    "price": "45.50",
                    "category_id": 1,
                    "brand_id": 3,
                    "image": "screwdriver_set.jpg",
                },
            ],
            total=24,
            per_page=10,
            current_page=1,
            total_pages=3,
        ),
        "product_detail": {**_HAMMER, "category": _CATEGORY, "brand": _BRAND},
        "category": _CATEGORY,
        "brand": _BRAND,
        "name_search_results": _page(
            [
                _HAMMER,
                {
                    "id": 5,
                    "name": "Framing Hammer",
                    "description": "Heavy duty hammer perfect for framing",
                    "price": "35.99",
                    "category_id": 1,
                    "brand_id": 4,
                    "image": "framing_hammer.jpg",
                },
            ],
            total=2,
            per_page=10,
            current_page=1,
            total_pages=1,
        ),
        "price_range_results": _page(
            [
                {
                    "id": 3,
                    "name": "Tape Measure",
                    "description": "25-foot tape measure with magnetic hook",
                    "price": "12.99",
                    "category_id": 1,
                    "brand_id": 2,
                    "image": "tape_measure.jpg",
                },
                {
                    "id": 8,
                    "name": "Safety Goggles",
                    "description": "Anti-fog safety goggles",
                    "price": "15.49",
                    "category_id": 3,
                    "brand_id": 5,
                    "image": "safety_goggles.jpg",
                },
            ],
            total=8,
            per_page=10,
            current_page=1,
            total_pages=1,
        ),
        "category_results": _page(
            [
                {
                    "id": 12,
                    "name": "Circular Saw",
                    "description": "7.25-inch circular saw with laser guide",
                    "price": "89.99",
                    "category_id": 2,
                    "brand_id": 4,
                    "image": "circular_saw.jpg",
                },
                {
                    "id": 15,
                    "name": "Drill Set",
                    "description": "Cordless drill with 20V battery and accessories",
                    "price": "129.99",
                    "category_id": 2,
                    "brand_id": 2,
                    "image": "drill_set.jpg",
                },
            ],
            total=6,
            per_page=10,
            current_page=1,
            total_pages=1,
        ),
        "pliers_search_results": _page(
            [
                {
                    "id": 21,
                    "name": "Combination Pliers",
                    "description": "Heavy-duty combination pliers for gripping and cutting.",
                    "price": "14.15",
                    "category_id": 7,
                    "brand_id": 1,
                    "image": "pliers01.avif",
                },
                {
                    "id": 22,
                    "name": "Long Nose Pliers",
                    "description": "Precision long nose pliers for tight spaces.",
                    "price": "14.24",
                    "category_id": 7,
                    "brand_id": 2,
                    "image": "pliers03.avif",
                },
            ],
            total=2,
            per_page=9,
            current_page=1,
            total_pages=1,
        ),
    }
)

ORDERS = freeze(
    {
        "new_order_data": {
            **_SHIPPING,
            "items": [{"product_id": 1, "quantity": 2, "price": "29.99"}],
        },
        "new_order_response": _order(1001, 1, "2023-05-16T15:30:45.000Z"),
        "order_detail": {
            **_order(1001, 1, "2023-05-16T15:30:45.000Z"),
            "items": [
                {
                    "id": 2001,
                    "order_id": 1001,
                    "product_id": 1,
                    "quantity": 2,
                    "price": "29.99",
                    "product": _HAMMER,
                }
            ],
        },
        "order_status": {
            "id": 1,
            "name": "Pending",
            "description": "Order has been placed but not yet processed",
        },
        "orders_list": _page(
            [
                _order(1001, 1, "2023-05-16T15:30:45.000Z"),
                _order(
                    1002,
                    2,
                    "2023-05-15T10:22:30.000Z",
                    shipping_address="456 Other Street",
                    shipping_city="Other City",
                    shipping_state="OS",
                    shipping_zip="67890",
                    payment_type="paypal",
                ),
            ],
            total=12,
            per_page=5,
            current_page=1,
            total_pages=3,
        ),
        "orders_second_page": _page(
            [
                _order(
                    1003,
                    3,
                    "2023-05-14T08:15:10.000Z",
                    shipping_address="789 New Street",
                    shipping_city="New City",
                    shipping_state="NS",
                    shipping_zip="11223",
                ),
                _order(
                    1004,
                    4,
                    "2023-05-13T14:40:22.000Z",
                    shipping_address="321 First Avenue",
                    shipping_city="First City",
                    shipping_state="FC",
                    shipping_zip="33445",
                ),
            ],
            total=12,
            per_page=5,
            current_page=2,
            total_pages=3,
        ),
    }
)
