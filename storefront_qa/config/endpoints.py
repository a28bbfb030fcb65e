"""Endpoint paths for the storefront API and site pages."""

from __future__ import annotations


class Endpoints:
    """API paths, relative to an environment profile's ``base_url``."""

    USERS = "/users"
    LOGIN = "/login"
    PRODUCTS = "/products"
    PRODUCT_SEARCH = "/products/search"
    ORDERS = "/orders"

    @staticmethod
    def user(user_id: int | str) -> str:
        return f"{Endpoints.USERS}/{user_id}"

    @staticmethod
    def product(product_id: int | str) -> str:
        return f"{Endpoints.PRODUCTS}/{product_id}"

    @staticmethod
    def order(order_id: int | str) -> str:
        return f"{Endpoints.ORDERS}/{order_id}"


class SitePaths:
    """Browser paths, relative to the storefront site URL."""

    HOME = "/"
    LOGIN = "/auth/login"
    REGISTER = "/register"
    CART = "/checkout"
    LEGACY_CART = "/cart"

    @staticmethod
    def product(product_id: str) -> str:
        return f"/product/{product_id}"
