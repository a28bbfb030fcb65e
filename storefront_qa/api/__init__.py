"""Resource objects and lenient helpers over the storefront API."""

from storefront_qa.api.helpers import StorefrontApiHelpers
from storefront_qa.api.resources import OrdersApi, ProductsApi, ResourceApi, UsersApi

__all__ = ["OrdersApi", "ProductsApi", "ResourceApi", "StorefrontApiHelpers", "UsersApi"]
