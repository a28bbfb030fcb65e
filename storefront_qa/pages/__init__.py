"""Page objects for the storefront UI."""

from storefront_qa.pages.base import BasePage
from storefront_qa.pages.checkout import CheckoutPage
from storefront_qa.pages.locators import (
    ElementLocatorStrategy,
    LocatorChain,
    SoftFailure,
    SoftFailureRecorder,
    by_css,
    by_data_test,
    by_id,
    by_name,
    by_placeholder,
    by_text,
    resolve_all,
    resolve_first_match,
)
from storefront_qa.pages.login import LoginPage
from storefront_qa.pages.products import ProductBrowsingPage

__all__ = [
    "BasePage",
    "CheckoutPage",
    "ElementLocatorStrategy",
    "LocatorChain",
    "LoginPage",
    "ProductBrowsingPage",
    "SoftFailure",
    "SoftFailureRecorder",
    "by_css",
    "by_data_test",
    "by_id",
    "by_name",
    "by_placeholder",
    "by_text",
    "resolve_all",
    "resolve_first_match",
]
