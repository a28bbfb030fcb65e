"""Product listing: search, sort, filter and add to cart."""

from __future__ import annotations

import logging
import re

from storefront_qa.config import SitePaths
from storefront_qa.pages.base import BasePage
from storefront_qa.pages.locators import (
    LocatorChain,
    by_css,
    by_data_test,
    by_name,
    by_placeholder,
    by_text,
)

logger = logging.getLogger(__name__)


class ProductBrowsingPage(BasePage):
    path = SitePaths.HOME

    PRODUCT_GRID = LocatorChain.of("product grid", ".products", ".card.h-100")
    SEARCH_INPUT = LocatorChain.of(
        "search input", by_data_test("search-query"), by_name("query"), by_placeholder("search")
    )
    SEARCH_BUTTON = LocatorChain.of(
        "search button",
        by_data_test("search-submit"),
        'button.btn-primary:has-text("Search")',
        'form button[type="submit"]',
    )
    SORT = LocatorChain.of("sort dropdown", by_data_test("sort"), "select.form-select", by_name("sort", tag="select"))
    PRODUCT_CARDS = LocatorChain.of("product cards", ".card.h-100", 'a.card[data-test^="product-"]')
    PRODUCT_NAMES = LocatorChain.of("product names", by_data_test("product-name"), ".card-title")
    PRODUCT_PRICES = LocatorChain.of("product prices", by_data_test("product-price"), ".card-text.price")
    PRICE_SLIDERS = LocatorChain.of("price sliders", 'input[type="range"]', ".ngx-slider-pointer")
    ADD_TO_CART = LocatorChain.of("add to cart button", by_data_test("add-to-cart"), 'button:has-text("Add to cart")')
    CART_BADGE = LocatorChain.of("cart badge", by_data_test("cart-quantity"), ".badge.bg-dark")

    def goto(self, path: str | None = None) -> None:
        super().goto(path)
        self.expect_visible(self.PRODUCT_GRID, "load product grid")

    def search(self, keyword: str) -> None:
        self.fill_first(self.SEARCH_INPUT, keyword, f"search for {keyword}")
        self.click_first(self.SEARCH_BUTTON, "submit search")
        self.settle()

    def sort_by(self, option: str) -> None:
        """Sort the listing; ``option`` is a value from ``SORT_OPTIONS``."""
        self.select_first(self.SORT, option, f"sort by {option}")
        self.settle()

    def filter_by_category(self, category: str) -> None:
        chain = LocatorChain.of(
            f"{category} category filter",
            f'label:has-text("{category}") input[type="checkbox"]',
            by_css(f'label:has-text("{category}")'),
            by_text(category),
        )
        self.click_first(chain, f"filter by {category}")
        self.settle()

    def filter_by_price_range(self, min_price: int, max_price: int) -> None:
        sliders = self.find_all(self.PRICE_SLIDERS)
        if sliders is None:
            self.soft_fail(f"filter price {min_price}-{max_price}", self.PRICE_SLIDERS)
            return
        sliders.first.fill(str(min_price))
        sliders.last.fill(str(max_price))
        self.settle()

    def get_product_count(self) -> int:
        cards = self.find_all(self.PRODUCT_CARDS)
        return cards.count() if cards is not None else 0

    def get_product_names(self) -> list[str]:
        return self.texts_of(self.PRODUCT_NAMES)

    def get_product_prices(self) -> list[str]:
        return self.texts_of(self.PRODUCT_PRICES)

    def add_product_to_cart(self, product_name: str) -> bool:
        """Add a product by name.

        Uses the card's own button when the listing has one, otherwise opens
        the product and uses the detail page's button.
        """
        cards = self.find_all(self.PRODUCT_CARDS)
        card = cards.filter(has_text=product_name) if cards is not None else None
        if card is None or card.count() == 0:
            self.soft_fail(f"add {product_name} to cart", self.PRODUCT_CARDS)
            return False
        button = card.first.locator("button.btn-primary")
        if button.count() > 0:
            button.first.click()
        else:
            card.first.click()
            if not self.expect_visible(self.ADD_TO_CART, f"open {product_name}"):
                return False
            self.click_first(self.ADD_TO_CART, f"add {product_name} to cart")
        self.settle()
        logger.info(f"Added {product_name} to cart")
        return True

    def click_on_product(self, product_name: str) -> bool:
        titles = self.find_all(self.PRODUCT_NAMES)
        match = titles.filter(has_text=product_name) if titles is not None else None
        if match is None or match.count() == 0:
            self.soft_fail(f"open {product_name}", self.PRODUCT_NAMES)
            return False
        match.first.click()
        return True

    def get_cart_count(self) -> int:
        text = self.text_of(self.CART_BADGE)
        if not text:
            return 0
        digits = re.search(r"\d+", text)
        return int(digits.group()) if digits else 0
