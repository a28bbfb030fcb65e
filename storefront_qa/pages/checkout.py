"""Cart and multi-step checkout.

The checkout is a wizard: cart, sign-in or guest, billing address, payment.
Each step has drifted between storefront releases, so most controls are
addressed through long fallback chains.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from playwright.sync_api import Locator

from storefront_qa.assertions.timing import measure_duration
from storefront_qa.config import SitePaths
from storefront_qa.fixtures.checkout import (
    CREDIT_CARD,
    GIFT_CARD,
    BankTransferPayment,
    BillingInfo,
    BuyNowPayLaterPayment,
    CreditCardPayment,
    GiftCardPayment,
    PaymentMethod,
)
from storefront_qa.pages.base import BasePage
from storefront_qa.pages.locators import (
    LocatorChain,
    by_data_test,
    by_id,
    by_name,
    by_placeholder,
    by_text,
)

logger = logging.getLogger(__name__)

CART_ITEM_SELECTORS = (
    "table tbody tr:not(.empty-row)",
    '[data-test="product-quantity"]',
    '[data-test="product-title"]',
    ".cart-item",
    ".cart-product-image",
)

PAYMENT_LABELS = {
    "credit-card": "Credit Card",
    "bank-transfer": "Bank Transfer",
    "gift-card": "Gift Card",
    "buy-now-pay-later": "Buy Now Pay Later",
    "cash-on-delivery": "Cash on Delivery",
}

_REMOVE_TEXT = re.compile(r"remove|delete|^\s*[×x]\s*$", re.IGNORECASE)
_ORDER_NUMBER = re.compile(r"Order #(\d+)|(INV-\d+)")


class CheckoutPage(BasePage):
    path = SitePaths.CART

    NAV_CART = LocatorChain.of("cart link", by_data_test("nav-cart"), 'a[href*="/checkout"]')
    CART_CONTENT = LocatorChain.of("cart contents", "table", ".cart-items", by_text("The cart is empty"))
    CART_ROWS = LocatorChain.of("cart rows", "table tbody tr:not(.empty-row)", ".cart-item")
    CART_ITEM_NAMES = LocatorChain.of(
        "cart item names",
        by_data_test("product-title"),
        "table tbody tr td:first-child",
        ".cart-item-name",
        ".cart-item :is(h5, h4, h3, strong, .name, [class*=name], [class*=title])",
    )
    QUANTITY_INPUT = '[data-test="product-quantity"], input[type="number"], input.quantity'
    PROCEED_TO_CHECKOUT = LocatorChain.of(
        "proceed to checkout",
        by_data_test("proceed-1"),
        'button:has-text("Proceed to Checkout")',
        'button:has-text("Checkout")',
        'a:has-text("Proceed to Checkout")',
        'a:has-text("Checkout")',
        ".checkout-button",
        ".btn-success",
        "button.btn-primary",
    )
    AFTER_PROCEED = LocatorChain.of(
        "sign-in step",
        by_text("Continue as Guest"),
        by_data_test("login-submit"),
        by_id("first-name"),
    )
    CONTINUE_SHOPPING = LocatorChain.of(
        "continue shopping", 'a:has-text("Continue shopping")', by_text("Continue shopping")
    )
    GUEST = LocatorChain.of(
        "guest checkout",
        'a:has-text("Continue as Guest")',
        'button:has-text("Continue as Guest")',
        'button:has-text("Continue as guest")',
        by_data_test("guest-checkout"),
        'a:has-text("Checkout as Guest")',
        'button:has-text("Checkout as Guest")',
        by_data_test("proceed-2-guest"),
        'button:has-text("Skip")',
        'button:has-text("Continue")',
        ".btn-secondary",
        ".btn-outline-primary",
    )

    FIRST_NAME = LocatorChain.of(
        "first name", by_id("first-name"), by_data_test("first-name"), by_name("firstName"), by_placeholder("first")
    )
    LAST_NAME = LocatorChain.of(
        "last name", by_id("last-name"), by_data_test("last-name"), by_name("lastName"), by_placeholder("last")
    )
    ADDRESS = LocatorChain.of(
        "address", by_data_test("street"), by_id("address"), by_name("address"), by_placeholder("address")
    )
    CITY = LocatorChain.of("city", by_data_test("city"), by_id("city"), by_name("city"), by_placeholder("city"))
    STATE = LocatorChain.of("state", by_data_test("state"), by_id("state"), by_name("state"), by_placeholder("state"))
    POSTCODE = LocatorChain.of(
        "postcode",
        by_data_test("postal_code"),
        by_id("postal-code"),
        by_id("postcode"),
        by_name("postalCode"),
        by_placeholder("postal"),
        by_placeholder("zip"),
    )
    COUNTRY = LocatorChain.of(
        "country", by_data_test("country"), by_id("country"), by_name("country", tag="select"), by_name("country")
    )
    CONTINUE_TO_PAYMENT = LocatorChain.of(
        "continue to payment",
        by_data_test("proceed-3"),
        'button:has-text("Continue to Payment")',
        'button:has-text("Continue")',
        '[type="submit"]',
        ".btn-primary",
        'button:has-text("Payment")',
        'button:has-text("Next")',
    )

    PAYMENT_SELECT = LocatorChain.of("payment method dropdown", by_data_test("payment-method"), by_id("payment-method"))
    ANY_SELECT = LocatorChain.of("any dropdown", "select")
    BANK_NAME = LocatorChain.of("bank name", by_data_test("bank_name"), by_id("bank-name"), by_name("bankName"))
    ACCOUNT_NAME = LocatorChain.of(
        "account name",
        by_data_test("account_name"),
        by_id("account-name"),
        by_name("accountName"),
        by_placeholder("account name"),
    )
    ACCOUNT_NUMBER = LocatorChain.of(
        "account number",
        by_data_test("account_number"),
        by_id("account-number"),
        by_name("accountNumber"),
        by_placeholder("account number"),
    )
    CARD_NUMBER = LocatorChain.of(
        "card number",
        by_data_test("credit_card_number"),
        by_id("card-number"),
        by_name("cardNumber"),
        by_placeholder("card number"),
    )
    EXPIRATION = LocatorChain.of(
        "expiration date",
        by_data_test("expiration_date"),
        by_id("expiration"),
        by_name("expirationDate"),
        by_placeholder("expiration"),
    )
    CVV = LocatorChain.of("cvv", by_data_test("cvv"), by_id("cvv"), by_name("cvv"), by_placeholder("cvv"))
    CARD_HOLDER = LocatorChain.of(
        "card holder name",
        by_data_test("card_holder_name"),
        by_id("card-holder"),
        by_name("cardHolderName"),
        by_placeholder("card holder"),
    )
    GIFT_CARD_NUMBER = LocatorChain.of(
        "gift card number", by_data_test("gift_card_number"), by_id("gift-card-number"), by_name("giftCardNumber")
    )
    VALIDATION_CODE = LocatorChain.of(
        "validation code", by_data_test("validation_code"), by_id("validation-code"), by_name("validationCode")
    )
    INSTALLMENTS = LocatorChain.of(
        "monthly installments",
        by_data_test("monthly_installments"),
        by_id("monthly-installments"),
        by_name("monthlyInstallments", tag="select"),
    )
    VISIBLE_TEXT_INPUTS = LocatorChain.of(
        "visible text inputs",
        'input[type="text"]:visible',
        'input[type="number"]:visible',
        "input:not([type]):visible",
    )

    FINISH = LocatorChain.of(
        "complete order",
        by_data_test("finish"),
        'button:has-text("Complete Order")',
        'button:has-text("Place Order")',
        'button:has-text("Submit Order")',
        'button:has-text("Confirm")',
        'button:has-text("Pay Now")',
        'button[type="submit"]',
        "button.btn-primary",
        "button.btn-success",
        "button.btn-lg",
    )
    CONFIRMATION = LocatorChain.of(
        "order confirmation",
        by_data_test("confirmation-message"),
        "h1.confirmation-title",
        by_text("Thank you for your order"),
        by_text("Order confirmation"),
        by_text("Payment was successful"),
        by_text("Order #"),
    )
    ERROR = LocatorChain.of(
        "checkout error", ".alert-danger", by_data_test("payment-error"), '[role="alert"]:not(.alert-success)'
    )
    ORDER_NUMBER = LocatorChain.of("order number", by_data_test("order-number"), ".confirmation-order-number")
    TOTAL = LocatorChain.of("cart total", by_data_test("cart-total"), ".cart-total")

    # Cart

    def goto_cart(self) -> None:
        """Open the cart through the navbar, falling back to direct URLs."""
        nav = self.find(self.NAV_CART)
        if nav is not None:
            nav.click()
            self.settle()
        else:
            self.goto(SitePaths.CART)
        if self.wait_for_any(self.CART_CONTENT, timeout_ms=5000):
            return
        logger.info("Cart not rendered at the checkout path, trying the legacy cart")
        self.goto(SitePaths.LEGACY_CART)
        self.expect_visible(self.CART_CONTENT, "open cart")

    def get_cart_item_count(self) -> int:
        """Largest row count across the known cart markups."""
        return max(self.page.locator(selector).count() for selector in CART_ITEM_SELECTORS)

    def get_cart_item_names(self) -> list[str]:
        return [name for name in self.texts_of(self.CART_ITEM_NAMES) if name]

    def _cart_row(self, product_name: str) -> Locator | None:
        rows = self.find_all(self.CART_ROWS)
        if rows is None:
            return None
        row = rows.filter(has_text=product_name)
        return row.first if row.count() > 0 else None

    def update_quantity(self, product_name: str, quantity: int) -> bool:
        row = self._cart_row(product_name)
        quantity_input = row.locator(self.QUANTITY_INPUT) if row is not None else None
        if quantity_input is None or quantity_input.count() == 0:
            self.soft_fail(f"set {product_name} quantity to {quantity}", self.CART_ROWS)
            return False
        quantity_input.first.fill(str(quantity))
        quantity_input.first.blur()
        self.settle()
        return True

    def remove_item(self, product_name: str) -> bool:
        """Remove a cart row; uses the row's last button if none is labelled."""
        row = self._cart_row(product_name)
        if row is None:
            self.soft_fail(f"remove {product_name}", self.CART_ROWS)
            return False
        labelled = row.locator("button, a.btn").filter(has_text=_REMOVE_TEXT)
        if labelled.count() > 0:
            labelled.first.click()
        else:
            buttons = row.locator("button, a.btn")
            if buttons.count() == 0:
                self.soft_fail(f"remove {product_name}", self.CART_ROWS)
                return False
            buttons.last.click()
        self.settle()
        return True

    def proceed_to_checkout(self) -> None:
        if self.click_first(self.PROCEED_TO_CHECKOUT):
            self.settle()
            self.wait_for_any(self.AFTER_PROCEED)

    def continue_shopping(self) -> None:
        if self.click_first(self.CONTINUE_SHOPPING):
            self.settle()

    # Sign-in and billing

    def continue_as_guest(self) -> None:
        if self.find(self.FIRST_NAME) is not None:
            logger.debug("Billing form already shown, no guest step")
            return
        if self.click_first(self.GUEST, "continue as guest"):
            self.settle()
            self.wait_for_any(self.FIRST_NAME)

    def fill_billing_info(self, info: BillingInfo) -> None:
        self.fill_first(self.FIRST_NAME, info.first_name)
        self.fill_first(self.LAST_NAME, info.last_name)
        self.fill_first(self.ADDRESS, info.address)
        self.fill_first(self.CITY, info.city)
        self.fill_first(self.STATE, info.state)
        self.fill_first(self.POSTCODE, info.postcode)
        self._fill_or_select(self.COUNTRY, info.country)

    def _fill_or_select(self, chain: LocatorChain, value: str) -> None:
        locator = self.require(chain, f"set {chain.name}")
        if locator is None:
            return
        if locator.evaluate("el => el.tagName.toLowerCase()") == "select":
            locator.select_option(value)
        else:
            locator.fill(value)

    def continue_to_payment(self) -> None:
        if self.click_first(self.CONTINUE_TO_PAYMENT):
            self.settle()
            self.wait_for_any(self.PAYMENT_SELECT)
        self.screenshot("after-continue-to-payment")

    # Payment

    def select_payment_method(self, method: str) -> bool:
        """Choose a payment method such as ``bank-transfer`` or ``credit-card``.

        Tries the payment dropdown, then a radio button or label for the
        method, then any visible dropdown.
        """
        select = self.find(self.PAYMENT_SELECT)
        if select is not None:
            select.scroll_into_view_if_needed()
            select.select_option(method)
            return True

        option = LocatorChain.of(
            f"{method} option",
            f'input[type="radio"][value="{method}"]',
            f'[data-value="{method}"]',
            by_text(PAYMENT_LABELS.get(method, method)),
        )
        chosen = self.find(option)
        if chosen is not None:
            chosen.click()
            return True

        return self.select_first(self.ANY_SELECT, method, f"select payment method {method}")

    def fill_bank_transfer_info(self, payment: BankTransferPayment) -> None:
        self.fill_first(self.BANK_NAME, payment.bank_name)
        self.fill_first(self.ACCOUNT_NAME, payment.account_name)
        self.fill_first(self.ACCOUNT_NUMBER, payment.account_number)

    def fill_credit_card_info(self, payment: CreditCardPayment) -> None:
        self.wait_for_any(self.CARD_NUMBER, timeout_ms=5000)
        self.fill_first(self.CARD_NUMBER, payment.card_number)
        self.fill_first(self.EXPIRATION, payment.expiration_date)
        self.fill_first(self.CVV, payment.cvv)
        self.fill_first(self.CARD_HOLDER, payment.card_holder_name)
        self.screenshot("credit-card-form-after-fill")

    def fill_gift_card_info(self, payment: GiftCardPayment) -> None:
        self.fill_first(self.GIFT_CARD_NUMBER, payment.gift_card_number)
        self.fill_first(self.VALIDATION_CODE, payment.validation_code)

    def configure_buy_now_pay_later(self, installments: int) -> None:
        self.select_first(self.INSTALLMENTS, str(installments))

    def pay_with(self, payment: PaymentMethod) -> None:
        """Select ``payment.method`` and fill its form."""
        self.select_payment_method(payment.method)
        if isinstance(payment, BankTransferPayment):
            self.fill_bank_transfer_info(payment)
        elif isinstance(payment, CreditCardPayment):
            self.fill_credit_card_info(payment)
        elif isinstance(payment, GiftCardPayment):
            self.fill_gift_card_info(payment)
        elif isinstance(payment, BuyNowPayLaterPayment):
            self.configure_buy_now_pay_later(payment.installments)

    def fill_payment_info(self, account_name: str, account_number: str) -> None:
        """Fill whichever payment form is showing.

        Bank transfer gets the account details; card and gift card forms get
        the stock test card with ``account_name`` as holder. With no known
        form, the first two visible text inputs are filled.
        """
        self.screenshot("payment-form")
        if self.find(self.ACCOUNT_NAME) is not None:
            self.fill_first(self.ACCOUNT_NAME, account_name)
            self.fill_first(self.ACCOUNT_NUMBER, account_number)
        elif self.find(self.CARD_NUMBER) is not None:
            self.fill_credit_card_info(
                CreditCardPayment(
                    card_number=CREDIT_CARD.card_number,
                    expiration_date=CREDIT_CARD.expiration_date,
                    cvv=CREDIT_CARD.cvv,
                    card_holder_name=account_name,
                )
            )
        elif self.find(self.GIFT_CARD_NUMBER) is not None:
            self.fill_gift_card_info(GIFT_CARD)
        else:
            inputs = self.find_all(self.VISIBLE_TEXT_INPUTS)
            if inputs is None:
                self.soft_fail("fill payment info", self.VISIBLE_TEXT_INPUTS)
                return
            inputs.nth(0).fill(account_name)
            if inputs.count() > 1:
                inputs.nth(1).fill(account_number)

    def complete_order(self) -> None:
        self.screenshot("before-complete-order")
        if self.click_first(self.FINISH):
            self.settle()
            self.wait_for_any(self.CONFIRMATION, timeout_ms=5000)
        self.screenshot("after-complete-order")

    # Outcome

    def get_error_message(self) -> str | None:
        return self.text_of(self.ERROR)

    def get_confirmation_message(self) -> str | None:
        return self.text_of(self.CONFIRMATION)

    def is_payment_successful(self) -> bool:
        if self.get_error_message():
            return False
        return self.get_confirmation_message() is not None

    def get_order_number(self) -> str | None:
        text = self.text_of(self.ORDER_NUMBER)
        if text:
            return text
        mention = self.page.get_by_text(_ORDER_NUMBER)
        if mention.count() == 0:
            return None
        match = _ORDER_NUMBER.search(mention.first.text_content() or "")
        if match is None:
            return None
        return match.group(1) or match.group(2)

    def get_total(self) -> str:
        return self.text_of(self.TOTAL) or ""

    def measure_performance(self, action: Callable[[], object]) -> float:
        """Milliseconds taken by one checkout step."""
        return measure_duration(action)
