"""Billing details, payment methods and checkout timing budgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class BillingInfo:
    first_name: str
    last_name: str
    address: str
    city: str
    state: str
    postcode: str
    country: str
    bank_name: str = ""
    account_name: str = ""
    account_number: str = ""


@dataclass(frozen=True)
class CreditCardPayment:
    card_number: str
    expiration_date: str
    cvv: str
    card_holder_name: str
    method: str = "credit-card"


@dataclass(frozen=True)
class GiftCardPayment:
    gift_card_number: str
    validation_code: str
    method: str = "gift-card"


@dataclass(frozen=True)
class BuyNowPayLaterPayment:
    installments: int
    method: str = "buy-now-pay-later"


@dataclass(frozen=True)
class BankTransferPayment:
    bank_name: str
    account_name: str
    account_number: str
    method: str = "bank-transfer"


PaymentMethod = Union[CreditCardPayment, GiftCardPayment, BuyNowPayLaterPayment, BankTransferPayment]


@dataclass(frozen=True)
class PerformanceThresholds:
    """Upper bounds in milliseconds for each checkout step."""

    cart_load: int = 5000
    checkout_load: int = 10000
    billing_form: int = 10000
    payment_form: int = 10000
    order_completion: int = 15000


VALID_CHECKOUT = BillingInfo(
    first_name="Test",
    last_name="User",
    address="123 Test St",
    city="Test City",
    state="Test State",
    postcode="12345",
    country="US",
    bank_name="Test Bank",
    account_name="Test User",
    account_number="1234567890",
)

INVALID_CHECKOUT = BillingInfo(
    first_name="Test",
    last_name="User",
    address="123 Test St",
    city="Test City",
    state="Test State",
    postcode="12345",
    country="US",
    bank_name="Invalid Bank",
    account_name="Invalid",
    account_number="000000",
)

CREDIT_CARD = CreditCardPayment(
    card_number="4111111111111111",
    expiration_date="12/25",
    cvv="123",
    card_holder_name="Test User",
)
GIFT_CARD = GiftCardPayment(gift_card_number="GC12345678", validation_code="123456")
BUY_NOW_PAY_LATER = BuyNowPayLaterPayment(installments=3)
BANK_TRANSFER = BankTransferPayment(
    bank_name="Test Bank",
    account_name="Test User",
    account_number="1234567890",
)

# Rejected by the payment form's client-side validation.
INVALID_CREDIT_CARD = CreditCardPayment(
    card_number="1123131",
    expiration_date="1215",
    cvv="12354",
    card_holder_name="n ame",
)
INVALID_GIFT_CARD = GiftCardPayment(gift_card_number="123", validation_code="ABC")
INVALID_BANK_TRANSFER = BankTransferPayment(bank_name="", account_name="", account_number="ABC123")

PAYMENT_METHODS: dict[str, PaymentMethod] = {
    "credit_card": CREDIT_CARD,
    "gift_card": GIFT_CARD,
    "buy_now_pay_later": BUY_NOW_PAY_LATER,
    "bank_transfer": BANK_TRANSFER,
}

INVALID_PAYMENT_METHODS: dict[str, PaymentMethod] = {
    "credit_card": INVALID_CREDIT_CARD,
    "gift_card": INVALID_GIFT_CARD,
    "bank_transfer": INVALID_BANK_TRANSFER,
}

PERFORMANCE_THRESHOLDS = PerformanceThresholds()
