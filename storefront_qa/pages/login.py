"""Login page."""

from __future__ import annotations

import logging
import re

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from storefront_qa.config import SitePaths
from storefront_qa.pages.base import BasePage
from storefront_qa.pages.locators import LocatorChain, by_data_test, by_id

logger = logging.getLogger(__name__)


class LoginPage(BasePage):
    path = SitePaths.LOGIN

    EMAIL = LocatorChain.of("email field", by_id("email"), by_data_test("email"), 'input[type="email"]')
    PASSWORD = LocatorChain.of(
        "password field", by_id("password"), by_data_test("password"), 'input[type="password"]'
    )
    SUBMIT = LocatorChain.of(
        "login button", by_data_test("login-submit"), 'button[type="submit"]', 'input[type="submit"]'
    )
    ERROR = LocatorChain.of("login error", ".alert-danger", by_data_test("login-error"), '[role="alert"]')

    def login(self, username: str, password: str) -> None:
        self.expect_visible(self.EMAIL, "wait for login form")
        self.fill_first(self.EMAIL, username, "enter email")
        self.fill_first(self.PASSWORD, password, "enter password")
        self.click_first(self.SUBMIT, "submit login")

    def error_message(self, timeout_ms: int = 5000) -> str | None:
        """Text of the login error alert, or ``None`` if none appears."""
        if not self.wait_for_any(self.ERROR, timeout_ms):
            return None
        return self.text_of(self.ERROR)

    def verify_redirect(self, pattern: str, timeout_ms: int | None = None) -> bool:
        """True once the page URL matches the ``pattern`` regex."""
        try:
            self.page.wait_for_url(re.compile(pattern), timeout=timeout_ms or self.timeout_ms)
        except PlaywrightTimeoutError:
            logger.info(f"Expected URL matching {pattern!r}, still on {self.page.url}")
            return False
        return True
