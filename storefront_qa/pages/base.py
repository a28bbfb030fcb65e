"""Shared behaviour for storefront page objects."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from storefront_qa.config import SuiteSettings, get_settings
from storefront_qa.errors import ElementNotFoundError, ErrorContext
from storefront_qa.pages.locators import (
    LocatorChain,
    SoftFailureRecorder,
    resolve_all,
    resolve_first_match,
)

logger = logging.getLogger(__name__)


class BasePage:
    """Base page object.

    Every interaction goes through a :class:`LocatorChain`. If no candidate
    matches, the interaction is recorded on ``recorder`` and skipped, or
    raises :class:`ElementNotFoundError` when ``strict`` is set.

    Args:
        page: Playwright page.
        settings: Suite settings; defaults to the process settings.
        recorder: Where soft failures are collected.
        strict: Overrides ``settings.strict_locators``.
    """

    path: str = "/"

    def __init__(
        self,
        page: Page,
        settings: SuiteSettings | None = None,
        recorder: SoftFailureRecorder | None = None,
        strict: bool | None = None,
    ) -> None:
        self.page = page
        self.settings = settings or get_settings()
        self.recorder = recorder if recorder is not None else SoftFailureRecorder()
        self.strict = self.settings.strict_locators if strict is None else strict
        self.timeout_ms = self.settings.ui_timeout_ms
        self.page.set_default_timeout(self.timeout_ms)

    def goto(self, path: str | None = None) -> None:
        url = self.settings.site_path(self.path if path is None else path)
        logger.info(f"Navigating to {url}")
        self.page.goto(url)

    def settle(self, timeout_ms: int | None = None) -> None:
        """Wait for network idle; a page that keeps polling is left as is."""
        try:
            self.page.wait_for_load_state("networkidle", timeout=timeout_ms or self.timeout_ms)
        except PlaywrightTimeoutError:
            logger.debug(f"Network did not go idle on {self.page.url}")

    def find(self, chain: LocatorChain) -> Locator | None:
        return resolve_first_match(self.page, chain)

    def find_all(self, chain: LocatorChain) -> Locator | None:
        return resolve_all(self.page, chain)

    def require(self, chain: LocatorChain, action: str) -> Locator | None:
        """Like :meth:`find`, but a miss is a soft failure."""
        locator = self.find(chain)
        if locator is None:
            self.soft_fail(action, chain)
        return locator

    def soft_fail(self, action: str, chain: LocatorChain) -> None:
        if self.strict:
            raise ElementNotFoundError(
                f"{action}: no element matched {chain.name}",
                selectors=chain.selectors,
                context=ErrorContext(page_url=self.page.url),
            )
        self.recorder.record(action, chain, self.page.url)

    def click_first(self, chain: LocatorChain, action: str | None = None) -> bool:
        locator = self.require(chain, action or f"click {chain.name}")
        if locator is None:
            return False
        locator.click()
        return True

    def fill_first(self, chain: LocatorChain, value: str, action: str | None = None) -> bool:
        locator = self.require(chain, action or f"fill {chain.name}")
        if locator is None:
            return False
        locator.fill(value)
        return True

    def select_first(self, chain: LocatorChain, value: str, action: str | None = None) -> bool:
        locator = self.require(chain, action or f"select {chain.name}")
        if locator is None:
            return False
        locator.select_option(value)
        return True

    def wait_for_any(self, chain: LocatorChain, timeout_ms: int | None = None) -> bool:
        """Wait until any candidate in ``chain`` is visible."""
        combined: Locator | None = None
        for strategy in chain:
            locator = strategy.locate(self.page)
            combined = locator if combined is None else combined.or_(locator)
        if combined is None:
            return False
        try:
            combined.first.wait_for(state="visible", timeout=timeout_ms or self.timeout_ms)
        except PlaywrightTimeoutError:
            logger.debug(f"Timed out waiting for {chain.name}")
            return False
        return True

    def expect_visible(self, chain: LocatorChain, action: str, timeout_ms: int | None = None) -> bool:
        if self.wait_for_any(chain, timeout_ms):
            return True
        self.soft_fail(action, chain)
        return False

    def text_of(self, chain: LocatorChain) -> str | None:
        locator = self.find(chain)
        if locator is None:
            return None
        text = locator.text_content()
        return text.strip() if text else text

    def texts_of(self, chain: LocatorChain) -> list[str]:
        locator = self.find_all(chain)
        if locator is None:
            return []
        return [text.strip() for text in locator.all_text_contents()]

    def screenshot(self, name: str) -> Path | None:
        """Save a screenshot under the artifacts directory.

        A failed screenshot is logged and does not fail the test.
        """
        path = Path(self.settings.artifacts_dir) / f"{name}.png"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.page.screenshot(path=str(path))
        except (PlaywrightError, OSError) as e:
            logger.warning(f"Screenshot {name} failed: {e}")
            return None
        return path
