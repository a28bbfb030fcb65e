"""Ranked locator strategies and soft-failure recording.

Markup on the storefront drifts between releases, so page objects address
an element through a :class:`LocatorChain`: an ordered list of candidate
strategies (``data-test`` attribute, id, CSS class, visible text, ...).
:func:`resolve_first_match` tries each candidate in order and returns the
first one that exists and is visible.

When nothing matches, the interaction is recorded as a :class:`SoftFailure`
instead of being silently skipped. The pytest plugin prints these at the
end of the run so a degraded scenario never looks like a clean pass.

Example:
    >>> chain = LocatorChain.of(
    ...     "first name",
    ...     by_id("first-name"),
    ...     by_data_test("first-name"),
    ...     by_name("firstName"),
    ... )
    >>> locator = resolve_first_match(page, chain)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page

logger = logging.getLogger(__name__)

LocatorKind = Literal["css", "text"]


@dataclass(frozen=True)
class ElementLocatorStrategy:
    """One candidate way of finding an element.

    Attributes:
        selector: CSS selector, or the visible text for ``kind="text"``.
        kind: ``css`` uses ``page.locator``; ``text`` uses ``page.get_by_text``.
        description: Short label used in logs and soft-failure reports.
    """

    selector: str
    kind: LocatorKind = "css"
    description: str = ""

    def locate(self, page: Page) -> Locator:
        if self.kind == "text":
            return page.get_by_text(self.selector, exact=False)
        return page.locator(self.selector)

    def __str__(self) -> str:
        if self.kind == "text":
            return f"text={self.selector!r}"
        return self.selector


def by_data_test(value: str) -> ElementLocatorStrategy:
    return ElementLocatorStrategy(f'[data-test="{value}"]', description=f"data-test {value}")


def by_id(value: str) -> ElementLocatorStrategy:
    return ElementLocatorStrategy(f"#{value}", description=f"id {value}")


def by_css(selector: str) -> ElementLocatorStrategy:
    return ElementLocatorStrategy(selector, description=selector)


def by_text(text: str) -> ElementLocatorStrategy:
    return ElementLocatorStrategy(text, kind="text", description=f"text {text}")


def by_name(value: str, tag: str = "input") -> ElementLocatorStrategy:
    return ElementLocatorStrategy(f'{tag}[name="{value}"]', description=f"name {value}")


def by_placeholder(fragment: str) -> ElementLocatorStrategy:
    """Inputs whose placeholder contains ``fragment``, case-insensitively."""
    return ElementLocatorStrategy(
        f'input[placeholder*="{fragment}" i]', description=f"placeholder ~{fragment}"
    )


@dataclass(frozen=True)
class LocatorChain:
    """Ordered candidates for one logical element, highest priority first."""

    name: str
    candidates: tuple[ElementLocatorStrategy, ...]

    @classmethod
    def of(cls, name: str, *candidates: ElementLocatorStrategy | str) -> LocatorChain:
        """Build a chain; bare strings are treated as CSS selectors."""
        return cls(
            name,
            tuple(c if isinstance(c, ElementLocatorStrategy) else by_css(c) for c in candidates),
        )

    def __iter__(self) -> Iterator[ElementLocatorStrategy]:
        return iter(self.candidates)

    @property
    def selectors(self) -> list[str]:
        return [str(c) for c in self.candidates]


def resolve_first_match(page: Page, chain: LocatorChain) -> Locator | None:
    """Return the first visible match in ``chain``, or ``None``.

    Each candidate is checked for existence and then visibility. A
    Playwright error on one candidate (detached frame, bad selector for this
    engine) moves on to the next candidate.
    """
    for strategy in chain:
        try:
            locator = strategy.locate(page)
            if locator.count() == 0:
                logger.debug(f"{chain.name}: no element for {strategy}")
                continue
            first = locator.first
            if not first.is_visible():
                logger.debug(f"{chain.name}: {strategy} present but hidden")
                continue
        except PlaywrightError as e:
            logger.debug(f"{chain.name}: {strategy} failed: {str(e)[:100]}")
            continue
        logger.debug(f"{chain.name}: matched {strategy}")
        return first
    return None


def resolve_all(page: Page, chain: LocatorChain) -> Locator | None:
    """Return every element of the first candidate that matches anything.

    Used for lists (product cards, cart rows) where visibility of the first
    element is not the right test.
    """
    for strategy in chain:
        try:
            locator = strategy.locate(page)
            if locator.count() > 0:
                logger.debug(f"{chain.name}: matched {strategy}")
                return locator
        except PlaywrightError as e:
            logger.debug(f"{chain.name}: {strategy} failed: {str(e)[:100]}")
    return None


@dataclass
class SoftFailure:
    """An interaction skipped because no candidate selector matched."""

    action: str
    element: str
    selectors: list[str]
    page_url: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        where = f" on {self.page_url}" if self.page_url else ""
        return f"{self.action}: no match for {self.element}{where} (tried {', '.join(self.selectors)})"


class SoftFailureRecorder:
    """Collects soft failures for one test."""

    def __init__(self) -> None:
        self.failures: list[SoftFailure] = []

    def record(self, action: str, chain: LocatorChain, page_url: str | None = None) -> SoftFailure:
        failure = SoftFailure(action, chain.name, chain.selectors, page_url)
        self.failures.append(failure)
        logger.warning(f"Soft failure: {failure}")
        return failure

    @property
    def count(self) -> int:
        return len(self.failures)

    def report(self) -> str:
        return "\n".join(f"- {failure}" for failure in self.failures)

    def clear(self) -> None:
        self.failures.clear()
