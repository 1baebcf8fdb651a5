"""Wait conditions evaluated by the synchronization engine.

Each condition inspects the page without side effects and returns the
satisfied UI reference, or ``None`` when the condition does not hold yet.
"""

import inspect
from typing import Any, Awaitable, Callable, Optional, Union

from playwright.async_api import Locator, Page


class Condition:
    """Base class for wait conditions."""

    async def evaluate(self, page: Page) -> Optional[Any]:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


class ElementVisible(Condition):
    """First element matching ``selector`` is visible."""

    def __init__(self, selector: str):
        self.selector = selector

    async def evaluate(self, page: Page) -> Optional[Locator]:
        first = page.locator(self.selector).first
        if await first.is_visible():
            return first
        return None

    def describe(self) -> str:
        return f"visibility of '{self.selector}'"


class ElementClickable(Condition):
    """First element matching ``selector`` is visible and enabled."""

    def __init__(self, selector: str):
        self.selector = selector

    async def evaluate(self, page: Page) -> Optional[Locator]:
        first = page.locator(self.selector).first
        if await first.is_visible() and await first.is_enabled():
            return first
        return None

    def describe(self) -> str:
        return f"'{self.selector}' to be clickable"


class CountAtLeast(Condition):
    """At least ``n`` elements match ``selector``; yields the full locator."""

    def __init__(self, selector: str, n: int):
        if n < 1:
            raise ValueError("n must be >= 1")
        self.selector = selector
        self.n = n

    async def evaluate(self, page: Page) -> Optional[Locator]:
        locator = page.locator(self.selector)
        if await locator.count() >= self.n:
            return locator
        return None

    def describe(self) -> str:
        return f"at least {self.n} elements matching '{self.selector}'"


class PageReady(Condition):
    """Document has finished loading."""

    async def evaluate(self, page: Page) -> Optional[Page]:
        state = await page.evaluate("document.readyState")
        return page if state == "complete" else None

    def describe(self) -> str:
        return "document.readyState == 'complete'"


Predicate = Callable[[Page], Union[Any, Awaitable[Any]]]


class CustomPredicate(Condition):
    """
    Arbitrary predicate over the page.

    ``fn`` may be sync or async; a truthy return value satisfies the
    condition and is handed back to the caller.
    """

    def __init__(self, fn: Predicate, description: str):
        self.fn = fn
        self.description = description

    async def evaluate(self, page: Page) -> Optional[Any]:
        value = self.fn(page)
        if inspect.isawaitable(value):
            value = await value
        return value if value else None

    def describe(self) -> str:
        return self.description
