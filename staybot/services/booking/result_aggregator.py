"""Collect listing summaries from every page of search results."""

import re
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional, Tuple
from urllib.parse import urljoin

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from staybot.constants import Results
from staybot.core.exceptions import (
    ConfigurationError,
    ElementNotFoundError,
    ExtractionError,
    StaleReferenceError,
    ValidationError,
    WaitTimeoutError,
)
from staybot.models import ListingSummary
from staybot.resilience.actions import ResilientActionExecutor, classify_driver_error
from staybot.resilience.conditions import CountAtLeast, CustomPredicate, ElementVisible, PageReady
from staybot.resilience.synchronization import SynchronizationEngine
from staybot.services.session import SessionContext
from staybot.utils.selectors import LocatorRegistry

_NON_NUMERIC = re.compile(r"[^\d.]")

# Faults that cost one card, never the whole aggregation
CARD_FAULTS = (
    ElementNotFoundError,
    ExtractionError,
    ValidationError,
    StaleReferenceError,
    WaitTimeoutError,
)


def parse_price(text: str, field_name: str) -> float:
    """
    "$1,234 total" -> 1234.0

    Raises:
        ExtractionError: If no number remains after stripping
    """
    digits = _NON_NUMERIC.sub("", text or "")
    try:
        return float(digits)
    except ValueError as e:
        raise ExtractionError(field_name, f"unparsable price {text!r}") from e


def parse_rating(text: str, field_name: str = "rating") -> float:
    """Leading number of "4.92 out of 5 average rating" or "4.92 (120)"."""
    tokens = (text or "").split()
    if not tokens:
        raise ExtractionError(field_name, "empty rating text")
    try:
        return float(tokens[0])
    except ValueError as e:
        raise ExtractionError(field_name, f"unparsable rating {text!r}") from e


@dataclass
class SkippedCard:
    """A card that could not be extracted."""

    page: int
    index: int
    reason: str


@dataclass
class AggregationResult:
    """Listings in encounter order, plus the cards that were skipped."""

    listings: List[ListingSummary] = field(default_factory=list)
    skipped: List[SkippedCard] = field(default_factory=list)
    pages_visited: int = 0


class ResultAggregator:
    """Walk result pages, extracting one ListingSummary per card."""

    def __init__(
        self,
        engine: SynchronizationEngine,
        executor: ResilientActionExecutor,
        registry: LocatorRegistry,
        min_cards: int = Results.MIN_CARDS,
    ):
        self.engine = engine
        self.executor = executor
        self.registry = registry
        self.min_cards = min_cards

    def _selector(self, key: str) -> str:
        selector = self.registry.get(f"results.{key}")
        if selector is None:
            raise ConfigurationError(f"Missing results locator: {key}")
        return selector

    async def _read(self, selector: str, coro):
        try:
            return await coro
        except PlaywrightError as e:
            classified = classify_driver_error(e, selector)
            if classified is e:
                raise
            raise classified from e

    async def _element(self, card: Locator, key: str, unique: bool = False) -> Locator:
        selector = self._selector(key)
        matches = card.locator(selector)
        count = await self._read(selector, matches.count())
        if count == 0:
            raise ElementNotFoundError(selector)
        if unique and count > 1:
            raise ElementNotFoundError(selector, f"ambiguous ({count} matches)")
        return matches.first

    async def _text(self, card: Locator, key: str, unique: bool = False) -> str:
        element = await self._element(card, key, unique)
        text = await self._read(self._selector(key), element.inner_text())
        return text.strip()

    async def _rating(self, card: Locator) -> float:
        try:
            text = await self._text(card, "card_rating", unique=True)
        except ElementNotFoundError as e:
            logger.warning(f"Primary rating locator failed ({e.reason}), using fallback")
            text = await self._text(card, "card_rating_fallback")
        return parse_rating(text)

    async def extract_card(self, card: Locator, base_url: str) -> ListingSummary:
        """
        Build a summary from one result card.

        Raises:
            ElementNotFoundError: If a required sub-element is missing
            ExtractionError: If a price or rating cannot be parsed
            ValidationError: If extracted values are out of range
        """
        link = await self._element(card, "card_link")
        href = await self._read(self._selector("card_link"), link.get_attribute("href"))
        if not href:
            raise ExtractionError("url", "card link has no href")

        name = await self._text(card, "card_name")
        price_per_night = parse_price(
            await self._text(card, "card_price_per_night"), "price_per_night"
        )
        total_price = parse_price(await self._text(card, "card_total_price"), "total_price")
        rating = await self._rating(card)

        return ListingSummary(
            url=urljoin(base_url, href),
            name=name,
            rating=rating,
            price_per_night=price_per_night,
            total_price=total_price,
        )

    async def _cards_snapshot(self, page: Page) -> Tuple[Optional[str], Tuple[str, ...]]:
        """First card link on the page (None without one) and the cards' text."""
        cards = page.locator(self._selector("card"))
        links = cards.locator(self._selector("card_link"))
        href = None
        if await links.count() > 0:
            href = await links.first.get_attribute("href")
        return href, tuple(await cards.all_text_contents())

    async def _go_to_next_page(self, session: SessionContext) -> bool:
        next_link = await self.engine.check(session, ElementVisible(self._selector("next_page")))
        if next_link.is_failure():
            logger.info("No next page link, ending pagination")
            return False

        before = await self._cards_snapshot(session.page)
        await self.executor.click(session, self._selector("next_page"))
        await self.engine.wait(session, PageReady())

        async def cards_changed(page: Page) -> bool:
            return await self._cards_snapshot(page) != before

        await self.engine.wait(session, CustomPredicate(cards_changed, "result cards to change"))
        return True

    async def iter_listings(
        self, session: SessionContext, result: Optional[AggregationResult] = None
    ) -> AsyncIterator[ListingSummary]:
        """
        Yield summaries in page order, then card order.

        Single pass over the live session; pass ``result`` to receive skipped
        cards and the page count.

        Raises:
            WaitTimeoutError: If a page never shows ``min_cards`` cards
        """
        result = result if result is not None else AggregationResult()
        page_number = 0
        while True:
            page_number += 1
            result.pages_visited = page_number

            cards_locator: Locator = await self.engine.wait(
                session, CountAtLeast(self._selector("card"), self.min_cards)
            )
            cards = await cards_locator.all()
            logger.debug(f"Found {len(cards)} listing cards on page {page_number}")

            base_url = session.current_url
            for index, card in enumerate(cards):
                try:
                    listing = await self.extract_card(card, base_url)
                except CARD_FAULTS as e:
                    logger.warning(f"Skipping card {index} on page {page_number}: {e.message}")
                    result.skipped.append(SkippedCard(page_number, index, e.message))
                    continue
                result.listings.append(listing)
                yield listing

            if not await self._go_to_next_page(session):
                break

    async def collect(self, session: SessionContext) -> AggregationResult:
        """Aggregate every page into one result."""
        result = AggregationResult()
        async for _ in self.iter_listings(session, result):
            pass
        logger.info(
            f"Collected {len(result.listings)} listings from {result.pages_visited} pages "
            f"({len(result.skipped)} skipped)"
        )
        return result
