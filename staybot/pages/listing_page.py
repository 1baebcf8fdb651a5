"""Listing detail page: dates, guest picker and the reserve action."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from loguru import logger

from staybot.core.exceptions import UnsupportedOperationError, ValidationError
from staybot.models import BookingParameters, GuestType, ListingSummary
from staybot.pages.binding import bind_page
from staybot.pages.reservation_page import ReservationPage
from staybot.resilience.conditions import ElementClickable, ElementVisible
from staybot.services.booking.result_aggregator import parse_price, parse_rating
from staybot.services.service_context import InteractionContext
from staybot.services.session import PageHandle, SessionContext
from staybot.utils.dates import parse_us_date


def _same_date(displayed: str, expected_us: str) -> bool:
    # The page may or may not zero-pad month and day
    try:
        return parse_us_date(displayed) == parse_us_date(expected_us)
    except ValidationError:
        return displayed.strip() == expected_us.strip()


class ListingPage:
    """
    One listing's detail page.

    Implements GuestAdjustable for the decrease direction only; dates are
    changed by loading a URL rewritten with ``UrlStateCodec.replace_dates``.
    """

    PAGE = "listing"

    def __init__(self, session: SessionContext, context: InteractionContext, handle: PageHandle):
        self.session = session
        self.context = context
        self.handle = handle

    @classmethod
    async def open(
        cls, session: SessionContext, context: InteractionContext, url: Optional[str] = None
    ) -> "ListingPage":
        """Load ``url`` (when given), bind the page and dismiss the translation popup."""
        if url:
            await session.navigate(url)
        handle = await bind_page(session, context, cls.PAGE)
        page = cls(session, context, handle)
        await page.close_translation_popup()
        return page

    async def close_translation_popup(self) -> bool:
        popup = await self.context.engine.check(
            self.session, ElementClickable(self.handle.selector("translation_close"))
        )
        if popup.is_failure():
            logger.info("No translation pop-up appeared")
            return False
        await self.context.executor.click(self.session, self.handle.selector("translation_close"))
        logger.info("Closed translation pop-up")
        return True

    async def _read(self, key: str, **fmt: str) -> str:
        self.handle.ensure_live()
        return await self.context.executor.read_text(
            self.session, self.handle.selector(key, **fmt)
        )

    @asynccontextmanager
    async def _guest_picker(self) -> AsyncIterator[None]:
        picker = self.handle.selector("guest_picker")
        await self.context.executor.click(self.session, picker)
        try:
            yield
        finally:
            await self.context.executor.click(self.session, picker)

    async def _guest_value(self, guest_type: GuestType) -> int:
        text = await self._read("guest_value", guest=guest_type.slug)
        try:
            return int(text)
        except ValueError as e:
            raise ValidationError(
                f"Guest picker shows non-numeric {guest_type.slug} count: {text!r}",
                guest_type.slug,
                text,
            ) from e

    async def click_reserve(self) -> ReservationPage:
        """Click reserve (primary locator, then fallback) and bind the reservation page."""
        self.handle.ensure_live()
        logger.debug("Attempting to click Reserve button")
        await self.context.executor.click_with_fallback(
            self.session,
            self.handle.selector("reserve_button"),
            self.handle.fallback("reserve_button"),
        )
        return await ReservationPage.open(self.session, self.context)

    async def validate_dates(self, expected_checkin_us: str, expected_checkout_us: str) -> bool:
        checkin = await self._read("checkin_date")
        checkout = await self._read("checkout_date")
        result = _same_date(checkin, expected_checkin_us) and _same_date(
            checkout, expected_checkout_us
        )
        logger.debug(
            f"Date validation: shown={checkin}/{checkout}, "
            f"expected={expected_checkin_us}/{expected_checkout_us}, valid={result}"
        )
        return result

    async def validate_guests_count(self, params: BookingParameters) -> bool:
        """Every category shown in the guest picker matches ``params``."""
        async with self._guest_picker():
            shown = {guest_type: await self._guest_value(guest_type) for guest_type in GuestType}
        result = all(shown[g] == params.guest_count(g) for g in GuestType)
        logger.debug(f"Guest count validation result: {result}")
        return result

    async def validate_guest_count(self, guest_type: GuestType, expected_count: int) -> bool:
        async with self._guest_picker():
            shown = await self._guest_value(guest_type)
        result = shown == expected_count
        logger.debug(f"Guest count for {guest_type.slug}: shown={shown}, valid={result}")
        return result

    async def increase_guest(self, guest_type: GuestType, count: int) -> None:
        self.handle.ensure_live()
        if not self.handle.supports("guest_increase"):
            raise UnsupportedOperationError("increase_guest", guest_type.slug, self.PAGE)
        async with self._guest_picker():
            await self.context.executor.repeat_click(
                self.session, self.handle.selector("guest_increase", guest=guest_type.slug), count
            )

    async def decrease_guest(self, guest_type: GuestType, count: int) -> None:
        self.handle.ensure_live()
        if not self.handle.supports("guest_decrease"):
            raise UnsupportedOperationError("decrease_guest", guest_type.slug, self.PAGE)
        logger.debug(f"Decreasing {guest_type.slug} by {count}")
        async with self._guest_picker():
            await self.context.executor.repeat_click(
                self.session, self.handle.selector("guest_decrease", guest=guest_type.slug), count
            )

    async def check_if_url_dates_available(self) -> bool:
        """True unless the page shows its dates error within the probe budget."""
        self.handle.ensure_live()
        error = await self.context.engine.check(
            self.session, ElementVisible(self.handle.selector("dates_error"))
        )
        available = error.is_failure()
        logger.debug(f"Dates available: {available}")
        return available

    async def read_summary(self) -> ListingSummary:
        """
        Name, price and rating as shown on the page.

        Raises:
            ExtractionError: If price or rating text cannot be parsed
        """
        name = await self._read("name")
        price = parse_price(await self._read("price_per_night"), "price_per_night")
        rating = parse_rating(await self._read("rating"))
        return ListingSummary(
            url=self.session.current_url, name=name, rating=rating, price_per_night=price
        )
