"""Forward-only date picker navigation."""

from typing import List, Optional

from loguru import logger
from playwright.async_api import Page

from staybot.constants import Calendar
from staybot.core.exceptions import (
    ConfigurationError,
    NavigationExhaustedError,
    ValidationError,
)
from staybot.resilience.actions import ResilientActionExecutor
from staybot.resilience.conditions import CustomPredicate, ElementClickable
from staybot.resilience.synchronization import SynchronizationEngine
from staybot.services.session import PageHandle, SessionContext
from staybot.utils.dates import month_label, parse_us_date, us_to_iso
from staybot.utils.selectors import LocatorRegistry


class CalendarNavigator:
    """Bring a target month into view and click a day in it."""

    def __init__(
        self,
        engine: SynchronizationEngine,
        executor: ResilientActionExecutor,
        registry: LocatorRegistry,
        max_forward_pages: int = Calendar.MAX_FORWARD_PAGES,
    ):
        """
        Initialize calendar navigator.

        Args:
            engine: Synchronization engine
            executor: Action executor used for every click
            registry: Locator registry holding the ``calendar`` section
            max_forward_pages: Next-month clicks allowed per date search
        """
        if max_forward_pages < 1:
            raise ValueError("max_forward_pages must be >= 1")
        self.engine = engine
        self.executor = executor
        self.registry = registry
        self.max_forward_pages = max_forward_pages

    def _selector(self, key: str) -> str:
        selector = self.registry.get(f"calendar.{key}")
        if selector is None:
            raise ConfigurationError(f"Missing calendar locator: {key}")
        return selector

    async def _header_texts(self, page: Page) -> List[str]:
        return await page.locator(self._selector("month_headers")).all_text_contents()

    async def _month_shown(self, page: Page, label: str) -> bool:
        header = self._selector("month_header").format(label=label)
        return await page.locator(header).count() > 0

    async def open(self, session: SessionContext, handle: Optional[PageHandle] = None) -> None:
        """Open the date picker, clicking the toggle again if it did not expand."""
        if handle is not None:
            handle.ensure_live()
        toggle = self._selector("toggle")
        await self.executor.click(session, toggle)

        expanded = await self.engine.check(session, ElementClickable(self._selector("next_month")))
        if expanded.is_failure():
            logger.info("Date picker did not expand, clicking toggle again")
            await self.executor.click(session, toggle)

    async def select_date(
        self, session: SessionContext, us_date: str, handle: Optional[PageHandle] = None
    ) -> int:
        """
        Page forward until the month of ``us_date`` is shown, then click its day.

        Returns:
            Number of next-month clicks issued

        Raises:
            NavigationExhaustedError: If the month is not reached within
                ``max_forward_pages`` clicks
            ValidationError: If ``us_date`` is not a valid M/D/YYYY date
        """
        if handle is not None:
            handle.ensure_live()
        label = month_label(us_date)
        iso = us_to_iso(us_date)
        next_month = self._selector("next_month")

        clicks = 0
        while not await self._month_shown(session.page, label):
            if clicks >= self.max_forward_pages:
                raise NavigationExhaustedError(label, clicks)

            before = await self._header_texts(session.page)
            await self.executor.click(session, next_month)
            clicks += 1

            async def headers_changed(page: Page, before: List[str] = before) -> bool:
                return await self._header_texts(page) != before

            await self.engine.wait(
                session, CustomPredicate(headers_changed, "calendar month headers to change")
            )

        logger.debug(f"Month '{label}' shown after {clicks} forward clicks")
        await self.executor.click(session, self._selector("day_button").format(iso=iso))
        logger.info(f"Selected date {us_date}")
        return clicks

    async def select_range(
        self,
        session: SessionContext,
        checkin_us: str,
        checkout_us: str,
        handle: Optional[PageHandle] = None,
    ) -> int:
        """
        Open the picker and select check-in then check-out.

        The check-out search continues from the month the check-in left open.

        Returns:
            Total next-month clicks issued
        """
        if parse_us_date(checkout_us) <= parse_us_date(checkin_us):
            raise ValidationError(
                f"Check-out {checkout_us} must be after check-in {checkin_us}",
                "checkout",
                checkout_us,
            )
        await self.open(session, handle)
        clicks = await self.select_date(session, checkin_us, handle)
        clicks += await self.select_date(session, checkout_us, handle)
        return clicks
