"""Search menu shown at the top of the site's primary pages."""

from typing import Optional

from loguru import logger

from staybot.core.exceptions import UnsupportedOperationError
from staybot.models import BookingParameters, GuestType
from staybot.pages.binding import bind_page
from staybot.pages.results_page import SearchResultsPage
from staybot.services.service_context import InteractionContext
from staybot.services.session import PageHandle, SessionContext


class SearchPanel:
    """Location, dates and guests for a new search.

    Implements Searchable, DateAdjustable and GuestAdjustable (increase only).
    """

    PAGE = "search"

    def __init__(self, session: SessionContext, context: InteractionContext, handle: PageHandle):
        self.session = session
        self.context = context
        self.handle = handle
        self._guests_open = False

    @classmethod
    async def open(
        cls, session: SessionContext, context: InteractionContext, url: Optional[str] = None
    ) -> "SearchPanel":
        """Load ``url`` (when given) and bind the search panel."""
        if url:
            await session.navigate(url)
        handle = await bind_page(session, context, cls.PAGE)
        return cls(session, context, handle)

    async def set_location(self, location: str) -> None:
        self.handle.ensure_live()
        logger.debug(f"Setting location to {location}")
        await self.context.executor.set_text_with_retry(
            self.session, self.handle.selector("location_input"), location
        )

    async def set_dates(self, checkin_us: str, checkout_us: str) -> None:
        logger.debug(f"Setting dates: checkin={checkin_us}, checkout={checkout_us}")
        await self.context.calendar.select_range(
            self.session, checkin_us, checkout_us, self.handle
        )

    async def _open_guests(self) -> None:
        if not self._guests_open:
            await self.context.executor.click(self.session, self.handle.selector("guests_toggle"))
            self._guests_open = True

    async def increase_guest(self, guest_type: GuestType, count: int) -> None:
        self.handle.ensure_live()
        if not self.handle.supports("guest_increase"):
            raise UnsupportedOperationError("increase_guest", guest_type.slug, self.PAGE)
        if count <= 0:
            return
        await self._open_guests()
        await self.context.executor.repeat_click(
            self.session, self.handle.selector("guest_increase", guest=guest_type.slug), count
        )

    async def decrease_guest(self, guest_type: GuestType, count: int) -> None:
        self.handle.ensure_live()
        if not self.handle.supports("guest_decrease"):
            raise UnsupportedOperationError("decrease_guest", guest_type.slug, self.PAGE)
        await self._open_guests()
        await self.context.executor.repeat_click(
            self.session, self.handle.selector("guest_decrease", guest=guest_type.slug), count
        )

    async def set_guests(self, params: BookingParameters) -> None:
        """Increase every guest category from zero to the requested count."""
        logger.debug(
            f"Setting guests: adults={params.adults}, children={params.children}, "
            f"infants={params.infants}, pets={params.pets}"
        )
        for guest_type in GuestType:
            await self.increase_guest(guest_type, params.guest_count(guest_type))

    async def fill(self, params: BookingParameters) -> None:
        """Location, dates and guests in one call."""
        if params.location:
            await self.set_location(params.location)
        if params.checkin_us and params.checkout_us:
            await self.set_dates(params.checkin_us, params.checkout_us)
        await self.set_guests(params)

    async def search(self) -> SearchResultsPage:
        self.handle.ensure_live()
        logger.info("Executing search with current parameters")
        await self.context.executor.click(self.session, self.handle.selector("search_button"))
        return await SearchResultsPage.open(self.session, self.context)
