"""Search, edit and reserve workflow orchestration."""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, List, Optional, Tuple

from loguru import logger

from staybot.core.exceptions import WorkflowError
from staybot.models import BookingParameters, GuestType, ListingSummary
from staybot.pages import ListingPage, SearchPanel
from staybot.services.booking.ranking import rank
from staybot.services.service_context import InteractionContext
from staybot.services.session import SessionContext
from staybot.utils.dates import add_weeks


@dataclass
class WorkflowReport:
    """Outcome of one workflow run."""

    session_id: str
    initial_params: BookingParameters
    final_params: Optional[BookingParameters] = None
    listings_collected: int = 0
    cards_skipped: int = 0
    pages_visited: int = 0
    top_listing: Optional[ListingSummary] = None
    dates_shifted: bool = False
    reservation_url: Optional[str] = None
    completed_steps: List[str] = field(default_factory=list)
    captures: Dict[str, str] = field(default_factory=dict)


class SearchReserveWorkflow:
    """
    Drive one session from search to a validated reservation URL.

    Steps: search, select the top listing, confirm its details, remove the
    children, shift the dates one week through the URL, reserve. Each step
    fails with a typed error; a failed check raises WorkflowError.
    """

    def __init__(self, context: InteractionContext, date_shift_weeks: int = 1):
        self.context = context
        self.date_shift_weeks = date_shift_weeks

    @asynccontextmanager
    async def _step(
        self, session: SessionContext, report: WorkflowReport, name: str
    ) -> AsyncIterator[None]:
        with logger.contextualize(step=name):
            logger.info(f"Step '{name}' started")
            try:
                yield
            except Exception as e:
                logger.error(f"Step '{name}' failed: {type(e).__name__}: {e}")
                record = await self.context.error_capture.capture(
                    session.page,
                    e,
                    context={"step": name, "session_id": session.session_id},
                )
                screenshot = record.get("captures", {}).get("screenshot")
                if screenshot:
                    report.captures[name] = screenshot
                raise
            report.completed_steps.append(name)
            logger.info(f"Step '{name}' completed")

    async def run(
        self, session: SessionContext, params: BookingParameters, base_url: str
    ) -> WorkflowReport:
        """
        Run every step in order.

        Raises:
            WorkflowError: If a verification fails
            StayBotError: Typed failure from the step that broke
        """
        if not params.checkin_us or not params.checkout_us:
            raise WorkflowError("setup", "check-in and check-out dates are required")

        report = WorkflowReport(session_id=session.session_id, initial_params=params)
        ctx = self.context

        with session.log_scope():
            async with self._step(session, report, "search"):
                panel = await SearchPanel.open(session, ctx, base_url)
                await panel.fill(params)
                results = await panel.search()
                listings = await results.collect_all_listings()
                if results.last_result is not None:
                    report.cards_skipped = len(results.last_result.skipped)
                    report.pages_visited = results.last_result.pages_visited
                report.listings_collected = len(listings)
                if not listings:
                    raise WorkflowError("search", "search returned no extractable listings")

            async with self._step(session, report, "select_top_listing"):
                top = rank(listings)[0]
                logger.info(
                    f"Top listing: {top.name} (rating={top.rating}, "
                    f"price={top.price_per_night}) {top.url}"
                )

            async with self._step(session, report, "confirm_listing_details"):
                listing = await ListingPage.open(session, ctx, top.url)
                if not await listing.validate_dates(params.checkin_us, params.checkout_us):
                    raise WorkflowError("confirm_listing_details", "listing dates do not match")
                if not await listing.validate_guests_count(params):
                    raise WorkflowError(
                        "confirm_listing_details", "listing guest counts do not match"
                    )

            async with self._step(session, report, "adjust_guest_count"):
                if params.children:
                    await listing.decrease_guest(GuestType.CHILD, params.children)
                if not await listing.validate_guest_count(GuestType.CHILD, 0):
                    raise WorkflowError("adjust_guest_count", "child count did not reach 0")

            async with self._step(session, report, "change_booking_dates"):
                params, top = await self._shift_dates(session, params, top, report)

            async with self._step(session, report, "reserve_and_validate"):
                listing = await ListingPage.open(session, ctx, top.url)
                reservation = await listing.click_reserve()
                report.reservation_url = session.current_url
                if not reservation.is_reservation_url():
                    raise WorkflowError(
                        "reserve_and_validate",
                        f"not a reservation URL: {session.current_url}",
                    )
                if not reservation.validate_guest_count_in_url(GuestType.ADULT, params.adults):
                    raise WorkflowError(
                        "reserve_and_validate", "reservation URL has the wrong adult count"
                    )

        report.top_listing = top
        report.final_params = params
        logger.success(f"Workflow completed: {report.reservation_url}")
        return report

    async def _shift_dates(
        self,
        session: SessionContext,
        params: BookingParameters,
        top: ListingSummary,
        report: WorkflowReport,
    ) -> Tuple[BookingParameters, ListingSummary]:
        new_checkin = add_weeks(params.checkin_us, self.date_shift_weeks)
        new_checkout = add_weeks(params.checkout_us, self.date_shift_weeks)
        shifted = params.with_dates(new_checkin, new_checkout)
        new_url = self.context.codec.replace_dates(
            top.url, shifted.checkin_iso, shifted.checkout_iso
        )
        logger.debug(f"Navigating to listing with shifted dates: {new_url}")

        listing = await ListingPage.open(session, self.context, new_url)
        if not await listing.check_if_url_dates_available():
            logger.warning("New dates not available, keeping original dates")
            return params, top

        logger.info(f"New dates available: {new_checkin} - {new_checkout}")
        report.dates_shifted = True
        return shifted, top.with_url_and_dates(new_url, shifted.checkin_iso, shifted.checkout_iso)
