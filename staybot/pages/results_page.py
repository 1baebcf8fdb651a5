"""Search results: every listing card across every result page."""

from typing import List, Optional

from loguru import logger

from staybot.models import ListingSummary
from staybot.pages.binding import bind_page
from staybot.services.booking.ranking import rank
from staybot.services.booking.result_aggregator import AggregationResult
from staybot.services.service_context import InteractionContext
from staybot.services.session import PageHandle, SessionContext


class SearchResultsPage:
    PAGE = "results"

    def __init__(self, session: SessionContext, context: InteractionContext, handle: PageHandle):
        self.session = session
        self.context = context
        self.handle = handle
        self.last_result: Optional[AggregationResult] = None

    @classmethod
    async def open(cls, session: SessionContext, context: InteractionContext) -> "SearchResultsPage":
        handle = await bind_page(session, context, cls.PAGE)
        return cls(session, context, handle)

    async def collect_all_listings(self) -> List[ListingSummary]:
        """Aggregate all pages; skipped cards are kept on ``last_result``."""
        self.handle.ensure_live()
        self.last_result = await self.context.aggregator.collect(self.session)
        return list(self.last_result.listings)

    def sort_by_rating_then_price(self, listings: List[ListingSummary]) -> List[ListingSummary]:
        ranked = rank(listings)
        if ranked:
            logger.debug(f"Top ranked listing: {ranked[0].url}")
        return ranked
