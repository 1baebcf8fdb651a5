"""Reservation page reached from a listing's reserve button."""

from loguru import logger

from staybot.models import BookingParameters, GuestType
from staybot.pages.binding import bind_page
from staybot.services.service_context import InteractionContext
from staybot.services.session import PageHandle, SessionContext


class ReservationPage:
    """Validates the reservation endpoint and the parameters it carries in its URL."""

    PAGE = "reservation"

    def __init__(self, session: SessionContext, context: InteractionContext, handle: PageHandle):
        self.session = session
        self.context = context
        self.handle = handle

    @classmethod
    async def open(cls, session: SessionContext, context: InteractionContext) -> "ReservationPage":
        handle = await bind_page(session, context, cls.PAGE)
        return cls(session, context, handle)

    def is_reservation_url(self) -> bool:
        url = self.session.current_url
        result = self.context.codec.is_reservation_url(url)
        logger.debug(f"is_reservation_url result: {result} (url={url})")
        return result

    def booking_parameters(self) -> BookingParameters:
        """
        Raises:
            ValidationError: If the current URL cannot be decoded
        """
        self.handle.ensure_live()
        return self.context.codec.decode(self.session.current_url)

    def validate_guest_count_in_url(self, guest_type: GuestType, expected_count: int) -> bool:
        actual = self.booking_parameters().guest_count(guest_type)
        result = actual == expected_count
        logger.debug(
            f"Guest count in URL for {guest_type.slug}: expected={expected_count}, "
            f"actual={actual}, valid={result}"
        )
        return result
