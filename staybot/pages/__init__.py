"""Page surfaces composed from capability protocols."""

from staybot.pages.capabilities import DateAdjustable, GuestAdjustable, Searchable
from staybot.pages.listing_page import ListingPage
from staybot.pages.reservation_page import ReservationPage
from staybot.pages.results_page import SearchResultsPage
from staybot.pages.search_panel import SearchPanel

__all__ = [
    "Searchable",
    "DateAdjustable",
    "GuestAdjustable",
    "SearchPanel",
    "SearchResultsPage",
    "ListingPage",
    "ReservationPage",
]
