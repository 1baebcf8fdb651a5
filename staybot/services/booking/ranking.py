"""Deterministic ordering of collected listings."""

from typing import Iterable, List, Tuple

from staybot.models import ListingSummary


def _rank_key(listing: ListingSummary) -> Tuple[bool, float, bool, float]:
    # Missing values sort after present ones
    rating = listing.rating
    price = listing.price_per_night
    return (
        rating is None,
        -rating if rating is not None else 0.0,
        price is None,
        price if price is not None else 0.0,
    )


def rank(listings: Iterable[ListingSummary]) -> List[ListingSummary]:
    """
    Order by rating descending, then price per night ascending.

    ``sorted`` is stable, so listings equal on both keys keep their input order.
    """
    return sorted(listings, key=_rank_key)
