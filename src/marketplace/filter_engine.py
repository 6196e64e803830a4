"""
Filter Engine for marketplace listings

Client-side search over the in-memory listing set. A listing is kept iff
every predicate of the FilterSpec holds; input order is preserved.
"""

from typing import Iterable, List

from .models.enums import ALL
from .models.filters import FilterSpec, Range
from .models.listing import Listing


def _normalize(text: str) -> str:
    return (text or '').lower()


def _contains(haystack: str, needle: str) -> bool:
    return needle == '' or _normalize(needle) in _normalize(haystack)


def _in_range(value: float, bounds: Range) -> bool:
    lo, hi = bounds
    return lo <= value <= hi


def _enum_matches(value: str, wanted: str) -> bool:
    return wanted == ALL or value == wanted


def matches(listing: Listing, spec: FilterSpec) -> bool:
    """
    Check if a listing passes every filter predicate.

    Args:
        listing: Listing to test
        spec: Active filters

    Returns:
        bool: True if the listing matches all filters
    """
    return (
        _contains(listing.name, spec.search)
        and _enum_matches(listing.engine, spec.engine)
        and (spec.year is None or listing.year == spec.year)
        and _in_range(listing.price, spec.price_range)
        and _in_range(listing.mileage, spec.mileage_range)
        and _in_range(listing.engine_size, spec.engine_size_range)
        and _enum_matches(listing.transmission, spec.transmission)
        and _enum_matches(listing.color, spec.color)
        and _contains(listing.location, spec.location)
    )


def filter_listings(listings: Iterable[Listing], spec: FilterSpec) -> List[Listing]:
    """
    Return the listings matching ``spec``, in input order.

    An inverted range (lo > hi) matches nothing and is not an error.
    """
    if spec.has_inverted_range():
        return []
    return [listing for listing in listings if matches(listing, spec)]
