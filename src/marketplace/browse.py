"""
Browse view state

Holds the full listing set and the active filters and keeps the filtered
results in sync. Before the first load finishes the view is LOADING, which is
shown differently from NO_MATCHES (filters exclude everything) and from
NO_DATA (the store has no listings at all).
"""

import enum
import logging
from typing import List, Optional

from .errors import MarketplaceError
from .filter_engine import filter_listings
from .models.filters import FilterSpec
from .models.listing import Listing
from .repository import ListingRepository

logger = logging.getLogger(__name__)


class BrowseStatus(enum.Enum):
    LOADING = 'loading'
    ERROR = 'error'
    NO_DATA = 'no_data'
    NO_MATCHES = 'no_matches'
    RESULTS = 'results'


class BrowseController:
    def __init__(self, repository: ListingRepository, filters: Optional[FilterSpec] = None):
        self.repository = repository
        self.filters = filters or FilterSpec()
        self.listings: List[Listing] = []
        self.results: List[Listing] = []
        self.error: Optional[str] = None
        self.loaded = False

    @property
    def status(self) -> BrowseStatus:
        if not self.loaded:
            return BrowseStatus.LOADING
        if self.error:
            return BrowseStatus.ERROR
        if not self.listings:
            return BrowseStatus.NO_DATA
        if not self.results:
            return BrowseStatus.NO_MATCHES
        return BrowseStatus.RESULTS

    async def load(self) -> None:
        """
        Fetch every listing and apply the current filters.

        A failed reload sets ``error`` and keeps the previously loaded
        listings and results.
        """
        self.error = None
        try:
            listings = await self.repository.fetch_all()
        except MarketplaceError as e:
            logger.error(f"Failed to load listings: {e}")
            self.error = e.user_message
            return
        finally:
            self.loaded = True

        if not listings:
            logger.info("No listings available")
        self.set_listings(listings)

    def set_listings(self, listings: List[Listing]) -> None:
        self.listings = list(listings)
        self._refresh()

    def set_filters(self, **changes) -> FilterSpec:
        self.filters = self.filters.replace(**changes)
        self._refresh()
        return self.filters

    def reset_filters(self) -> None:
        self.filters = FilterSpec()
        self._refresh()

    def _refresh(self) -> None:
        self.results = filter_listings(self.listings, self.filters)
