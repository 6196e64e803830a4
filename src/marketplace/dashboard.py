"""
Admin Dashboard Controller

Loads listings and users for admins and applies admin mutations. Local state
changes only after the store confirms a delete or update.
"""

import asyncio
import enum
import logging
from typing import Callable, List, Optional

from .errors import MarketplaceError
from .models.listing import Listing
from .models.user import User
from .repository import ListingRepository
from .session import AuthState, RouteDecision, dashboard_route

logger = logging.getLogger(__name__)


class DashboardStatus(enum.Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    READY = 'ready'
    ERROR = 'error'


class DashboardController:
    def __init__(self, repository: ListingRepository, navigate: Callable[[str], None],
                 home_path: str = '/'):
        self.repository = repository
        self.navigate = navigate
        self.home_path = home_path

        self.status = DashboardStatus.IDLE
        self.listings: List[Listing] = []
        self.users: List[User] = []
        self.error: Optional[str] = None

    async def activate(self, state: AuthState) -> RouteDecision:
        """
        React to the current auth state.

        Returns:
            The routing decision that was applied
        """
        decision = dashboard_route(state)
        if decision is RouteDecision.WAIT:
            return decision
        if decision is RouteDecision.REDIRECT:
            logger.info("Non-admin user on the dashboard, redirecting")
            self.navigate(self.home_path)
            return decision

        await self.load()
        return decision

    async def load(self) -> None:
        """
        Fetch listings and users concurrently.

        Both requests run to completion before either result is used; if one
        fails, neither is shown.
        """
        self.status = DashboardStatus.LOADING
        self.error = None
        listings, users = await asyncio.gather(
            self.repository.fetch_all(),
            self.repository.fetch_users(),
            return_exceptions=True
        )

        for result in (listings, users):
            if isinstance(result, BaseException):
                if not isinstance(result, MarketplaceError):
                    raise result
                logger.error(f"Error fetching dashboard data: {result}")
                self.listings = []
                self.users = []
                self.error = "Failed to load data. Please try again."
                self.status = DashboardStatus.ERROR
                return

        self.listings = listings
        self.users = users
        self.status = DashboardStatus.READY
        logger.info(f"Dashboard loaded {len(listings)} listings and {len(users)} users")

    async def delete_listing(self, listing_id: str) -> bool:
        try:
            await self.repository.delete_by_id(listing_id)
        except MarketplaceError as e:
            logger.error(f"Error deleting listing {listing_id}: {e}")
            self.error = "Failed to delete listing. Please try again."
            return False

        self.listings = [item for item in self.listings if item.id != listing_id]
        return True

    async def delete_user(self, user_id: str) -> bool:
        try:
            await self.repository.delete_user(user_id)
        except MarketplaceError as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            self.error = "Failed to delete user. Please try again."
            return False

        self.users = [item for item in self.users if item.id != user_id]
        return True

    async def update_listing(self, listing: Listing) -> Optional[Listing]:
        """
        Save an edited listing and swap the stored version into local state.

        Returns:
            The updated listing, or None if it no longer exists or the call
            failed (``error`` says which)
        """
        try:
            updated = await self.repository.update(listing)
        except MarketplaceError as e:
            logger.error(f"Error updating listing {listing.id}: {e}")
            self.error = f"Failed to update listing: {e.user_message}"
            return None

        if updated is None:
            self.error = "Failed to update listing: No data returned"
            return None

        self.listings = [updated if item.id == updated.id else item for item in self.listings]
        return updated
