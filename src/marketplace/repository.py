"""
Listing Repository Client

Create/read/update/delete operations against the Supabase ``listings`` and
``users`` tables. Every call round-trips to the store: there is no cache and
no retry in this layer, a failed call surfaces immediately as one of the
errors in ``marketplace.errors``.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from postgrest import APIError

from . import config
from .errors import NotFoundError, TransportError, ValidationError
from .models.listing import Listing, ListingDraft
from .models.user import User

logger = logging.getLogger(__name__)

# PostgREST / Postgres codes meaning "the row has the wrong shape"
VALIDATION_CODES = {'42703', 'PGRST102', 'PGRST204'}
VALIDATION_CODE_CLASSES = ('22', '23')  # data exception, integrity violation


def is_validation_error(error: APIError) -> bool:
    code = str(error.code or '')
    return code in VALIDATION_CODES or code.startswith(VALIDATION_CODE_CLASSES)


class ListingRepository:
    """
    Typed access to the listing and user collections.

    The Supabase client is injected so tests (and other callers) can pass
    any object exposing ``table(name)`` with the postgrest query builder API.
    """

    def __init__(self, supabase, listings_table: str = config.LISTINGS_TABLE,
                 users_table: str = config.USERS_TABLE):
        self.supabase = supabase
        self.listings_table = listings_table
        self.users_table = users_table

    async def _execute(self, query, action: str, validating: bool = False) -> List[Dict[str, Any]]:
        """
        Run a query and translate store failures.

        Args:
            query: Built postgrest request
            action: Description used in logs and error messages
            validating: Map shape errors to ValidationError instead of TransportError

        Returns:
            Rows returned by the store (possibly empty)
        """
        try:
            result = await query.execute()
        except httpx.HTTPError as e:
            logger.error(f"Transport failure while trying to {action}: {e}")
            raise TransportError(f"Failed to {action}: {e}") from e
        except APIError as e:
            if validating and is_validation_error(e):
                logger.error(f"Store rejected record while trying to {action}: {e.message}")
                raise ValidationError(f"Failed to {action}: {e.message}") from e
            logger.error(f"Store error while trying to {action}: {e.message}")
            raise TransportError(f"Failed to {action}: {e.message}") from e
        return result.data or []

    def _to_listing(self, row: Dict[str, Any]) -> Listing:
        try:
            return Listing.from_dict(row)
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Malformed listing row {row.get('id', 'unknown')}: {e}") from e

    def _to_user(self, row: Dict[str, Any]) -> User:
        try:
            return User.from_dict(row)
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Malformed user row {row.get('id', 'unknown')}: {e}") from e

    # Listings

    async def fetch_all(self) -> List[Listing]:
        """
        Fetch every listing.

        Returns:
            All listings; an empty list is a valid result, distinct from a
            TransportError
        """
        query = self.supabase.table(self.listings_table).select('*')
        rows = await self._execute(query, 'load listings')
        logger.info(f"Fetched {len(rows)} listings")
        return [self._to_listing(row) for row in rows]

    async def fetch_by_id(self, listing_id: str) -> Listing:
        """
        Fetch one listing.

        Raises:
            NotFoundError: if no listing has this id
            TransportError: on network or service failure
        """
        query = self.supabase.table(self.listings_table).select('*').eq('id', listing_id).limit(1)
        rows = await self._execute(query, f'load listing {listing_id}')
        if not rows:
            raise NotFoundError(listing_id)
        return self._to_listing(rows[0])

    async def create(self, draft: ListingDraft) -> Listing:
        """
        Insert a listing; the store assigns its id.

        Raises:
            ValidationError: if the store rejects the record
            TransportError: on network or service failure
        """
        query = self.supabase.table(self.listings_table).insert(draft.to_dict())
        rows = await self._execute(query, 'create listing', validating=True)
        if not rows:
            raise ValidationError("Failed to create listing: the store returned no row")
        listing = self._to_listing(rows[0])
        logger.info(f"Created listing {listing.id} ({listing.name})")
        return listing

    async def update(self, listing: Listing) -> Optional[Listing]:
        """
        Replace a stored listing.

        Returns:
            The updated listing as stored, or None when the id no longer
            exists (a no-op, not an error)
        """
        payload = listing.to_dict()
        payload.pop('id')
        query = self.supabase.table(self.listings_table).update(payload).eq('id', listing.id)
        rows = await self._execute(query, f'update listing {listing.id}', validating=True)
        if not rows:
            logger.info(f"Listing {listing.id} no longer exists, nothing updated")
            return None
        return self._to_listing(rows[0])

    async def delete_by_id(self, listing_id: str) -> None:
        """Delete a listing. Deleting an unknown id succeeds silently."""
        query = self.supabase.table(self.listings_table).delete().eq('id', listing_id)
        rows = await self._execute(query, f'delete listing {listing_id}')
        logger.info(f"Deleted listing {listing_id} ({len(rows)} row(s) removed)")

    # Users

    async def fetch_users(self) -> List[User]:
        """Fetch every user; an empty list is a valid result."""
        query = self.supabase.table(self.users_table).select('*')
        rows = await self._execute(query, 'load users')
        logger.info(f"Fetched {len(rows)} users")
        return [self._to_user(row) for row in rows]

    async def fetch_user_by_id(self, user_id: str) -> Optional[User]:
        query = self.supabase.table(self.users_table).select('*').eq('id', user_id).limit(1)
        rows = await self._execute(query, f'load user {user_id}')
        return self._to_user(rows[0]) if rows else None

    async def delete_user(self, user_id: str) -> None:
        """Delete a user. Deleting an unknown id succeeds silently."""
        query = self.supabase.table(self.users_table).delete().eq('id', user_id)
        rows = await self._execute(query, f'delete user {user_id}')
        logger.info(f"Deleted user {user_id} ({len(rows)} row(s) removed)")
