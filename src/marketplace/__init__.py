"""
Vehicle Marketplace client core

Listing browse/filter logic, listing CRUD against Supabase, image uploads
and the form and admin dashboard controllers built on top of them.
"""

from .errors import (
    AuthenticationError,
    MarketplaceError,
    NotFoundError,
    TransportError,
    UploadError,
    ValidationError,
)
from .filter_engine import filter_listings
from .models.filters import FilterSpec
from .models.listing import Listing, ListingDraft
from .models.user import User
from .repository import ListingRepository

__all__ = [
    'AuthenticationError',
    'FilterSpec',
    'Listing',
    'ListingDraft',
    'ListingRepository',
    'MarketplaceError',
    'NotFoundError',
    'TransportError',
    'UploadError',
    'User',
    'ValidationError',
    'filter_listings',
]
