from .filters import FilterSpec
from .listing import Listing, ListingDraft
from .user import User

__all__ = ['FilterSpec', 'Listing', 'ListingDraft', 'User']
