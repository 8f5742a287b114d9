"""
Repository layer for data access operations.
"""

from estate_api.repositories.base import BaseRepository
from estate_api.repositories.listing import ListingRepository, ListingSearchFilters, build_listing_query
from estate_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ListingRepository",
    "ListingSearchFilters",
    "build_listing_query",
    "UserRepository"
]
