"""
Database models for the Estate Listing API.
Includes the User and Listing models.
"""

from estate_api.models.user import User
from estate_api.models.listing import Listing, ListingType

# Export all models for easy importing
__all__ = [
    "User",
    "Listing",
    "ListingType",
]
