"""
Listing service for listing mutations, lookups and search.
Applies listing validation and the owner-only rules for changes.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.repositories.listing import ListingRepository, ListingSearchFilters
from estate_api.models.listing import Listing
from estate_api.models.user import User
from estate_api.schemas.listing import ListingCreate, ListingUpdate
from estate_api.utils.exceptions import (
    APIException,
    ValidationError,
    UnauthorizedError,
    ListingNotFoundError,
    ListingOwnershipError,
    InternalServerError
)
import uuid
import logging

logger = logging.getLogger(__name__)

# Columns copied from a stored listing when validating an update
LISTING_FIELDS = (
    "name", "description", "address", "regular_price", "discount_price",
    "bathrooms", "bedrooms", "furnished", "parking", "type", "offer", "image_urls",
)

# Fields that may be cleared by sending null
NULLABLE_FIELDS = {"discount_price"}


class ListingService:
    """
    Service for listing management.
    The acting user is always passed in explicitly as ``current_user``.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.listing_repo = ListingRepository(db_session)

    @staticmethod
    def validate_listing(listing: Listing) -> None:
        """
        Run the listing rules and report the first failure.

        Raises:
            ValidationError: With the message of the rule that failed
        """
        try:
            listing.validate_all()
        except ValueError as e:
            raise ValidationError(str(e))

    async def create_listing(self, listing_data: ListingCreate, current_user: User) -> Listing:
        """
        Create a new listing owned by the current user.

        Args:
            listing_data: Listing creation data
            current_user: User creating the listing

        Returns:
            Created listing

        Raises:
            ValidationError: If listing data is invalid
        """
        try:
            data = listing_data.model_dump()
            self.validate_listing(Listing(**data))

            listing = await self.listing_repo.create_listing({**data, "owner_ref": current_user.id})
            logger.info(f"User {current_user.id} created listing {listing.id}")
            return listing
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create listing for user {current_user.id}: {e}")
            raise InternalServerError("Failed to create listing")

    async def get_listing(self, listing_id: uuid.UUID) -> Listing:
        """
        Get a listing by ID.

        Raises:
            ListingNotFoundError: If the listing does not exist
        """
        listing = await self.listing_repo.get_by_id(listing_id)
        if not listing:
            raise ListingNotFoundError(str(listing_id))
        return listing

    async def update_listing(
        self,
        listing_id: uuid.UUID,
        listing_data: ListingUpdate,
        current_user: User
    ) -> Listing:
        """
        Update a listing owned by the current user.

        Provided fields are merged over the stored listing and the merged
        result is validated with the same rules as a new listing.

        Args:
            listing_id: Listing UUID
            listing_data: Fields to change
            current_user: User performing the update

        Returns:
            Updated listing

        Raises:
            ListingNotFoundError: If the listing does not exist
            ListingOwnershipError: If the user does not own the listing
            ValidationError: If the merged listing is invalid
        """
        try:
            listing = await self.get_listing(listing_id)

            if not listing.is_owned_by(current_user.id):
                logger.warning(f"User {current_user.id} tried to update listing {listing_id} owned by {listing.owner_ref}")
                raise ListingOwnershipError("update")

            updates = {
                field: value
                for field, value in listing_data.model_dump(exclude_unset=True).items()
                if value is not None or field in NULLABLE_FIELDS
            }

            merged = {field: getattr(listing, field) for field in LISTING_FIELDS}
            merged.update(updates)
            self.validate_listing(Listing(**merged))

            if not updates:
                return listing

            updated = await self.listing_repo.update_instance(listing, updates)
            logger.info(f"User {current_user.id} updated listing {listing_id}: {sorted(updates)}")
            return updated
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update listing {listing_id}: {e}")
            raise InternalServerError("Failed to update listing")

    async def delete_listing(self, listing_id: uuid.UUID, current_user: User) -> None:
        """
        Delete a listing owned by the current user.

        Raises:
            ListingNotFoundError: If the listing does not exist
            ListingOwnershipError: If the user does not own the listing
        """
        try:
            listing = await self.get_listing(listing_id)

            if not listing.is_owned_by(current_user.id):
                logger.warning(f"User {current_user.id} tried to delete listing {listing_id} owned by {listing.owner_ref}")
                raise ListingOwnershipError("delete")

            await self.listing_repo.delete(listing_id)
            logger.info(f"User {current_user.id} deleted listing {listing_id}")
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to delete listing {listing_id}: {e}")
            raise InternalServerError("Failed to delete listing")

    async def search_listings(self, filters: ListingSearchFilters) -> List[Listing]:
        """
        Search public listings.

        Raises:
            ValidationError: If a filter value is not recognised
        """
        return await self.listing_repo.search_listings(filters)

    async def get_owner_listings(self, owner_id: uuid.UUID, current_user: User) -> List[Listing]:
        """
        Get every listing of an owner. Only the owner may ask.

        Args:
            owner_id: UUID of the listing owner
            current_user: User making the request

        Returns:
            The owner's listings, newest first

        Raises:
            UnauthorizedError: If the caller is not the owner
        """
        if not current_user.is_self(owner_id):
            raise UnauthorizedError("You can only view your own listings!")

        return await self.listing_repo.get_by_owner(owner_id)
