"""
Listing repository for listing persistence and the public listing search.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, select, delete, or_, asc, desc
from estate_api.repositories.base import BaseRepository
from estate_api.models.listing import Listing, ListingType
from estate_api.utils.exceptions import ValidationError
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 9

# Accepted sort keys, in wire (camelCase) and column (snake_case) spelling
SORT_FIELDS = {
    "createdAt": Listing.created_at,
    "created_at": Listing.created_at,
    "updatedAt": Listing.updated_at,
    "updated_at": Listing.updated_at,
    "regularPrice": Listing.regular_price,
    "regular_price": Listing.regular_price,
    "discountPrice": Listing.discount_price,
    "discount_price": Listing.discount_price,
    "name": Listing.name,
    "bedrooms": Listing.bedrooms,
    "bathrooms": Listing.bathrooms,
    "type": Listing.type,
}

SORT_ORDERS = {"asc": asc, "desc": desc}


class ListingSearchFilters:
    """
    Data class for listing search filters.

    Amenity flags only ever narrow the result: ``True`` keeps listings with
    the flag set, ``False`` and ``None`` both mean "no filter".
    """

    def __init__(
        self,
        search_term: Optional[str] = None,
        type: Optional[str] = "all",
        parking: Optional[bool] = None,
        furnished: Optional[bool] = None,
        offer: Optional[bool] = None,
        sort: Optional[str] = "created_at",
        order: Optional[str] = "desc",
        limit: int = DEFAULT_SEARCH_LIMIT,
        start_index: int = 0
    ):
        self.search_term = search_term.strip() if search_term else None
        self.type = type.strip().lower() if type else "all"
        self.parking = parking
        self.furnished = furnished
        self.offer = offer
        self.sort = sort or "created_at"
        self.order = order.strip().lower() if order else "desc"
        self.limit = limit
        self.start_index = start_index

    def __repr__(self) -> str:
        return (
            f"<ListingSearchFilters(search_term={self.search_term!r}, type={self.type}, "
            f"sort={self.sort} {self.order}, start_index={self.start_index}, limit={self.limit})>"
        )


def _build_filter_conditions(filters: ListingSearchFilters) -> List:
    """
    Build SQLAlchemy filter conditions from search filters.

    Raises:
        ValidationError: If the type filter is not all, rent or sale
    """
    conditions = []

    # Text search across name, description and address; LIKE wildcards match literally
    if filters.search_term:
        conditions.append(
            or_(
                Listing.name.icontains(filters.search_term, autoescape=True),
                Listing.description.icontains(filters.search_term, autoescape=True),
                Listing.address.icontains(filters.search_term, autoescape=True)
            )
        )

    if filters.type != "all":
        try:
            listing_type = ListingType(filters.type)
        except ValueError:
            raise ValidationError(f"Invalid listing type '{filters.type}'. Use all, rent or sale")
        conditions.append(Listing.type == listing_type)

    if filters.parking:
        conditions.append(Listing.parking.is_(True))
    if filters.furnished:
        conditions.append(Listing.furnished.is_(True))
    if filters.offer:
        conditions.append(Listing.offer.is_(True))

    return conditions


def build_listing_query(filters: ListingSearchFilters) -> Select:
    """
    Build the listing search statement without executing it.

    Conditions are ANDed, results are ordered by the sort field with ties
    broken by id in the same direction, then paged with offset/limit.

    Args:
        filters: ListingSearchFilters instance

    Returns:
        SQLAlchemy select statement for listings

    Raises:
        ValidationError: If type, sort, order or paging values are invalid
    """
    sort_column = SORT_FIELDS.get(filters.sort)
    if sort_column is None:
        raise ValidationError(f"Invalid sort field '{filters.sort}'")

    direction = SORT_ORDERS.get(filters.order)
    if direction is None:
        raise ValidationError(f"Invalid sort order '{filters.order}'. Use asc or desc")

    if filters.limit is None or filters.limit < 1:
        raise ValidationError("Limit must be at least 1")
    if filters.start_index is None or filters.start_index < 0:
        raise ValidationError("Start index cannot be negative")

    query = select(Listing)

    conditions = _build_filter_conditions(filters)
    if conditions:
        query = query.where(*conditions)

    return (
        query
        .order_by(direction(sort_column), direction(Listing.id))
        .offset(filters.start_index)
        .limit(filters.limit)
    )


class ListingRepository(BaseRepository[Listing]):
    """
    Repository for listing persistence and search.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Listing, db)

    async def create_listing(self, listing_data: Dict[str, Any]) -> Listing:
        """
        Persist a new listing.

        Args:
            listing_data: Validated listing fields including ``owner_ref``

        Returns:
            Created listing instance
        """
        listing = await self.create(listing_data)
        logger.info(f"Created listing: {listing.name} (ID: {listing.id}) for owner {listing.owner_ref}")
        return listing

    async def search_listings(self, filters: ListingSearchFilters) -> List[Listing]:
        """
        Search listings with filtering, sorting and offset pagination.

        Args:
            filters: ListingSearchFilters instance with search criteria

        Returns:
            List of matching listings, possibly empty
        """
        query = build_listing_query(filters)

        try:
            result = await self.db.execute(query)
            listings = list(result.scalars().all())
            logger.debug(f"Listing search {filters!r} returned {len(listings)} results")
            return listings
        except Exception as e:
            logger.error(f"Failed to search listings: {e}")
            raise

    async def get_by_owner(self, owner_id: uuid.UUID) -> List[Listing]:
        """
        Get all listings owned by a user, newest first.

        Args:
            owner_id: UUID of the owning user

        Returns:
            List of the owner's listings
        """
        try:
            query = (
                select(Listing)
                .where(Listing.owner_ref == owner_id)
                .order_by(desc(Listing.created_at), desc(Listing.id))
            )
            result = await self.db.execute(query)
            listings = list(result.scalars().all())
            logger.debug(f"Retrieved {len(listings)} listings for owner {owner_id}")
            return listings
        except Exception as e:
            logger.error(f"Failed to get listings for owner {owner_id}: {e}")
            raise

    async def delete_by_owner(self, owner_id: uuid.UUID) -> int:
        """
        Delete every listing owned by a user without committing.
        The caller commits, so the delete can share a transaction.

        Args:
            owner_id: UUID of the owning user

        Returns:
            Number of deleted listings
        """
        result = await self.db.execute(delete(Listing).where(Listing.owner_ref == owner_id))
        logger.debug(f"Deleted {result.rowcount} listings for owner {owner_id}")
        return result.rowcount
