"""
Listing API endpoints for creating, reading, updating, deleting and searching listings.
Reads are public; changes require the listing owner.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from estate_api.models.user import User
from estate_api.repositories.listing import ListingSearchFilters
from estate_api.services.listing import ListingService
from estate_api.schemas.listing import ListingCreate, ListingUpdate, ListingResponse
from estate_api.schemas.common import MessageResponse
from estate_api.schemas.error import get_error_responses
from estate_api.utils.dependencies import get_current_user, get_listing_service
from estate_api.config import settings
import uuid


router = APIRouter(prefix="/listings", tags=["Listings"])


@router.post(
    "",
    response_model=ListingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create listing",
    description="Create a new listing owned by the signed-in user",
    responses=get_error_responses(400, 401)
)
async def create_listing(
    listing_data: ListingCreate,
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingResponse:
    """
    Create a new listing.

    Args:
        listing_data: Listing creation data
        current_user: Current authenticated user
        listing_service: Listing service instance

    Returns:
        Created listing

    Raises:
        ValidationError: If listing data is invalid
    """
    listing = await listing_service.create_listing(listing_data, current_user)
    return ListingResponse.model_validate(listing.to_dict())


@router.get(
    "",
    response_model=List[ListingResponse],
    status_code=status.HTTP_200_OK,
    summary="Search listings",
    description="Search listings with text, type and amenity filters, sorting and offset pagination"
)
async def search_listings(
    search_term: Optional[str] = Query(None, alias="searchTerm", description="Text matched against name, description and address"),
    type: Optional[str] = Query("all", description="Listing type (all, rent or sale)"),
    parking: Optional[bool] = Query(None, description="Only listings with parking when true"),
    furnished: Optional[bool] = Query(None, description="Only furnished listings when true"),
    offer: Optional[bool] = Query(None, description="Only listings on offer when true"),
    sort: str = Query("created_at", description="Sort field, e.g. createdAt or regularPrice"),
    order: str = Query("desc", description="Sort order (asc/desc)"),
    limit: int = Query(settings.default_listing_limit, ge=1, description="Maximum number of listings"),
    start_index: int = Query(0, ge=0, alias="startIndex", description="Number of matches to skip"),
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ListingResponse]:
    """
    Search listings. An empty result is returned as an empty list.

    Raises:
        ValidationError: If type, sort or order is not recognised
    """
    filters = ListingSearchFilters(
        search_term=search_term,
        type=type,
        parking=parking,
        furnished=furnished,
        offer=offer,
        sort=sort,
        order=order,
        limit=limit,
        start_index=start_index
    )

    listings = await listing_service.search_listings(filters)
    return [ListingResponse.model_validate(listing.to_dict()) for listing in listings]


@router.get(
    "/user/{user_id}",
    response_model=List[ListingResponse],
    status_code=status.HTTP_200_OK,
    summary="Get a user's listings",
    description="Get every listing of a user. Only that user may ask.",
    responses=get_error_responses(400, 401)
)
async def get_owner_listings(
    user_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ListingResponse]:
    """
    Get the signed-in user's own listings.

    Raises:
        UnauthorizedError: If ``user_id`` is not the caller
    """
    listings = await listing_service.get_owner_listings(user_id, current_user)
    return [ListingResponse.model_validate(listing.to_dict()) for listing in listings]


@router.get(
    "/{listing_id}",
    response_model=ListingResponse,
    status_code=status.HTTP_200_OK,
    summary="Get listing",
    responses=get_error_responses(400, 404)
)
async def get_listing(
    listing_id: uuid.UUID,
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingResponse:
    """
    Get a listing by ID.

    Raises:
        ListingNotFoundError: If the listing does not exist
    """
    listing = await listing_service.get_listing(listing_id)
    return ListingResponse.model_validate(listing.to_dict())


@router.put(
    "/{listing_id}",
    response_model=ListingResponse,
    status_code=status.HTTP_200_OK,
    summary="Update listing",
    description="Update a listing. Only the owner may update it.",
    responses=get_error_responses(400, 401, 403, 404)
)
async def update_listing(
    listing_id: uuid.UUID,
    listing_data: ListingUpdate,
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingResponse:
    """
    Update an existing listing.

    Args:
        listing_id: Listing UUID
        listing_data: Fields to change
        current_user: Current authenticated user
        listing_service: Listing service instance

    Returns:
        Updated listing

    Raises:
        ListingNotFoundError: If the listing does not exist
        ListingOwnershipError: If the user does not own the listing
        ValidationError: If the merged listing is invalid
    """
    listing = await listing_service.update_listing(listing_id, listing_data, current_user)
    return ListingResponse.model_validate(listing.to_dict())


@router.delete(
    "/{listing_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete listing",
    description="Delete a listing. Only the owner may delete it.",
    responses=get_error_responses(400, 401, 403, 404)
)
async def delete_listing(
    listing_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> MessageResponse:
    """
    Delete a listing.

    Raises:
        ListingNotFoundError: If the listing does not exist
        ListingOwnershipError: If the user does not own the listing
    """
    await listing_service.delete_listing(listing_id, current_user)
    return MessageResponse(message="Listing has been deleted!")
