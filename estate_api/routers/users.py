"""
User API endpoints for public profiles and self-service account management.
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
from estate_api.models.user import User
from estate_api.services.user import UserService
from estate_api.schemas.user import UserUpdate, UserResponse
from estate_api.schemas.listing import ListingResponse
from estate_api.schemas.common import MessageResponse
from estate_api.schemas.error import get_error_responses
from estate_api.routers.auth import clear_session_cookie
from estate_api.utils.dependencies import get_current_user, get_user_service
import uuid


router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get user",
    description="Get a user's public profile, e.g. to contact a landlord",
    responses=get_error_responses(400, 404)
)
async def get_user(
    user_id: uuid.UUID,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    """
    Get a user by ID.

    Raises:
        UserNotFoundError: If the user does not exist
    """
    user = await user_service.get_user(user_id)
    return UserResponse.model_validate(user.to_dict())


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Update user",
    description="Update your own account",
    responses=get_error_responses(400, 401)
)
async def update_user(
    user_id: uuid.UUID,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    """
    Update the caller's account.

    Args:
        user_id: UUID of the account to update
        user_data: Fields to change
        current_user: Current authenticated user
        user_service: User service instance

    Returns:
        Updated user without the password hash

    Raises:
        SelfOnlyError: If ``user_id`` is not the caller
        ValidationError: If the new email is taken
    """
    user = await user_service.update_user(user_id, user_data, current_user)
    return UserResponse.model_validate(user.to_dict())


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete user",
    description="Delete your own account together with all of its listings",
    responses=get_error_responses(400, 401)
)
async def delete_user(
    user_id: uuid.UUID,
    response: Response,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    """
    Delete the caller's account and end the session.

    Raises:
        SelfOnlyError: If ``user_id`` is not the caller
    """
    await user_service.delete_user(user_id, current_user)
    clear_session_cookie(response)
    return MessageResponse(message="User has been deleted!")


@router.get(
    "/{user_id}/listings",
    response_model=List[ListingResponse],
    status_code=status.HTTP_200_OK,
    summary="Get user listings",
    description="Get every listing of a user. Only that user may ask.",
    responses=get_error_responses(400, 401)
)
async def get_user_listings(
    user_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> List[ListingResponse]:
    """
    Get the caller's own listings.

    Raises:
        UnauthorizedError: If ``user_id`` is not the caller
    """
    listings = await user_service.get_user_listings(user_id, current_user)
    return [ListingResponse.model_validate(listing.to_dict()) for listing in listings]
