"""
User service for public profiles and self-service account management.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.repositories.user import UserRepository
from estate_api.services.listing import ListingService
from estate_api.models.listing import Listing
from estate_api.models.user import User
from estate_api.schemas.user import UserUpdate
from estate_api.utils.exceptions import (
    APIException,
    ValidationError,
    SelfOnlyError,
    UserNotFoundError,
    InternalServerError
)
import uuid
import logging

logger = logging.getLogger(__name__)

# Fields that may be cleared by sending null
NULLABLE_USER_FIELDS = {"avatar"}


class UserService:
    """
    Service for user accounts.
    Only the account holder may change or delete an account.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.listing_service = ListingService(db_session)

    async def get_user(self, user_id: uuid.UUID) -> User:
        """
        Get a user's public profile.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user

    async def update_user(self, user_id: uuid.UUID, user_data: UserUpdate, current_user: User) -> User:
        """
        Update the caller's own account.

        Args:
            user_id: UUID of the account to update
            user_data: Fields to change
            current_user: User performing the update

        Returns:
            Updated user

        Raises:
            SelfOnlyError: If the caller targets another account
            ValidationError: If the new email is taken
        """
        if not current_user.is_self(user_id):
            raise SelfOnlyError("update")

        try:
            changes = {
                field: value
                for field, value in user_data.model_dump(exclude_unset=True).items()
                if value is not None or field in NULLABLE_USER_FIELDS
            }
            if not changes:
                return current_user

            return await self.user_repo.update_user(current_user, changes)
        except ValueError as e:
            raise ValidationError(str(e))
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            raise InternalServerError("Failed to update user")

    async def delete_user(self, user_id: uuid.UUID, current_user: User) -> None:
        """
        Delete the caller's own account and every listing they own.

        Raises:
            SelfOnlyError: If the caller targets another account
        """
        if not current_user.is_self(user_id):
            raise SelfOnlyError("delete")

        try:
            await self.user_repo.delete_user_with_listings(user_id)
        except Exception as e:
            logger.error(f"Failed to delete user {user_id}: {e}")
            raise InternalServerError("Failed to delete user")

    async def get_user_listings(self, user_id: uuid.UUID, current_user: User) -> List[Listing]:
        """Get a user's listings. Same rules as ``ListingService.get_owner_listings``."""
        return await self.listing_service.get_owner_listings(user_id, current_user)
