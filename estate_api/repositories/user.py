"""
User repository for authentication and account management operations.
Provides user lookups, password handling and account deletion.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from estate_api.repositories.base import BaseRepository
from estate_api.repositories.listing import ListingRepository
from estate_api.models.user import User
from typing import Optional, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Passwords are hashed here so plain text never reaches the session.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation and password hashing.

        Args:
            user_data: Dictionary containing user information
                      Must include: username, email, password
                      Optional: avatar

        Returns:
            Created user instance

        Raises:
            ValueError: If validation fails or the email is taken
        """
        try:
            email = User.validate_email_format(user_data["email"])

            if not await self.check_email_availability(email):
                raise ValueError("Email is already registered")

            create_data = {
                **{k: v for k, v in user_data.items() if k != "password"},
                "email": email,
                "password_hash": User.hash_password(user_data["password"]),
            }

            created_user = await self.create(create_data)
            logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
            return created_user
        except ValueError as e:
            logger.warning(f"User validation failed: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()

            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_email(email)

        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        logger.info(f"User authenticated successfully: {email}")
        return user

    async def check_email_availability(
        self,
        email: str,
        exclude_user_id: Optional[uuid.UUID] = None
    ) -> bool:
        """
        Check if an email address is free to use.

        Args:
            email: Email address to check
            exclude_user_id: User whose own address should not count as taken

        Returns:
            True if the email is available
        """
        query = select(User.id).where(User.email == email.lower().strip())
        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)

        result = await self.db.execute(query)
        return result.scalar_one_or_none() is None

    async def update_user(self, user: User, update_data: Dict[str, Any]) -> User:
        """
        Update a user's profile, hashing a new password when given.

        Args:
            user: Persistent user instance
            update_data: Fields to change (username, email, password, avatar)

        Returns:
            Updated user instance

        Raises:
            ValueError: If the new email is invalid or taken, or the password is too short
        """
        changes = dict(update_data)

        if "email" in changes:
            changes["email"] = User.validate_email_format(changes["email"])
            if not await self.check_email_availability(changes["email"], exclude_user_id=user.id):
                raise ValueError("Email is already registered")

        if "password" in changes:
            user.set_password(changes.pop("password"))
            changed = sorted(changes) + ["password"]
        else:
            changed = sorted(changes)

        updated = await self.update_instance(user, changes)
        logger.info(f"Updated user {updated.id}: {changed}")
        return updated

    async def delete_user_with_listings(self, user_id: uuid.UUID) -> int:
        """
        Delete a user together with every listing they own, in one transaction.

        Args:
            user_id: UUID of the user to delete

        Returns:
            Number of listings removed with the user
        """
        try:
            removed = await ListingRepository(self.db).delete_by_owner(user_id)
            await self.db.execute(delete(User).where(User.id == user_id))
            await self.db.commit()
            logger.info(f"Deleted user {user_id} and {removed} listings")
            return removed
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {e}")
            raise
