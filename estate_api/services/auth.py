"""
Authentication service for sign-up, sign-in and resolving the current user.
Handles JWT token generation and validation on top of the user repository.
"""

from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.repositories.user import UserRepository
from estate_api.models.user import User
from estate_api.schemas.auth import SignupRequest
from estate_api.utils.auth import (
    create_access_token,
    verify_token,
    JWTError,
    ExpiredSignatureError
)
from estate_api.utils.exceptions import (
    APIException,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    ValidationError,
    InternalServerError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for account creation and token based sessions.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def signup(self, user_data: SignupRequest) -> User:
        """
        Register a new user account.

        Args:
            user_data: Validated sign-up payload

        Returns:
            Created User object

        Raises:
            ValidationError: If the email is taken or the password is too short
        """
        try:
            user = await self.user_repo.create_user(user_data.model_dump(exclude_none=True))
            logger.info(f"User signed up: {user.email}")
            return user
        except ValueError as e:
            raise ValidationError(str(e))
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Sign-up failed for {user_data.email}: {e}")
            raise InternalServerError("Failed to create user")

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Authenticated User object

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        return user

    def create_token(self, user: User) -> str:
        """Create an access token for the user."""
        return create_access_token(user_id=user.id, email=user.email)

    async def signin(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user and create an access token.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (user, access_token)
        """
        user = await self.authenticate_user(email, password)
        return user, self.create_token(user)

    async def get_current_user(self, token: str) -> User:
        """
        Get current user from access token.

        Args:
            token: JWT access token

        Returns:
            Current User object

        Raises:
            InvalidTokenError: If token is invalid or its user no longer exists
            TokenExpiredError: If token is expired
        """
        try:
            token_payload = verify_token(token, token_type="access")
            user_id = uuid.UUID(token_payload.user_id)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except (JWTError, ValueError) as e:
            logger.debug(f"Rejected access token: {e}")
            raise InvalidTokenError()

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise InvalidTokenError("User no longer exists")

        return user
