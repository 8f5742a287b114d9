"""
FastAPI dependency injection utilities for authentication and services.
Provides reusable dependencies for route protection and user extraction.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials, APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.config import settings
from estate_api.database import get_db
from estate_api.models.user import User
from estate_api.services.auth import AuthService
from estate_api.services.listing import ListingService
from estate_api.services.user import UserService
from estate_api.utils.exceptions import UnauthorizedError


# The session token travels in an httpOnly cookie; API clients may send a Bearer header instead
cookie_scheme = APIKeyCookie(name=settings.access_cookie_name, auto_error=False)
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session

    Returns:
        AuthService instance
    """
    return AuthService(db)


async def get_listing_service(db: AsyncSession = Depends(get_db)) -> ListingService:
    """
    Get listing service instance.

    Args:
        db: Database session

    Returns:
        ListingService instance
    """
    return ListingService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_access_token(
    cookie_token: Optional[str] = Depends(cookie_scheme),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Pick the access token from the session cookie, falling back to the Bearer header."""
    if cookie_token:
        return cookie_token
    if credentials:
        return credentials.credentials
    return None


async def get_current_user(
    token: Optional[str] = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from JWT token.

    Args:
        token: Access token from cookie or Authorization header
        auth_service: Authentication service

    Returns:
        Current User object

    Raises:
        UnauthorizedError: If no token provided, the token is invalid or expired
    """
    if not token:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(token)
