"""
Service layer for business logic implementation.
Contains services for authentication, listings, users and error handling.
"""

from .auth import AuthService
from .listing import ListingService
from .user import UserService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "ListingService",
    "UserService",
    "ErrorHandlerService"
]
