"""
Pydantic schemas for request/response validation.
"""

from .common import CamelModel, MessageResponse

# Authentication schemas
from .auth import (
    SignupRequest,
    SigninRequest,
    SigninResponse
)

# User schemas
from .user import (
    UserBase,
    UserCreate,
    UserUpdate,
    UserResponse
)

# Listing schemas
from .listing import (
    ListingBase,
    ListingCreate,
    ListingUpdate,
    ListingResponse
)

# Error schemas
from .error import ErrorDetail, ErrorResponse, get_error_responses

__all__ = [
    "CamelModel",
    "MessageResponse",

    # Authentication
    "SignupRequest",
    "SigninRequest",
    "SigninResponse",

    # User
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "UserResponse",

    # Listing
    "ListingBase",
    "ListingCreate",
    "ListingUpdate",
    "ListingResponse",

    # Errors
    "ErrorDetail",
    "ErrorResponse",
    "get_error_responses",
]
