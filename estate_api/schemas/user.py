"""
Pydantic schemas for user requests and responses.
Handles profile updates and the public user representation.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from estate_api.schemas.common import CamelModel


class UserBase(CamelModel):
    """Base user schema with common fields."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=64,
        description="Display name",
        examples=["janedoe"]
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Validate and clean username."""
        if not v or not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()


class UserCreate(UserBase):
    """Schema for creating a new user."""

    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="User's password (minimum 8 characters)",
        examples=["securepassword123"]
    )

    avatar: Optional[str] = Field(
        None,
        description="Avatar image URL or data URL"
    )


class UserUpdate(CamelModel):
    """
    Schema for updating the caller's own account.
    A new password is hashed before it is stored.
    """

    username: Optional[str] = Field(
        None,
        min_length=3,
        max_length=64,
        description="Display name"
    )

    email: Optional[EmailStr] = Field(
        None,
        description="User's email address"
    )

    password: Optional[str] = Field(
        None,
        min_length=8,
        max_length=128,
        description="New password (minimum 8 characters)"
    )

    avatar: Optional[str] = Field(
        None,
        description="Avatar image URL or data URL"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip() if v else v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip() if v else v


class UserResponse(CamelModel):
    """User response schema (excluding the password hash)."""

    id: str = Field(
        ...,
        description="User's unique identifier",
        examples=["123e4567-e89b-12d3-a456-426614174000"]
    )

    username: str = Field(..., description="Display name", examples=["janedoe"])

    email: str = Field(..., description="User's email address", examples=["jane@example.com"])

    avatar: Optional[str] = Field(None, description="Avatar image URL or data URL")

    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
