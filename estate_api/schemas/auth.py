"""
Pydantic schemas for authentication requests and responses.
Handles sign-up, sign-in and the token returned alongside the session cookie.
"""

from pydantic import EmailStr, Field, field_validator
from estate_api.schemas.common import CamelModel
from estate_api.schemas.user import UserCreate, UserResponse


class SignupRequest(UserCreate):
    """Sign-up request schema."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "janedoe",
                "email": "jane@example.com",
                "password": "securepassword123"
            }
        }
    }


class SigninRequest(CamelModel):
    """Sign-in request schema."""

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"]
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User's password",
        examples=["securepassword123"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class SigninResponse(UserResponse):
    """
    Sign-in response schema.
    The same token is also set as an httpOnly cookie.
    """

    access_token: str = Field(
        ...,
        description="JWT access token",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )
    token_type: str = Field(
        default="bearer",
        description="Token type",
        examples=["bearer"]
    )
