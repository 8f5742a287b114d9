"""
Pydantic schemas for listing requests and responses.
Handles listing create/update payloads and serialization.

Request schemas check types and per-field shape. Rules spanning several
fields (offer pricing, image count) live on the ``Listing`` model so that
create and update share them.
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from estate_api.models.listing import ListingType
from estate_api.schemas.common import CamelModel


def _clean_text(v):
    if v is None:
        return v
    if not v.strip():
        raise ValueError("All fields are required!")
    return v.strip()


class ListingBase(CamelModel):
    """Base listing schema with common fields."""

    name: str = Field(
        ...,
        max_length=62,
        description="Listing title",
        examples=["Modern apartment near the park"]
    )

    description: str = Field(
        ...,
        description="Detailed listing description",
        examples=["Bright two bedroom apartment with a balcony and open kitchen."]
    )

    address: str = Field(
        ...,
        max_length=255,
        description="Street address",
        examples=["12 Park Lane, Springfield"]
    )

    regular_price: float = Field(
        ...,
        allow_inf_nan=False,
        description="Regular price (monthly rent or sale price)",
        examples=[1500]
    )

    discount_price: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        description="Discounted price, required when offer is true",
        examples=[1200]
    )

    bathrooms: int = Field(
        ...,
        description="Number of bathrooms",
        examples=[1]
    )

    bedrooms: int = Field(
        ...,
        description="Number of bedrooms",
        examples=[2]
    )

    furnished: bool = Field(False, description="Whether the listing is furnished")
    parking: bool = Field(False, description="Whether a parking spot is included")
    offer: bool = Field(False, description="Whether the discount price applies")

    type: ListingType = Field(
        ...,
        description="Listing type - rent or sale",
        examples=["rent"]
    )

    image_urls: List[str] = Field(
        default_factory=list,
        description="Ordered image references, the first one is the cover",
        examples=[["https://example.com/images/cover.jpg"]]
    )

    @field_validator("name", "description", "address")
    @classmethod
    def validate_text(cls, v):
        """Strip text fields and reject blank ones."""
        return _clean_text(v)


class ListingCreate(ListingBase):
    """Schema for creating a new listing. The owner comes from the caller."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Modern apartment near the park",
                "description": "Bright two bedroom apartment with a balcony and open kitchen.",
                "address": "12 Park Lane, Springfield",
                "regularPrice": 1500,
                "discountPrice": 1200,
                "bathrooms": 1,
                "bedrooms": 2,
                "furnished": True,
                "parking": False,
                "type": "rent",
                "offer": True,
                "imageUrls": ["https://example.com/images/cover.jpg"]
            }
        }
    }


class ListingUpdate(CamelModel):
    """
    Schema for updating an existing listing.
    Only provided fields are changed; ``ownerRef`` is not updatable.
    """

    name: Optional[str] = Field(None, max_length=62, description="Listing title")
    description: Optional[str] = Field(None, description="Detailed listing description")
    address: Optional[str] = Field(None, max_length=255, description="Street address")
    regular_price: Optional[float] = Field(None, allow_inf_nan=False, description="Regular price")
    discount_price: Optional[float] = Field(None, allow_inf_nan=False, description="Discounted price")
    bathrooms: Optional[int] = Field(None, description="Number of bathrooms")
    bedrooms: Optional[int] = Field(None, description="Number of bedrooms")
    furnished: Optional[bool] = Field(None, description="Whether the listing is furnished")
    parking: Optional[bool] = Field(None, description="Whether a parking spot is included")
    offer: Optional[bool] = Field(None, description="Whether the discount price applies")
    type: Optional[ListingType] = Field(None, description="Listing type - rent or sale")
    image_urls: Optional[List[str]] = Field(None, description="Ordered image references")

    @field_validator("name", "description", "address")
    @classmethod
    def validate_text(cls, v):
        """Strip text fields and reject blank ones."""
        return _clean_text(v)


class ListingResponse(ListingBase):
    """Schema for listing responses."""

    id: str = Field(
        ...,
        description="Listing unique identifier",
        examples=["123e4567-e89b-12d3-a456-426614174000"]
    )

    owner_ref: str = Field(
        ...,
        description="ID of the user who owns the listing",
        examples=["123e4567-e89b-12d3-a456-426614174001"]
    )

    cover_image: Optional[str] = Field(None, description="First image reference, shown as the listing thumbnail")
    effective_price: float = Field(..., description="Discount price while an offer runs, otherwise the regular price")

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
