"""
Listing model for rental and sale properties.
Handles listing data, pricing rules, image references and ownership.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, JSON, Enum as SQLEnum, Index, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from estate_api.database import Base
from estate_api.config import settings
import enum
import math
import uuid
from typing import List, Optional

MAX_LISTING_IMAGES = settings.max_listing_images

REQUIRED_TEXT_FIELDS = ("name", "description", "address")


class ListingType(str, enum.Enum):
    """Listing type enumeration for rental or sale listings."""
    RENT = "rent"
    SALE = "sale"


class Listing(Base):
    """
    Listing model for managing rental and sale properties.

    ``owner_ref`` is assigned on creation and never updated afterwards.
    ``discount_price`` only carries meaning while ``offer`` is true.
    """

    __tablename__ = "listings"

    name: Mapped[str] = mapped_column(
        String(62),
        nullable=False,
        index=True,
        comment="Listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed listing description"
    )

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Street address"
    )

    # Pricing information
    regular_price: Mapped[float] = mapped_column(
        Numeric(precision=12, scale=2, asdecimal=False),
        nullable=False,
        index=True,
        comment="Regular price (monthly rent or sale price)"
    )

    discount_price: Mapped[Optional[float]] = mapped_column(
        Numeric(precision=12, scale=2, asdecimal=False),
        nullable=True,
        comment="Discounted price, active when offer is true"
    )

    # Rooms and amenities
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)

    # Amenities
    furnished: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parking: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    type: Mapped[ListingType] = mapped_column(
        SQLEnum(
            ListingType,
            name="listing_type",
            values_callable=lambda members: [member.value for member in members]
        ),
        nullable=False,
        index=True,
        comment="Listing type - rent or sale"
    )

    offer: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True
    )

    # Ordered image references, the first one is the cover image
    image_urls: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list
    )

    owner_ref: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this listing"
    )

    def __repr__(self) -> str:
        """String representation of the listing."""
        return f"<Listing(id={self.id}, name={self.name[:30]}, type={self.type})>"

    @property
    def cover_image(self) -> Optional[str]:
        return self.image_urls[0] if self.image_urls else None

    @property
    def effective_price(self) -> float:
        """Price a buyer or tenant actually pays."""
        if self.offer and self.discount_price is not None:
            return self.discount_price
        return self.regular_price

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.owner_ref == user_id

    def validate_required_fields(self) -> None:
        """
        Validate that required text fields are present.

        Raises:
            ValueError: If any required text is missing or blank
        """
        for field_name in REQUIRED_TEXT_FIELDS:
            value = getattr(self, field_name)
            if value is None or not str(value).strip():
                raise ValueError("All fields are required!")

        if self.type is None:
            raise ValueError("All fields are required!")

    def validate_rooms(self) -> None:
        """
        Validate bedroom and bathroom counts.

        Raises:
            ValueError: If a count is missing or below one
        """
        for field_name in ("bedrooms", "bathrooms"):
            value = getattr(self, field_name)
            if value is None or isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Number of {field_name} must be a whole number")
            if value < 1:
                raise ValueError(f"Number of {field_name} must be at least 1")

    def validate_prices(self) -> None:
        """
        Validate regular and discount prices.

        Raises:
            ValueError: If prices are invalid
        """
        if self.regular_price is None or self.regular_price <= 0:
            raise ValueError("Regular price must be greater than 0")

        for price in (self.regular_price, self.discount_price):
            if price is not None and not math.isfinite(price):
                raise ValueError("Prices must be finite numbers")

        if self.discount_price is not None and self.discount_price < 0:
            raise ValueError("Discount price cannot be negative")

        if self.offer:
            if self.discount_price is None:
                raise ValueError("Discount price is required when offer is enabled")
            if self.discount_price >= self.regular_price:
                raise ValueError("Discount price must be less than regular price")

    def validate_images(self) -> None:
        """
        Validate the image reference list.

        Raises:
            ValueError: If there are no images, too many, or blank entries
        """
        if not self.image_urls:
            raise ValueError("You must upload at least one image")

        if len(self.image_urls) > MAX_LISTING_IMAGES:
            raise ValueError(f"You can only upload up to {MAX_LISTING_IMAGES} images per listing")

        if any(not url or not str(url).strip() for url in self.image_urls):
            raise ValueError("Image references cannot be empty")

    def validate_all(self) -> None:
        """
        Run all validation checks on the listing.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_required_fields()
        self.validate_prices()
        self.validate_rooms()
        self.validate_images()

    def to_dict(self) -> dict:
        """
        Convert listing to dictionary.

        Returns:
            Dictionary representation of listing
        """
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "address": self.address,
            "regular_price": self.regular_price,
            "discount_price": self.discount_price,
            "bathrooms": self.bathrooms,
            "bedrooms": self.bedrooms,
            "furnished": self.furnished,
            "parking": self.parking,
            "type": self.type.value if isinstance(self.type, ListingType) else self.type,
            "offer": self.offer,
            "image_urls": list(self.image_urls or []),
            "cover_image": self.cover_image,
            "effective_price": self.effective_price,
            "owner_ref": str(self.owner_ref),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# Composite index for the default search ordering with type filtering
type_created_index = Index(
    "idx_listings_type_created",
    Listing.type,
    Listing.created_at.desc()
)

# Composite index for an owner's listings
owner_created_index = Index(
    "idx_listings_owner_created",
    Listing.owner_ref,
    Listing.created_at.desc()
)
