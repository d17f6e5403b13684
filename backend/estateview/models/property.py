"""Property model for real estate listings."""

import json
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from estateview.database import Base
from estateview.utils.formatting import format_price, format_location


class PropertyType(str, Enum):
    """Property type enumeration."""
    APARTMENT = "Apartment"
    HOUSE = "House"
    VILLA = "Villa"
    TOWNHOUSE = "Townhouse"
    LOFT = "Loft"
    PENTHOUSE = "Penthouse"


class PropertyStatus(str, Enum):
    """Property availability status."""
    FOR_SALE = "For Sale"
    FOR_RENT = "For Rent"
    SOLD = "Sold"
    RENTED = "Rented"


class Property(Base):
    """Property model for real estate listings."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Basic Information
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=PropertyType.APARTMENT.value, index=True
    )
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=PropertyStatus.FOR_SALE.value
    )
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Configuration
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    area: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    # Location
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    pincode: Mapped[str] = mapped_column(String(10), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Pricing (smallest currency unit)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    price_formatted: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    # Stored as JSON arrays for SQLite compatibility
    amenities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    images: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Property {self.title} ({self.city})>"

    @property
    def amenity_list(self) -> List[str]:
        return json.loads(self.amenities) if self.amenities else []

    @amenity_list.setter
    def amenity_list(self, value: List[str]) -> None:
        self.amenities = json.dumps(list(value))

    @property
    def image_list(self) -> List[str]:
        return json.loads(self.images) if self.images else []

    @image_list.setter
    def image_list(self, value: List[str]) -> None:
        self.images = json.dumps(list(value))

    def refresh_derived_fields(self) -> None:
        """Recompute location and price display string from their sources."""
        self.location = format_location(self.city, self.state)
        self.price_formatted = format_price(self.price)
