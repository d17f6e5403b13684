"""Property schemas for request/response validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estateview.models.property import PropertyStatus, PropertyType
from estateview.schemas.common import CamelModel, PaginationMeta, force_utc
from estateview.utils.parsing import (
    parse_flag,
    parse_stored_int,
    parse_string_list,
)


def _choice(enum_cls, value):
    """Enum member named by value, ignoring case; ``None`` if there is none."""
    if value is None or isinstance(value, enum_cls):
        return value
    text = str(value).strip().casefold()
    for member in enum_cls:
        if member.value.casefold() == text:
            return member
    return None


def _room_count(value) -> Optional[int]:
    count = parse_stored_int(value)
    return count if count else None


class PropertyCreate(BaseModel):
    """Schema for creating a new property.

    Numeric fields arrive as form strings; unparseable values fall back to
    the field default instead of failing the request.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    type: PropertyType = PropertyType.APARTMENT
    status: PropertyStatus = PropertyStatus.FOR_SALE
    featured: bool = False

    bedrooms: int = Field(1, ge=1)
    bathrooms: int = Field(1, ge=1)
    area: str = Field("", max_length=100)

    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field("", max_length=10)

    price: int = Field(0, ge=0)
    amenities: List[str] = []

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v):
        return _choice(PropertyType, v) or PropertyType.APARTMENT

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        return _choice(PropertyStatus, v) or PropertyStatus.FOR_SALE

    @field_validator("bedrooms", "bathrooms", mode="before")
    @classmethod
    def default_room_count(cls, v):
        return _room_count(v) or 1

    @field_validator("price", mode="before")
    @classmethod
    def default_price(cls, v):
        price = parse_stored_int(v)
        return price if price is not None else 0

    @field_validator("featured", mode="before")
    @classmethod
    def parse_featured(cls, v):
        return parse_flag(v) is True

    @field_validator("amenities", mode="before")
    @classmethod
    def parse_amenities(cls, v):
        return parse_string_list(v) or []


class PropertyPatch(BaseModel):
    """Explicit set of updatable property fields.

    Only fields that are supplied and valid are applied. location and
    price_formatted are derived and cannot be patched.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None
    featured: Optional[bool] = None

    bedrooms: Optional[int] = Field(None, ge=1)
    bathrooms: Optional[int] = Field(None, ge=1)
    area: Optional[str] = Field(None, max_length=100)

    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    pincode: Optional[str] = Field(None, max_length=10)

    price: Optional[int] = Field(None, ge=0)
    amenities: Optional[List[str]] = None
    # Existing image URIs to keep; uploads are appended by the caller
    images: Optional[List[str]] = None

    @field_validator("type", mode="before")
    @classmethod
    def ignore_unknown_type(cls, v):
        return _choice(PropertyType, v)

    @field_validator("status", mode="before")
    @classmethod
    def ignore_unknown_status(cls, v):
        return _choice(PropertyStatus, v)

    @field_validator("bedrooms", "bathrooms", mode="before")
    @classmethod
    def ignore_invalid_room_count(cls, v):
        return _room_count(v)

    @field_validator("price", mode="before")
    @classmethod
    def ignore_invalid_price(cls, v):
        return parse_stored_int(v)

    @field_validator("featured", mode="before")
    @classmethod
    def parse_featured(cls, v):
        return parse_flag(v)

    @field_validator("amenities", "images", mode="before")
    @classmethod
    def parse_lists(cls, v):
        return parse_string_list(v)

    def changes(self) -> dict:
        """Fields to apply, with enums reduced to their stored values."""
        data = self.model_dump(exclude_none=True)
        for field in ("type", "status"):
            if field in data:
                data[field] = data[field].value
        return data


class PropertyResponse(CamelModel):
    """Property response schema."""
    id: int
    title: str
    description: str
    bedrooms: int
    bathrooms: int
    area: str
    location: str
    city: str
    state: str
    pincode: str
    price: int
    price_formatted: str
    type: str
    status: str
    featured: bool
    amenities: List[str] = []
    images: List[str] = []
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return force_utc(v)


class PropertyListResponse(CamelModel):
    """Paginated property list response."""
    success: bool = True
    data: List[PropertyResponse]
    pagination: PaginationMeta


class PropertyCollectionResponse(CamelModel):
    """Unpaginated property list for the admin console."""
    success: bool = True
    data: List[PropertyResponse]
    total: int


class PropertyEnvelope(CamelModel):
    """Single property response."""
    success: bool = True
    message: Optional[str] = None
    data: PropertyResponse
