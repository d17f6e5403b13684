"""Testimonial schemas for request/response validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estateview.models.testimonial import DEFAULT_RATING
from estateview.schemas.common import CamelModel, force_utc
from estateview.utils.parsing import parse_flag, parse_int


def _rating_or_none(value) -> Optional[int]:
    rating = parse_int(value)
    if rating is None or not 1 <= rating <= 5:
        return None
    return rating


class TestimonialCreate(BaseModel):
    """Schema for creating a testimonial."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field("", max_length=255)
    content: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1, max_length=255)
    location: str = Field("", max_length=255)
    profile_image: str = Field("", max_length=500)
    rating: int = DEFAULT_RATING
    featured: bool = False

    @field_validator("rating", mode="before")
    @classmethod
    def default_rating(cls, v):
        return _rating_or_none(v) or DEFAULT_RATING

    @field_validator("featured", mode="before")
    @classmethod
    def parse_featured(cls, v):
        return parse_flag(v) is True


class TestimonialPatch(BaseModel):
    """Explicit set of updatable testimonial fields."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    profile_image: Optional[str] = Field(None, max_length=500)
    rating: Optional[int] = None
    featured: Optional[bool] = None

    @field_validator("rating", mode="before")
    @classmethod
    def ignore_invalid_rating(cls, v):
        return _rating_or_none(v)

    @field_validator("featured", mode="before")
    @classmethod
    def parse_featured(cls, v):
        return parse_flag(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class TestimonialResponse(CamelModel):
    """Testimonial response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    author: str
    location: str
    profile_image: str
    rating: int
    featured: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return force_utc(v)


class TestimonialListResponse(CamelModel):
    success: bool = True
    data: List[TestimonialResponse]
    total: Optional[int] = None


class TestimonialEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: TestimonialResponse
