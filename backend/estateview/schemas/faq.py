"""FAQ schemas for request/response validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estateview.models.faq import DEFAULT_CATEGORY
from estateview.schemas.common import CamelModel, force_utc
from estateview.utils.parsing import MAX_STORED_INT, parse_flag, parse_int


def _display_order(value) -> Optional[int]:
    order = parse_int(value)
    if order is None or abs(order) > MAX_STORED_INT:
        return None
    return order


class FAQCreate(BaseModel):
    """Schema for creating an FAQ entry."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str = Field(DEFAULT_CATEGORY, max_length=100)
    featured: bool = False
    order: int = 0

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v):
        if v is None or not str(v).strip():
            return DEFAULT_CATEGORY
        return v

    @field_validator("featured", mode="before")
    @classmethod
    def parse_featured(cls, v):
        return parse_flag(v) is True

    @field_validator("order", mode="before")
    @classmethod
    def default_order(cls, v):
        order = _display_order(v)
        return order if order is not None else 0


class FAQPatch(BaseModel):
    """Explicit set of updatable FAQ fields."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    featured: Optional[bool] = None
    order: Optional[int] = None

    @field_validator("featured", mode="before")
    @classmethod
    def parse_featured(cls, v):
        return parse_flag(v)

    @field_validator("order", mode="before")
    @classmethod
    def ignore_invalid_order(cls, v):
        return _display_order(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class FAQResponse(CamelModel):
    """FAQ response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    question: str
    answer: str
    category: str
    featured: bool
    order: int
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return force_utc(v)


class FAQListResponse(CamelModel):
    success: bool = True
    data: List[FAQResponse]
    total: Optional[int] = None


class FAQEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: FAQResponse
