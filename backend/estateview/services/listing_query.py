"""Listing query resolver: filter, sort and paginate property records.

Operates on an in-memory snapshot of records so the same rules apply to any
record source. Malformed filter or paging input never fails the request; it
is treated as absent and the default is used instead.
"""

import math
from datetime import datetime
from typing import Any, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from estateview.schemas.common import force_utc
from estateview.utils.parsing import parse_flag, parse_number, parse_positive_int

T = TypeVar("T")

SORT_FIELDS = ("price", "bedrooms", "created_at")
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "DESC"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().casefold()


class ListingFilters(BaseModel):
    """Property search parameters."""
    model_config = ConfigDict(frozen=True)

    min_price: Optional[float] = None
    max_price: Optional[float] = None
    city: Optional[str] = None
    type: Optional[str] = None
    bedrooms: Optional[int] = None
    search: Optional[str] = None
    featured: Optional[bool] = None
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def parse_price(cls, v):
        return parse_number(v)

    @field_validator("bedrooms", mode="before")
    @classmethod
    def parse_bedrooms(cls, v):
        return parse_positive_int(v)

    @field_validator("city", "type", "search", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("featured", mode="before")
    @classmethod
    def parse_featured(cls, v):
        return parse_flag(v)

    @field_validator("sort_by", mode="before")
    @classmethod
    def parse_sort_by(cls, v):
        return v if v in SORT_FIELDS else DEFAULT_SORT_BY

    @field_validator("sort_order", mode="before")
    @classmethod
    def parse_sort_order(cls, v):
        order = str(v or "").strip().upper()
        return order if order in ("ASC", "DESC") else DEFAULT_SORT_ORDER

    @property
    def descending(self) -> bool:
        return self.sort_order == "DESC"

    def matches(self, record: Any) -> bool:
        """True when the record satisfies every active filter."""
        if self.min_price is not None and record.price < self.min_price:
            return False
        if self.max_price is not None and record.price > self.max_price:
            return False
        if self.city is not None and _normalize(record.city) != _normalize(self.city):
            return False
        if self.type is not None and _normalize(record.type) != _normalize(self.type):
            return False
        if self.bedrooms is not None and record.bedrooms < self.bedrooms:
            return False
        if self.featured is not None and bool(record.featured) != self.featured:
            return False
        if self.search is not None:
            needle = self.search.casefold()
            haystacks = (record.title or "", record.description or "")
            if not any(needle in text.casefold() for text in haystacks):
                return False
        return True

    def sort_key(self, record: Any):
        value = getattr(record, self.sort_by)
        if isinstance(value, datetime):
            value = force_utc(value)
        return (value, record.id)


class Pagination(BaseModel):
    """Requested page; invalid values fall back to page 1 of 10."""
    model_config = ConfigDict(frozen=True)

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @field_validator("page", mode="before")
    @classmethod
    def parse_page(cls, v):
        return parse_positive_int(v) or DEFAULT_PAGE

    @field_validator("limit", mode="before")
    @classmethod
    def parse_limit(cls, v):
        return parse_positive_int(v) or DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ListingPage(BaseModel):
    """One page of matching records plus the pagination descriptor."""

    items: List[Any]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def meta(self) -> dict:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages,
            "total_properties": self.total,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
            "limit": self.limit,
        }


def resolve_listing(
    records: Sequence[T],
    filters: ListingFilters,
    pagination: Pagination,
) -> ListingPage:
    """Filter, sort and slice records for a single listing page."""
    matched = [record for record in records if filters.matches(record)]
    matched.sort(key=filters.sort_key, reverse=filters.descending)

    start = pagination.offset
    return ListingPage(
        items=matched[start:start + pagination.limit],
        total=len(matched),
        page=pagination.page,
        limit=pagination.limit,
    )
