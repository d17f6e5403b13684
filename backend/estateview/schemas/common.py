"""Shared response envelope schemas."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def force_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they are stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationMeta(CamelModel):
    """Pagination descriptor returned alongside a page of listings."""
    current_page: int
    total_pages: int
    total_properties: int
    has_next: bool
    has_prev: bool
    limit: int


class ErrorResponse(CamelModel):
    """Uniform error envelope."""
    success: bool = False
    message: str
    error: Optional[Any] = None
