"""Public properties API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from estateview.database import get_db
from estateview.exceptions import NotFoundError
from estateview.models.property import Property
from estateview.schemas.common import PaginationMeta
from estateview.schemas.property import (
    PropertyEnvelope,
    PropertyListResponse,
    PropertyResponse,
)
from estateview.services.listing_query import ListingFilters, Pagination, resolve_listing
from estateview.utils.parsing import parse_record_id

router = APIRouter()


def property_to_response(prop: Property) -> PropertyResponse:
    """Convert Property model to response schema."""
    return PropertyResponse(
        id=prop.id,
        title=prop.title,
        description=prop.description,
        bedrooms=prop.bedrooms,
        bathrooms=prop.bathrooms,
        area=prop.area,
        location=prop.location,
        city=prop.city,
        state=prop.state,
        pincode=prop.pincode,
        price=prop.price,
        price_formatted=prop.price_formatted,
        type=prop.type,
        status=prop.status,
        featured=prop.featured,
        amenities=prop.amenity_list,
        images=prop.image_list,
        created_at=prop.created_at,
        updated_at=prop.updated_at,
    )


async def get_property_or_404(db: AsyncSession, property_id: str) -> Property:
    record_id = parse_record_id(property_id)
    property_data = None
    if record_id is not None:
        result = await db.execute(select(Property).where(Property.id == record_id))
        property_data = result.scalar_one_or_none()

    if not property_data:
        raise NotFoundError.for_entity("Property")

    return property_data


@router.get("", response_model=PropertyListResponse)
async def list_properties(
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    city: Optional[str] = None,
    property_type: Optional[str] = Query(None, alias="type"),
    bedrooms: Optional[str] = None,
    search: Optional[str] = None,
    featured: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
) -> PropertyListResponse:
    """List properties with optional filters, sorting and pagination.

    Every parameter is taken as a raw string so that malformed values fall
    back to defaults instead of failing validation.
    """
    filters = ListingFilters(
        min_price=min_price,
        max_price=max_price,
        city=city,
        type=property_type,
        bedrooms=bedrooms,
        search=search,
        featured=featured,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    pagination = Pagination(page=page, limit=limit)

    result = await db.execute(select(Property).order_by(Property.id))
    listing = resolve_listing(result.scalars().all(), filters, pagination)

    return PropertyListResponse(
        data=[property_to_response(p) for p in listing.items],
        pagination=PaginationMeta(**listing.meta()),
    )


@router.get("/{property_id}", response_model=PropertyEnvelope)
async def get_property(
    property_id: str,
    db: AsyncSession = Depends(get_db),
) -> PropertyEnvelope:
    """Get property details by ID."""
    property_data = await get_property_or_404(db, property_id)
    return PropertyEnvelope(data=property_to_response(property_data))
