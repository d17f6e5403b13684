"""Public testimonials API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from estateview.database import get_db
from estateview.models.testimonial import Testimonial
from estateview.schemas.testimonial import TestimonialListResponse, TestimonialResponse
from estateview.utils.parsing import parse_flag

router = APIRouter()


def testimonials_query(featured: Optional[bool] = None):
    query = select(Testimonial)
    if featured is not None:
        query = query.where(Testimonial.featured == featured)
    return query.order_by(Testimonial.created_at.desc(), Testimonial.id.desc())


@router.get("", response_model=TestimonialListResponse, response_model_exclude_none=True)
async def list_testimonials(
    featured: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
) -> TestimonialListResponse:
    """List testimonials, newest first."""
    result = await db.execute(testimonials_query(parse_flag(featured)))
    testimonials = result.scalars().all()

    return TestimonialListResponse(
        data=[TestimonialResponse.model_validate(t) for t in testimonials],
    )
