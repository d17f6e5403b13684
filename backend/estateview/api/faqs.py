"""Public FAQ API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from estateview.database import get_db
from estateview.models.faq import FAQ
from estateview.schemas.faq import FAQListResponse, FAQResponse
from estateview.utils.parsing import parse_flag

router = APIRouter()


def faqs_query(category: Optional[str] = None, featured: Optional[bool] = None):
    query = select(FAQ)
    if category:
        query = query.where(FAQ.category == category)
    if featured is not None:
        query = query.where(FAQ.featured == featured)
    return query.order_by(FAQ.order.asc(), FAQ.id.asc())


@router.get("", response_model=FAQListResponse, response_model_exclude_none=True)
async def list_faqs(
    category: Optional[str] = None,
    featured: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
) -> FAQListResponse:
    """List FAQs in display order."""
    result = await db.execute(faqs_query(category, parse_flag(featured)))
    faqs = result.scalars().all()

    return FAQListResponse(data=[FAQResponse.model_validate(f) for f in faqs])
